import logging

from lavajato.core.logging import RequestContextFilter, car_wash_id_var, request_id_var


def make_record(**extra):
    record = logging.LogRecord("t", logging.INFO, __file__, 1, "msg", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestRequestContextFilter:
    def test_defaults_outside_a_request(self):
        record = make_record()

        RequestContextFilter().filter(record)

        assert record.request_id == "-"
        assert record.car_wash_id == "-"

    def test_picks_up_context_vars(self):
        rid = request_id_var.set("abc123")
        cw = car_wash_id_var.set("7")
        try:
            record = make_record()
            RequestContextFilter().filter(record)
        finally:
            car_wash_id_var.reset(cw)
            request_id_var.reset(rid)

        assert (record.request_id, record.car_wash_id) == ("abc123", "7")

    def test_explicit_tenant_wins(self):
        record = make_record(car_wash_id=3)

        RequestContextFilter().filter(record)

        assert record.car_wash_id == 3


class TestRequestId:
    async def test_incoming_request_id_is_echoed(self, client):
        resp = await client.get("/", headers={"X-Request-ID": "req-42"})
        assert resp.headers["X-Request-ID"] == "req-42"

    async def test_request_id_generated_when_missing(self, client):
        resp = await client.get("/")
        assert len(resp.headers["X-Request-ID"]) == 12
