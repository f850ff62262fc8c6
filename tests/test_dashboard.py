from datetime import datetime, timezone

from conftest import move
from lavajato.services.dashboard.dashboard_service import _day_window, _month_window


class TestWindows:
    def test_day_window_is_one_utc_day(self):
        start, end = _day_window(datetime(2026, 3, 14, 18, 45, tzinfo=timezone.utc))

        assert start == datetime(2026, 3, 14, tzinfo=timezone.utc)
        assert end == datetime(2026, 3, 15, tzinfo=timezone.utc)

    def test_month_window_rolls_over_december(self):
        start, end = _month_window(datetime(2026, 12, 31, 23, 0, tzinfo=timezone.utc))

        assert start == datetime(2026, 12, 1, tzinfo=timezone.utc)
        assert end == datetime(2027, 1, 1, tzinfo=timezone.utc)


class TestDashboard:
    async def test_counts_orders_and_revenue(self, client, seed, admin_headers):
        first, customer, vehicle, service = await seed.basic_order()
        second = await seed.order(customer["id"], vehicle["id"], [service["id"]])
        third = await seed.order(customer["id"], vehicle["id"], [service["id"]])

        await move(client, admin_headers, first["id"], "DELIVERED", 1)
        await move(client, admin_headers, second["id"], "READY", 1)
        await move(client, admin_headers, third["id"], "WASHING", 1)

        resp = await client.get("/dashboard", headers=admin_headers)
        data = resp.json()["data"]

        assert resp.status_code == 200, resp.text
        assert data["orders_by_status"] == {
            "AWAITING": 0,
            "WASHING": 1,
            "FINISHING": 0,
            "READY": 1,
            "DELIVERED": 1,
        }
        assert data["orders_today"] == 3
        assert data["open_orders"] == 2
        # washing orders are not billed yet
        assert data["revenue_today"] == 90.0
        assert data["revenue_month"] == 90.0
        assert data["total_customers"] == 1
        assert data["new_customers_month"] == 1
        assert data["top_services"] == [
            {"service_id": service["id"], "name": "Lavagem simples", "times_sold": 3}
        ]
        assert [o["id"] for o in data["recent_orders"]] == [third["id"], second["id"], first["id"]]

    async def test_low_stock_and_appointments(self, client, seed, admin_headers):
        await seed.product("Cera líquida", quantity="1", reorder_point="2")
        await seed.product("Shampoo automotivo", quantity="10", reorder_point="2")
        customer = await seed.customer()
        today = datetime.now(timezone.utc).replace(hour=12, minute=0, second=0, microsecond=0)
        for scheduled_at in (today.isoformat(), "2020-01-01T10:00:00Z"):
            resp = await client.post(
                "/appointments",
                json={"customer_id": customer["id"], "scheduled_at": scheduled_at},
                headers=admin_headers,
            )
            assert resp.status_code == 201, resp.text

        data = (await client.get("/dashboard", headers=admin_headers)).json()["data"]

        assert [p["name"] for p in data["low_stock_products"]] == ["Cera líquida"]
        assert data["pending_appointments"] == 2
        assert data["appointments_today"] == 1
        assert data["revenue_today"] == 0.0
        assert data["recent_orders"] == []

    async def test_dashboard_is_per_tenant(self, client, seed, other_tenant_headers):
        await seed.basic_order()

        data = (await client.get("/dashboard", headers=other_tenant_headers)).json()["data"]

        assert data["orders_today"] == 0
        assert data["total_customers"] == 0
        assert data["top_services"] == []

    async def test_washers_cannot_see_the_dashboard(self, client, admin_headers):
        created = await client.post(
            "/team",
            json={
                "email": "lavador@centro.com",
                "name": "Lavador Júnior",
                "password": "secret123",
                "role": "junior_washer",
            },
            headers=admin_headers,
        )
        assert created.status_code == 201
        login = await client.post(
            "/auth/login",
            json={"email": "lavador@centro.com", "password": "secret123"},
        )
        washer = {"Authorization": f"Bearer {login.json()['data']['auth']['access_token']}"}

        resp = await client.get("/dashboard", headers=washer)

        assert resp.status_code == 403
