from urllib.parse import unquote

from conftest import Seed, move, register


class TestCreateOrder:
    async def test_new_order_is_awaiting_with_snapshot_and_total(self, seed):
        customer = await seed.customer()
        vehicle = await seed.vehicle(customer["id"])
        wash = await seed.service("Lavagem simples", "45.00")
        wax = await seed.service("Cera", "30.50")

        order = await seed.order(customer["id"], vehicle["id"], [wash["id"], wax["id"]])

        assert order["status"] == "AWAITING"
        assert order["version"] == 1
        assert order["code"] == 1
        assert order["total"] == 75.5
        assert [i["service_name"] for i in order["items"]] == ["Lavagem simples", "Cera"]
        assert order["vehicle"]["plate"] == "ABC1D23"
        assert order["customer"]["name"] == "João da Silva"

    async def test_codes_are_sequential_per_car_wash(self, client, seed, other_tenant_headers):
        first, *_ = await seed.basic_order()
        customer = await seed.customer("Carla")
        vehicle = await seed.vehicle(customer["id"], plate="XYZ9A88")
        second = await seed.order(customer["id"], vehicle["id"], [first["items"][0]["service_id"]])

        other, *_ = await Seed(client, other_tenant_headers).basic_order()

        assert (first["code"], second["code"]) == (1, 2)
        assert other["code"] == 1

    async def test_vehicle_must_belong_to_customer(self, client, seed, admin_headers):
        owner = await seed.customer("Dono")
        vehicle = await seed.vehicle(owner["id"])
        stranger = await seed.customer("Outro")
        service = await seed.service()

        resp = await client.post(
            "/orders",
            json={
                "customer_id": stranger["id"],
                "vehicle_id": vehicle["id"],
                "service_ids": [service["id"]],
            },
            headers=admin_headers,
        )

        assert resp.status_code == 400
        assert resp.json()["success"] is False

    async def test_unknown_service_is_reported(self, client, seed, admin_headers):
        customer = await seed.customer()
        vehicle = await seed.vehicle(customer["id"])

        resp = await client.post(
            "/orders",
            json={"customer_id": customer["id"], "vehicle_id": vehicle["id"], "service_ids": [999]},
            headers=admin_headers,
        )

        body = resp.json()
        assert resp.status_code == 404
        assert body["error_code"] == "SERVICE_NOT_FOUND"
        assert body["details"] == {"service_ids": [999]}

    async def test_at_least_one_service_required(self, client, seed, admin_headers):
        customer = await seed.customer()
        vehicle = await seed.vehicle(customer["id"])

        resp = await client.post(
            "/orders",
            json={"customer_id": customer["id"], "vehicle_id": vehicle["id"], "service_ids": []},
            headers=admin_headers,
        )

        assert resp.status_code == 422
        assert resp.json()["error_code"] == "VALIDATION_ERROR"


class TestStatusUpdate:
    async def test_patch_moves_and_bumps_version(self, client, seed, admin_headers):
        order, *_ = await seed.basic_order()

        resp = await move(client, admin_headers, order["id"], "WASHING", 1)

        body = resp.json()
        assert resp.status_code == 200
        assert body["data"]["status"] == "WASHING"
        assert body["data"]["version"] == 2
        assert body["data"]["total"] == order["total"]
        assert body["data"]["items"] == order["items"]

    async def test_stale_version_is_a_conflict(self, client, seed, admin_headers):
        order, *_ = await seed.basic_order()
        await move(client, admin_headers, order["id"], "WASHING", 1)

        resp = await move(client, admin_headers, order["id"], "FINISHING", 1)

        body = resp.json()
        assert resp.status_code == 409
        assert body["error_code"] == "ORDER_VERSION_CONFLICT"
        assert body["details"]["current_version"] == 2

    async def test_backward_move_rejected(self, client, seed, admin_headers):
        order, *_ = await seed.basic_order()
        await move(client, admin_headers, order["id"], "WASHING", 1)

        resp = await move(client, admin_headers, order["id"], "AWAITING", 2)

        body = resp.json()
        assert resp.status_code == 400
        assert body["error_code"] == "ORDER_INVALID_TRANSITION"
        assert body["details"] == {"current_status": "WASHING", "target_status": "AWAITING"}

    async def test_same_status_rejected(self, client, seed, admin_headers):
        order, *_ = await seed.basic_order()

        resp = await move(client, admin_headers, order["id"], "AWAITING", 1)

        assert resp.status_code == 400
        assert resp.json()["error_code"] == "ORDER_INVALID_TRANSITION"

    async def test_unknown_status_is_validation_error(self, client, seed, admin_headers):
        order, *_ = await seed.basic_order()

        resp = await move(client, admin_headers, order["id"], "PARKED", 1)

        assert resp.status_code == 422

    async def test_delivered_sets_finished_at_and_credits_loyalty(self, client, seed, admin_headers):
        order, customer, *_ = await seed.basic_order()

        resp = await move(client, admin_headers, order["id"], "DELIVERED", 1)
        delivered = resp.json()["data"]

        assert delivered["status"] == "DELIVERED"
        assert delivered["finished_at"] is not None

        customer_resp = await client.get(f"/customers/{customer['id']}", headers=admin_headers)
        # 45.00 / 10 -> 4 points
        assert customer_resp.json()["data"]["loyalty_points"] == 4

        again = await move(client, admin_headers, order["id"], "READY", 2)
        assert again.status_code == 400

    async def test_finishing_deducts_stock(self, client, seed, admin_headers):
        product = await seed.product(quantity="10")
        service = await seed.service(
            usages=[{"product_id": product["id"], "quantity": "0.5"}],
        )
        customer = await seed.customer()
        vehicle = await seed.vehicle(customer["id"])
        order = await seed.order(customer["id"], vehicle["id"], [service["id"], service["id"]])

        resp = await move(client, admin_headers, order["id"], "FINISHING", 1)
        assert resp.status_code == 200

        products = (await client.get("/products", headers=admin_headers)).json()["data"]
        assert products[0]["quantity"] == 9.0

    async def test_other_tenant_order_is_not_found(self, client, seed, other_tenant_headers):
        order, *_ = await seed.basic_order()

        get_resp = await client.get(f"/orders/{order['id']}", headers=other_tenant_headers)
        patch_resp = await move(client, other_tenant_headers, order["id"], "WASHING", 1)

        assert get_resp.status_code == 404
        assert get_resp.json()["error_code"] == "ORDER_NOT_FOUND"
        assert patch_resp.status_code == 404

    async def test_missing_token_rejected(self, client, seed):
        order, *_ = await seed.basic_order()

        resp = await client.patch(f"/orders/{order['id']}", json={"status": "WASHING", "version": 1})

        assert resp.status_code == 422


class TestListingAndBoard:
    async def test_board_has_four_columns_without_delivered(self, client, seed, admin_headers):
        delivered, *_ = await seed.basic_order()
        customer = await seed.customer("Pedro")
        vehicle = await seed.vehicle(customer["id"], plate="QWE4R56")
        washing = await seed.order(customer["id"], vehicle["id"], [delivered["items"][0]["service_id"]])

        await move(client, admin_headers, delivered["id"], "DELIVERED", 1)
        await move(client, admin_headers, washing["id"], "WASHING", 1)

        board = (await client.get("/orders/board", headers=admin_headers)).json()["data"]
        columns = {c["status"]: [o["id"] for o in c["orders"]] for c in board["columns"]}

        assert list(columns) == ["AWAITING", "WASHING", "FINISHING", "READY"]
        assert columns["WASHING"] == [washing["id"]]
        assert all(delivered["id"] not in ids for ids in columns.values())

    async def test_list_filters(self, client, seed, admin_headers):
        order, *_ = await seed.basic_order()
        await move(client, admin_headers, order["id"], "DELIVERED", 1)

        everything = (await client.get("/orders", headers=admin_headers)).json()["data"]
        open_only = (
            await client.get("/orders", params={"include_delivered": "false"}, headers=admin_headers)
        ).json()["data"]
        delivered = (
            await client.get("/orders", params={"status": "DELIVERED"}, headers=admin_headers)
        ).json()["data"]

        assert [o["id"] for o in everything] == [order["id"]]
        assert open_only == []
        assert [o["id"] for o in delivered] == [order["id"]]

    async def test_delete_order(self, client, seed, admin_headers):
        order, *_ = await seed.basic_order()

        resp = await client.delete(f"/orders/{order['id']}", headers=admin_headers)
        assert resp.status_code == 200
        assert resp.json()["data"]["code"] == order["code"]

        gone = await client.get(f"/orders/{order['id']}", headers=admin_headers)
        assert gone.status_code == 404


class TestNotificationLinks:
    async def test_notify_link_only_when_ready(self, client, seed, admin_headers):
        order, *_ = await seed.basic_order()

        early = await client.get(f"/orders/{order['id']}/notify-link", headers=admin_headers)
        assert early.status_code == 400
        assert early.json()["error_code"] == "ORDER_NOTIFICATION_NOT_ALLOWED"

        await move(client, admin_headers, order["id"], "READY", 1)
        resp = await client.get(f"/orders/{order['id']}/notify-link", headers=admin_headers)

        link = resp.json()["data"]
        assert link["url"].startswith("https://wa.me/5511987654321?text=")
        assert "João" in link["message"]
        assert "ABC1D23" in unquote(link["url"])

    async def test_summary_link_names_the_car_wash(self, client, seed, admin_headers):
        order, *_ = await seed.basic_order()

        resp = await client.get(f"/orders/{order['id']}/summary-link", headers=admin_headers)

        message = resp.json()["data"]["message"]
        assert resp.status_code == 200
        assert f"#{order['code']}" in message
        assert "Lava Centro" in message


class TestPermissions:
    async def test_junior_washer_moves_cars_but_cannot_open_orders(self, client, seed, admin_headers):
        order, customer, vehicle, service = await seed.basic_order()
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

        moved = await move(client, washer, order["id"], "WASHING", 1)
        assert moved.status_code == 200

        denied = await client.post(
            "/orders",
            json={
                "customer_id": customer["id"],
                "vehicle_id": vehicle["id"],
                "service_ids": [service["id"]],
            },
            headers=washer,
        )
        assert denied.status_code == 403
        assert denied.json()["error_code"] == "PERMISSION_DENIED"


async def test_register_second_tenant_isolated(client):
    headers = await register(client, slug="lava-sul", email="dono@sul.com")
    resp = await client.get("/orders", headers=headers)
    assert resp.json()["data"] == []
