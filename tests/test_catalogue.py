from conftest import move


class TestCustomers:
    async def test_update_with_version(self, client, seed, admin_headers):
        customer = await seed.customer()

        updated = await client.patch(
            f"/customers/{customer['id']}",
            json={"phone": "(11) 91111-2222", "version": 1},
            headers=admin_headers,
        )
        stale = await client.patch(
            f"/customers/{customer['id']}",
            json={"name": "João S.", "version": 1},
            headers=admin_headers,
        )

        assert updated.json()["data"]["phone"] == "(11) 91111-2222"
        assert updated.json()["data"]["version"] == 2
        assert stale.status_code == 409
        assert stale.json()["error_code"] == "CUSTOMER_VERSION_CONFLICT"

    async def test_search_and_paging(self, client, seed, admin_headers):
        await seed.customer("Ana Lima", "(11) 90000-0001")
        await seed.customer("Bruno Costa", "(21) 90000-0002")
        await seed.customer("Ana Souza", "(31) 90000-0003")

        found = await client.get("/customers", params={"search": "ana"}, headers=admin_headers)
        page = await client.get("/customers", params={"page": 2, "page_size": 2}, headers=admin_headers)

        assert found.json()["data"]["total"] == 2
        assert [c["name"] for c in found.json()["data"]["items"]] == ["Ana Lima", "Ana Souza"]
        assert [c["name"] for c in page.json()["data"]["items"]] == ["Bruno Costa"]

    async def test_customers_are_per_tenant(self, client, seed, other_tenant_headers):
        customer = await seed.customer()

        resp = await client.get(f"/customers/{customer['id']}", headers=other_tenant_headers)

        assert resp.status_code == 404
        assert resp.json()["error_code"] == "CUSTOMER_NOT_FOUND"


class TestVehicles:
    async def test_plate_is_normalized(self, seed):
        customer = await seed.customer()
        vehicle = await seed.vehicle(customer["id"], plate="abc 1d23")
        assert vehicle["plate"] == "ABC1D23"

    async def test_duplicate_plate(self, client, seed, admin_headers):
        customer = await seed.customer()
        await seed.vehicle(customer["id"])

        resp = await client.post(
            "/vehicles",
            json={"customer_id": customer["id"], "plate": "ABC1D23", "model": "Uno"},
            headers=admin_headers,
        )

        assert resp.status_code == 409
        assert resp.json()["error_code"] == "VEHICLE_PLATE_EXISTS"

    async def test_same_plate_allowed_in_another_car_wash(self, client, seed, other_tenant_headers):
        customer = await seed.customer()
        await seed.vehicle(customer["id"])
        other = (
            await client.post(
                "/customers", json={"name": "Maria"}, headers=other_tenant_headers
            )
        ).json()["data"]

        resp = await client.post(
            "/vehicles",
            json={"customer_id": other["id"], "plate": "ABC1D23", "model": "Uno"},
            headers=other_tenant_headers,
        )

        assert resp.status_code == 201

    async def test_list_by_customer(self, client, seed, admin_headers):
        first = await seed.customer("Ana Lima")
        second = await seed.customer("Bruno Costa")
        await seed.vehicle(first["id"], plate="AAA1A11")
        await seed.vehicle(second["id"], plate="BBB2B22")

        resp = await client.get("/vehicles", params={"customer_id": first["id"]}, headers=admin_headers)

        assert [v["plate"] for v in resp.json()["data"]] == ["AAA1A11"]


class TestServicesAndStock:
    async def test_service_with_product_usage(self, seed):
        product = await seed.product()
        service = await seed.service(usages=[{"product_id": product["id"], "quantity": "0.25"}])

        assert service["price"] == 45.0
        assert service["product_usages"] == [
            {"product_id": product["id"], "product_name": "Shampoo automotivo", "unit": "L", "quantity": 0.25}
        ]

    async def test_duplicate_service_name(self, client, seed, admin_headers):
        await seed.service()

        resp = await client.post(
            "/services", json={"name": "Lavagem simples", "price": "50"}, headers=admin_headers
        )

        assert resp.status_code == 409

    async def test_unknown_product_in_usage(self, client, admin_headers):
        resp = await client.post(
            "/services",
            json={"name": "Polimento", "price": "120", "product_usages": [{"product_id": 42, "quantity": "1"}]},
            headers=admin_headers,
        )

        assert resp.status_code == 404
        assert resp.json()["error_code"] == "PRODUCT_NOT_FOUND"

    async def test_replace_usages_and_deactivate(self, client, seed, admin_headers):
        shampoo = await seed.product()
        wax = await seed.product(name="Cera", unit="kg")
        service = await seed.service(usages=[{"product_id": shampoo["id"], "quantity": "0.5"}])

        resp = await client.patch(
            f"/services/{service['id']}",
            json={"is_active": False, "product_usages": [{"product_id": wax["id"], "quantity": "0.1"}]},
            headers=admin_headers,
        )
        active = await client.get("/services", headers=admin_headers)

        data = resp.json()["data"]
        assert data["is_active"] is False
        assert [u["product_name"] for u in data["product_usages"]] == ["Cera"]
        assert active.json()["data"] == []

    async def test_adjust_and_low_stock(self, client, seed, admin_headers):
        product = await seed.product(quantity="3", reorder_point="2")

        resp = await client.post(
            f"/products/{product['id']}/adjust",
            json={"delta": "-1.5", "reason": "Perda"},
            headers=admin_headers,
        )
        low = await client.get("/products/low-stock", headers=admin_headers)

        assert resp.json()["data"]["quantity"] == 1.5
        assert resp.json()["data"]["low_stock"] is True
        assert [p["id"] for p in low.json()["data"]] == [product["id"]]

    async def test_zero_adjustment_rejected(self, client, seed, admin_headers):
        product = await seed.product()

        resp = await client.post(
            f"/products/{product['id']}/adjust",
            json={"delta": "0", "reason": "nada"},
            headers=admin_headers,
        )

        assert resp.status_code == 422


class TestAppointments:
    async def book(self, client, headers, customer_id, vehicle_id=None):
        resp = await client.post(
            "/appointments",
            json={
                "customer_id": customer_id,
                "vehicle_id": vehicle_id,
                "scheduled_at": "2026-03-14T10:00:00Z",
            },
            headers=headers,
        )
        assert resp.status_code == 201, resp.text
        return resp.json()["data"]

    async def test_status_flow(self, client, seed, admin_headers):
        customer = await seed.customer()
        appointment = await self.book(client, admin_headers, customer["id"])

        confirmed = await client.patch(
            f"/appointments/{appointment['id']}/status", json={"status": "CONFIRMED"}, headers=admin_headers
        )
        skipped = await client.patch(
            f"/appointments/{appointment['id']}/status", json={"status": "COMPLETED"}, headers=admin_headers
        )

        assert appointment["status"] == "PENDING"
        assert confirmed.json()["data"]["status"] == "CONFIRMED"
        assert skipped.status_code == 400
        assert skipped.json()["error_code"] == "APPOINTMENT_INVALID_STATE"

    async def test_vehicle_of_another_customer(self, client, seed, admin_headers):
        owner = await seed.customer("Dono")
        vehicle = await seed.vehicle(owner["id"])
        other = await seed.customer("Outro")

        resp = await client.post(
            "/appointments",
            json={"customer_id": other["id"], "vehicle_id": vehicle["id"], "scheduled_at": "2026-03-14T10:00:00Z"},
            headers=admin_headers,
        )

        assert resp.status_code == 400

    async def test_order_drives_linked_appointment(self, client, seed, admin_headers):
        customer = await seed.customer()
        vehicle = await seed.vehicle(customer["id"])
        service = await seed.service()
        appointment = await self.book(client, admin_headers, customer["id"], vehicle["id"])

        order = await seed.order(
            customer["id"], vehicle["id"], [service["id"]], appointment_id=appointment["id"]
        )
        opened = (await client.get("/appointments", headers=admin_headers)).json()["data"]

        await move(client, admin_headers, order["id"], "READY", 1)
        ready = (await client.get("/appointments", headers=admin_headers)).json()["data"]

        assert order["appointment_id"] == appointment["id"]
        assert opened[0]["status"] == "IN_PROGRESS"
        assert ready[0]["status"] == "COMPLETED"
