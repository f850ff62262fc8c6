from conftest import move


async def customer_with_points(client, seed, headers, deliveries=1):
    """Every delivered 120.00 wash credits 12 points."""
    customer = await seed.customer()
    vehicle = await seed.vehicle(customer["id"])
    service = await seed.service("Lavagem completa", price="120.00")
    for _ in range(deliveries):
        order = await seed.order(customer["id"], vehicle["id"], [service["id"]])
        resp = await move(client, headers, order["id"], "DELIVERED", 1)
        assert resp.status_code == 200, resp.text
    return customer


async def redeem(client, headers, customer_id, version, rewards=1):
    return await client.post(
        f"/customers/{customer_id}/loyalty/redeem",
        json={"rewards": rewards, "version": version},
        headers=headers,
    )


class TestLoyaltyCard:
    async def test_card_reports_progress_to_next_reward(self, client, seed, admin_headers):
        customer = await customer_with_points(client, seed, admin_headers)

        resp = await client.get(f"/customers/{customer['id']}/loyalty", headers=admin_headers)
        card = resp.json()["data"]

        assert resp.status_code == 200
        assert card == {
            "customer_id": customer["id"],
            "loyalty_points": 12,
            "reward_points": 10,
            "rewards_available": 1,
            "points_to_next_reward": 8,
            "version": 1,
        }

    async def test_card_is_per_tenant(self, client, seed, other_tenant_headers):
        customer = await seed.customer()

        resp = await client.get(f"/customers/{customer['id']}/loyalty", headers=other_tenant_headers)

        assert resp.status_code == 404
        assert resp.json()["error_code"] == "CUSTOMER_NOT_FOUND"


class TestRedeem:
    async def test_redeem_spends_points_and_bumps_version(self, client, seed, admin_headers):
        customer = await customer_with_points(client, seed, admin_headers, deliveries=2)

        resp = await redeem(client, admin_headers, customer["id"], version=1, rewards=2)
        card = resp.json()["data"]

        assert resp.status_code == 200, resp.text
        assert card["loyalty_points"] == 4
        assert card["rewards_available"] == 0
        assert card["version"] == 2

        activities = await client.get(
            "/activities", params={"activity_code": "REDEEM_LOYALTY"}, headers=admin_headers
        )
        items = activities.json()["data"]["items"]
        assert len(items) == 1
        assert "redeemed 20 loyalty points for João da Silva" in items[0]["message"]

    async def test_not_enough_points(self, client, seed, admin_headers):
        customer = await customer_with_points(client, seed, admin_headers)

        resp = await redeem(client, admin_headers, customer["id"], version=1, rewards=2)

        assert resp.status_code == 400
        assert resp.json()["error_code"] == "LOYALTY_INSUFFICIENT_POINTS"
        assert resp.json()["details"] == {"required_points": 20, "current_points": 12}

        card = await client.get(f"/customers/{customer['id']}/loyalty", headers=admin_headers)
        assert card.json()["data"]["loyalty_points"] == 12

    async def test_second_redeem_with_same_version_conflicts(self, client, seed, admin_headers):
        customer = await customer_with_points(client, seed, admin_headers, deliveries=2)

        first = await redeem(client, admin_headers, customer["id"], version=1)
        second = await redeem(client, admin_headers, customer["id"], version=1)

        assert first.status_code == 200
        assert second.status_code == 409
        assert second.json()["error_code"] == "CUSTOMER_VERSION_CONFLICT"
        assert second.json()["details"] == {"current_version": 2}

    async def test_rewards_must_be_positive(self, client, seed, admin_headers):
        customer = await seed.customer()

        resp = await redeem(client, admin_headers, customer["id"], version=1, rewards=0)

        assert resp.status_code == 422
