from conftest import register


async def login(client, email, password="secret123"):
    return await client.post("/auth/login", json={"email": email, "password": password})


def bearer(resp):
    return {"Authorization": f"Bearer {resp.json()['data']['auth']['access_token']}"}


class TestRegister:
    async def test_register_returns_tokens_and_admin_user(self, client):
        resp = await client.post(
            "/auth/register",
            json={
                "car_wash_name": "Lava Oeste",
                "slug": "lava-oeste",
                "state": "SP",
                "name": "Ana",
                "email": "Ana@Oeste.com",
                "password": "secret123",
            },
        )

        data = resp.json()["data"]
        assert resp.status_code == 201
        assert data["auth"]["token_type"] == "bearer"
        assert data["user"]["username"] == "ana@oeste.com"
        assert data["user"]["role"] == "admin"

    async def test_duplicate_slug(self, client, admin_headers):
        resp = await client.post(
            "/auth/register",
            json={
                "car_wash_name": "Outro",
                "slug": "lava-centro",
                "name": "Outro Dono",
                "email": "outro@centro.com",
                "password": "secret123",
            },
        )

        assert resp.status_code == 409
        assert resp.json()["error_code"] == "CAR_WASH_SLUG_EXISTS"

    async def test_duplicate_email(self, client, admin_headers):
        resp = await client.post(
            "/auth/register",
            json={
                "car_wash_name": "Outro",
                "slug": "lava-outra",
                "name": "Outro Dono",
                "email": "dono@centro.com",
                "password": "secret123",
            },
        )

        assert resp.status_code == 409
        assert resp.json()["error_code"] == "USER_EMAIL_EXISTS"

    async def test_bad_slug_is_validation_error(self, client):
        resp = await client.post(
            "/auth/register",
            json={
                "car_wash_name": "Lava",
                "slug": "Lava Centro!",
                "name": "Dono",
                "email": "x@y.com",
                "password": "secret123",
            },
        )

        assert resp.status_code == 422


class TestSession:
    async def test_login_and_me(self, client, admin_headers):
        resp = await login(client, "DONO@centro.com")
        me = await client.get("/auth/me", headers=bearer(resp))

        assert resp.status_code == 200
        assert me.json()["data"]["car_wash"]["slug"] == "lava-centro"
        assert me.json()["data"]["role"] == "admin"

    async def test_wrong_password(self, client, admin_headers):
        resp = await login(client, "dono@centro.com", "wrong-pass")

        assert resp.status_code == 401
        assert resp.json()["error_code"] == "UNAUTHORIZED"

    async def test_refresh_rotates_token(self, client, admin_headers):
        first = await login(client, "dono@centro.com")
        refresh_token = first.json()["data"]["auth"]["refresh_token"]

        rotated = await client.post("/auth/refresh", json={"refresh_token": refresh_token})
        reused = await client.post("/auth/refresh", json={"refresh_token": refresh_token})

        assert rotated.status_code == 200
        assert rotated.json()["data"]["refresh_token"] != refresh_token
        assert reused.status_code == 401

    async def test_logout_invalidates_access_token(self, client, admin_headers):
        out = await client.post("/auth/logout", headers=admin_headers)
        after = await client.get("/auth/me", headers=admin_headers)

        assert out.status_code == 200
        assert after.status_code == 401

    async def test_garbage_token(self, client):
        resp = await client.get("/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
        assert resp.status_code == 401


class TestTeam:
    async def test_admin_adds_member_and_lists_team(self, client, admin_headers):
        created = await client.post(
            "/team",
            json={"email": "ana@centro.com", "name": "Ana", "password": "secret123", "role": "attendant"},
            headers=admin_headers,
        )
        team = await client.get("/team", headers=admin_headers)

        assert created.status_code == 201
        assert created.json()["data"]["role"] == "attendant"
        assert {m["username"] for m in team.json()["data"]} == {"dono@centro.com", "ana@centro.com"}

    async def test_unknown_role(self, client, admin_headers):
        resp = await client.post(
            "/team",
            json={"email": "ana@centro.com", "name": "Ana", "password": "secret123", "role": "owner"},
            headers=admin_headers,
        )

        assert resp.status_code == 400
        assert resp.json()["error_code"] == "USER_ROLE_INVALID"

    async def test_deactivating_member_blocks_login(self, client, admin_headers):
        created = await client.post(
            "/team",
            json={"email": "ana@centro.com", "name": "Ana", "password": "secret123", "role": "attendant"},
            headers=admin_headers,
        )
        member = created.json()["data"]

        resp = await client.patch(
            f"/team/{member['id']}",
            json={"is_active": False, "version": member["version"]},
            headers=admin_headers,
        )
        stale = await client.patch(
            f"/team/{member['id']}",
            json={"name": "Ana Maria", "version": member["version"]},
            headers=admin_headers,
        )
        blocked = await login(client, "ana@centro.com")

        assert resp.status_code == 200
        assert resp.json()["data"]["is_active"] is False
        assert stale.status_code == 409
        assert blocked.status_code == 403

    async def test_members_of_other_tenants_are_invisible(self, client, admin_headers, other_tenant_headers):
        team = await client.get("/team", headers=other_tenant_headers)
        assert [m["username"] for m in team.json()["data"]] == ["dono@norte.com"]


class TestActivityLog:
    async def test_actions_are_logged_per_tenant(self, client, seed, admin_headers, other_tenant_headers):
        order, *_ = await seed.basic_order()
        await client.patch(
            f"/orders/{order['id']}", json={"status": "WASHING", "version": 1}, headers=admin_headers
        )

        mine = (await client.get("/activities", headers=admin_headers)).json()["data"]
        theirs = (await client.get("/activities", headers=other_tenant_headers)).json()["data"]

        messages = [item["message"] for item in mine["items"]]
        assert any("AWAITING → WASHING" in m for m in messages)
        assert any("opened service order #1 for ABC1D23" in m for m in messages)
        assert all("centro" not in item["username_snapshot"] for item in theirs["items"])

    async def test_order_history_filter(self, client, seed, admin_headers):
        order, *_ = await seed.basic_order()
        await client.patch(
            f"/orders/{order['id']}", json={"status": "WASHING", "version": 1}, headers=admin_headers
        )

        resp = await client.get(
            "/activities",
            params={"order_code": order["code"], "sort_order": "asc"},
            headers=admin_headers,
        )
        moves = await client.get(
            "/activities", params={"activity_code": "UPDATE_ORDER_STATUS"}, headers=admin_headers
        )

        codes = [item["activity_code"] for item in resp.json()["data"]["items"]]
        assert codes == ["CREATE_ORDER", "UPDATE_ORDER_STATUS"]
        assert moves.json()["data"]["total"] == 1

    async def test_washers_cannot_read_the_log(self, client, admin_headers):
        await client.post(
            "/team",
            json={"email": "w@centro.com", "name": "Washer", "password": "secret123", "role": "senior_washer"},
            headers=admin_headers,
        )
        washer = bearer(await login(client, "w@centro.com"))

        resp = await client.get("/activities", headers=washer)

        assert resp.status_code == 403


async def test_register_helper_returns_usable_headers(client):
    headers = await register(client, slug="lava-teste", email="t@t.com")
    assert (await client.get("/auth/me", headers=headers)).status_code == 200
