import os

# configuration is read at import time
os.environ["APP_ENV"] = "development"
os.environ["DB_TYPE"] = "sqlite"
os.environ.setdefault("JWT_ACCESS_SECRET_KEY", "test-secret-key")
os.environ["OPENAI_API_KEY"] = ""
os.environ["ORDER_ALLOW_STAGE_SKIP"] = "true"
os.environ["LOYALTY_POINTS_DIVISOR"] = "10"

import httpx
import pytest

from main import app
from lavajato.core.db import Database


@pytest.fixture
async def database(tmp_path):
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture
async def client(database):
    # ASGITransport does not run the lifespan
    app.state.database = database
    app.state.llm = None
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


async def register(client, slug="lava-centro", email="dono@centro.com", name="Lava Centro"):
    resp = await client.post(
        "/auth/register",
        json={
            "car_wash_name": name,
            "slug": slug,
            "phone": "11 3333-4444",
            "city": "São Paulo",
            "state": "SP",
            "name": "Dono Centro",
            "email": email,
            "password": "secret123",
        },
    )
    assert resp.status_code == 201, resp.text
    token = resp.json()["data"]["auth"]["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def admin_headers(client):
    return await register(client)


@pytest.fixture
async def other_tenant_headers(client):
    return await register(client, slug="lava-norte", email="dono@norte.com", name="Lava Norte")


class Seed:
    """Creates catalogue and customer data through the public API."""

    def __init__(self, client, headers):
        self.client = client
        self.headers = headers

    async def post(self, url, payload):
        resp = await self.client.post(url, json=payload, headers=self.headers)
        assert resp.status_code in (200, 201), resp.text
        return resp.json()["data"]

    async def customer(self, name="João da Silva", phone="(11) 98765-4321"):
        return await self.post("/customers", {"name": name, "phone": phone})

    async def vehicle(self, customer_id, plate="abc1d23", model="Gol", color="Prata"):
        return await self.post(
            "/vehicles",
            {"customer_id": customer_id, "plate": plate, "model": model, "color": color},
        )

    async def product(self, name="Shampoo automotivo", quantity="10", reorder_point="2", unit="L"):
        return await self.post(
            "/products",
            {"name": name, "unit": unit, "quantity": quantity, "reorder_point": reorder_point},
        )

    async def service(self, name="Lavagem simples", price="45.00", usages=None):
        return await self.post(
            "/services",
            {"name": name, "price": price, "product_usages": usages or []},
        )

    async def order(self, customer_id, vehicle_id, service_ids, **extra):
        return await self.post(
            "/orders",
            {
                "customer_id": customer_id,
                "vehicle_id": vehicle_id,
                "service_ids": service_ids,
                **extra,
            },
        )

    async def basic_order(self, plate="abc1d23"):
        customer = await self.customer()
        vehicle = await self.vehicle(customer["id"], plate=plate)
        service = await self.service()
        order = await self.order(customer["id"], vehicle["id"], [service["id"]])
        return order, customer, vehicle, service


@pytest.fixture
def seed(client, admin_headers):
    return Seed(client, admin_headers)


async def move(client, headers, order_id, status, version):
    return await client.patch(
        f"/orders/{order_id}",
        json={"status": status, "version": version},
        headers=headers,
    )
