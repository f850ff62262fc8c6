from typing import Optional

import httpx
from pydantic import ValidationError

from lavajato.board.errors import (
    BoardError,
    BoardRequestError,
    OrderNotFoundError,
    StaleOrderError,
    TransitionRejectedError,
)
from lavajato.models.enums.order_status import OrderStatus
from lavajato.schemas.orders.order_schemas import OrderOut
from lavajato.utils.logger import get_logger

logger = get_logger(__name__)

STATUS_TO_ERROR = {
    404: OrderNotFoundError,
    409: StaleOrderError,
    400: TransitionRejectedError,
    422: TransitionRejectedError,
}


class OrderApiClient:
    """Async client for the service-order endpoints used by the board."""

    def __init__(
        self,
        base_url: str,
        token: str,
        *,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers={"Authorization": f"Bearer {token}"},
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        await self.close()

    async def close(self):
        await self._client.aclose()

    async def fetch_orders(self) -> list[OrderOut]:
        data = await self._request("GET", "/orders")
        if not isinstance(data, list):
            raise BoardRequestError("Malformed order list from /orders")
        try:
            return [OrderOut.model_validate(item) for item in data]
        except ValidationError as e:
            raise BoardRequestError("Malformed order in /orders response") from e

    async def update_status(self, order_id: int, status: OrderStatus, version: int) -> OrderOut:
        url = f"/orders/{order_id}"
        data = await self._request(
            "PATCH",
            url,
            order_id=order_id,
            json={"status": OrderStatus(status).value, "version": version},
        )
        if data is None:
            raise BoardRequestError(f"Empty order payload from {url}", order_id=order_id)
        try:
            return OrderOut.model_validate(data)
        except ValidationError as e:
            raise BoardRequestError(f"Malformed order payload from {url}", order_id=order_id) from e

    async def _request(self, method: str, url: str, *, order_id: Optional[int] = None, **kwargs):
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            raise BoardRequestError(f"Timeout calling {url}", order_id=order_id) from e
        except httpx.TransportError as e:
            raise BoardRequestError(f"Connection error calling {url}: {e}", order_id=order_id) from e

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        if response.is_success and body.get("success", True):
            return body.get("data")

        raise self._error_from(response.status_code, body, order_id)

    @staticmethod
    def _error_from(status_code: int, body: dict, order_id: Optional[int]) -> BoardError:
        error_cls = STATUS_TO_ERROR.get(status_code, BoardRequestError)
        return error_cls(
            body.get("message") or f"HTTP {status_code}",
            order_id=order_id,
            status_code=status_code,
            error_code=body.get("error_code"),
        )
