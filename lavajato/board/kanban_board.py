"""
Kanban view of the yard.

`drop` is the desktop drag-and-drop move: the card jumps to the target column
at once and snaps back if the server refuses. `advance` is the mobile button:
it waits for the server before touching local state.
"""

from typing import Optional

from lavajato.board.errors import BoardError, NoNextStageError, OrderNotFoundError
from lavajato.board.results import TransitionFailure, TransitionResult, TransitionSuccess
from lavajato.models.enums.order_status import OrderStatus
from lavajato.schemas.orders.order_schemas import OrderOut
from lavajato.services.orders.status_machine import BOARD_STAGES, next_status
from lavajato.utils.logger import get_logger

logger = get_logger(__name__)


class KanbanBoard:
    def __init__(self, api):
        self._api = api
        # fetch order is preserved; replacing a key keeps its position
        self._orders: dict[int, OrderOut] = {}
        # order id -> last server-confirmed entry while optimistic moves are pending
        self._in_flight: dict[int, OrderOut] = {}
        self._pending: dict[int, int] = {}

    # -------------------------
    # STATE
    # -------------------------
    async def refresh(self) -> bool:
        """Reload the open orders. On failure the board keeps what it had and returns False."""
        try:
            orders = await self._api.fetch_orders()
        except BoardError as e:
            logger.warning(
                "Board refresh failed",
                extra={
                    "error": type(e).__name__,
                    "status_code": e.status_code,
                    "error_code": e.error_code,
                    "detail": e.message,
                },
            )
            return False

        self._orders = {
            order.id: order
            for order in orders
            if order.status != OrderStatus.DELIVERED
        }
        logger.info("Board refreshed", extra={"orders": len(self._orders)})
        return True

    load = refresh

    @property
    def orders(self) -> list[OrderOut]:
        return [o for o in self._orders.values() if o.status != OrderStatus.DELIVERED]

    @property
    def in_flight(self) -> dict[int, OrderOut]:
        return dict(self._in_flight)

    def get(self, order_id: int) -> Optional[OrderOut]:
        return self._orders.get(order_id)

    def columns(self) -> dict[OrderStatus, list[OrderOut]]:
        return {
            stage: [o for o in self._orders.values() if o.status == stage]
            for stage in BOARD_STAGES
        }

    def _apply_server(self, order: OrderOut) -> None:
        if order.status == OrderStatus.DELIVERED:
            self._orders.pop(order.id, None)
        else:
            self._orders[order.id] = order

    # -------------------------
    # DRAG AND DROP (optimistic)
    # -------------------------
    async def drop(self, order_id: int, target: OrderStatus) -> Optional[TransitionResult]:
        """Returns None when the card was dropped back on its own column."""
        target = OrderStatus(target)
        previous = self._orders.get(order_id)

        if previous is None:
            return self._failure(
                OrderNotFoundError("Order is not on the board", order_id=order_id),
                None,
            )

        if previous.status == target:
            return None

        optimistic = previous.model_copy(update={"status": target})
        self._orders[order_id] = optimistic
        self._in_flight.setdefault(order_id, previous)
        self._pending[order_id] = self._pending.get(order_id, 0) + 1

        error: Optional[BoardError] = None
        updated: Optional[OrderOut] = None
        try:
            updated = await self._api.update_status(order_id, target, previous.version)
        except BoardError as e:
            error = e
        finally:
            confirmed = self._settle(order_id, optimistic, updated)

        if error is not None:
            return self._failure(error, confirmed)

        logger.info(
            "Order moved",
            extra={"order_id": order_id, "status": updated.status.value, "version": updated.version},
        )
        return TransitionSuccess(updated)

    def _settle(
        self, order_id: int, optimistic: OrderOut, updated: Optional[OrderOut]
    ) -> OrderOut:
        """Close one pending move and return the server-confirmed entry for the order."""
        confirmed = updated if updated is not None else self._in_flight[order_id]
        remaining = self._pending[order_id] - 1

        if remaining:
            self._pending[order_id] = remaining
            self._in_flight[order_id] = confirmed
        else:
            del self._pending[order_id]
            del self._in_flight[order_id]

        # a later pending move owns the card until it settles
        if self._orders.get(order_id) is optimistic or (updated is not None and not remaining):
            self._apply_server(confirmed)
        return confirmed

    # -------------------------
    # ADVANCE (mobile)
    # -------------------------
    async def advance(self, order_id: int) -> TransitionResult:
        current = self._orders.get(order_id)
        if current is None:
            return self._failure(
                OrderNotFoundError("Order is not on the board", order_id=order_id),
                None,
            )

        target = next_status(current.status)
        if target is None:
            return self._failure(
                NoNextStageError("Order is already delivered", order_id=order_id),
                current,
            )

        try:
            updated = await self._api.update_status(order_id, target, current.version)
        except BoardError as e:
            return self._failure(e, current)

        self._apply_server(updated)
        logger.info(
            "Order advanced",
            extra={"order_id": order_id, "status": updated.status.value, "version": updated.version},
        )
        return TransitionSuccess(updated)

    @staticmethod
    def _failure(error: BoardError, previous: Optional[OrderOut]) -> TransitionFailure:
        logger.warning(
            "Board move failed",
            extra={
                "order_id": error.order_id,
                "error": type(error).__name__,
                "status_code": error.status_code,
                "error_code": error.error_code,
            },
        )
        return TransitionFailure(error=error, previous=previous)
