"""
Service-order stage machine.

Stages run AWAITING → WASHING → FINISHING → READY → DELIVERED. Only forward
moves exist; DELIVERED is terminal. Skipping stages (e.g. dragging a car from
AWAITING straight to READY) is an explicit, configurable override.
"""

from typing import Optional

from lavajato.core.exceptions import InvalidStatusTransition
from lavajato.models.enums.order_status import OrderStatus

ORDER_STAGES: tuple[OrderStatus, ...] = (
    OrderStatus.AWAITING,
    OrderStatus.WASHING,
    OrderStatus.FINISHING,
    OrderStatus.READY,
    OrderStatus.DELIVERED,
)

# Columns of the yard board; delivered cars leave the board.
BOARD_STAGES: tuple[OrderStatus, ...] = ORDER_STAGES[:-1]

NEXT_STATUS: dict[OrderStatus, OrderStatus] = {
    current: following
    for current, following in zip(ORDER_STAGES, ORDER_STAGES[1:])
}


def next_status(current: OrderStatus) -> Optional[OrderStatus]:
    return NEXT_STATUS.get(OrderStatus(current))


def is_terminal(status: OrderStatus) -> bool:
    return next_status(status) is None


def allowed_transitions(current: OrderStatus, allow_skip: bool = True) -> frozenset[OrderStatus]:
    current = OrderStatus(current)
    if allow_skip:
        position = ORDER_STAGES.index(current)
        return frozenset(ORDER_STAGES[position + 1:])

    following = NEXT_STATUS.get(current)
    return frozenset({following}) if following else frozenset()


def ensure_transition(current: OrderStatus, target: OrderStatus, allow_skip: bool = True) -> None:
    if not can_transition(current, target, allow_skip):
        raise InvalidStatusTransition(current, target)


def can_transition(current: OrderStatus, target: OrderStatus, allow_skip: bool = True) -> bool:
    return OrderStatus(target) in allowed_transitions(current, allow_skip)
