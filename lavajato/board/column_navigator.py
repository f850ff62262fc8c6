from typing import Sequence

from lavajato.models.enums.order_status import OrderStatus
from lavajato.services.orders.status_machine import BOARD_STAGES

SWIPE_THRESHOLD_PX = 50


class ColumnNavigator:
    """One board column visible at a time, changed by horizontal swipes."""

    def __init__(self, columns: Sequence[OrderStatus] = BOARD_STAGES, start: int = 0):
        if not columns:
            raise ValueError("columns must not be empty")
        if not 0 <= start < len(columns):
            raise ValueError("start index out of range")
        self.columns = tuple(columns)
        self.index = start

    @property
    def active(self) -> OrderStatus:
        return self.columns[self.index]

    def select(self, status: OrderStatus) -> None:
        self.index = self.columns.index(OrderStatus(status))

    def swipe_left(self) -> bool:
        if self.index == 0:
            return False
        self.index -= 1
        return True

    def swipe_right(self) -> bool:
        if self.index == len(self.columns) - 1:
            return False
        self.index += 1
        return True

    def swipe(self, start_x: float, end_x: float) -> bool:
        """Returns True when the active column changed."""
        delta = end_x - start_x
        if abs(delta) <= SWIPE_THRESHOLD_PX:
            return False
        return self.swipe_right() if delta > 0 else self.swipe_left()
