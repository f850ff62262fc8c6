from dataclasses import dataclass
from typing import Optional, Union

from lavajato.board.errors import BoardError
from lavajato.schemas.orders.order_schemas import OrderOut


@dataclass(frozen=True)
class TransitionSuccess:
    order: OrderOut
    ok: bool = True


@dataclass(frozen=True)
class TransitionFailure:
    error: BoardError
    # local entry as it was before the move; None when the order was unknown
    previous: Optional[OrderOut]
    ok: bool = False


TransitionResult = Union[TransitionSuccess, TransitionFailure]
