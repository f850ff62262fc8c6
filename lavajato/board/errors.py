from typing import Optional


class BoardError(Exception):
    def __init__(
        self,
        message: str,
        *,
        order_id: Optional[int] = None,
        status_code: Optional[int] = None,
        error_code: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.order_id = order_id
        self.status_code = status_code
        self.error_code = error_code


class OrderNotFoundError(BoardError):
    """The order is not on the board or no longer exists on the server."""


class StaleOrderError(BoardError):
    """Someone else moved the order first; the board must refresh."""


class TransitionRejectedError(BoardError):
    """The server refused the move (illegal transition or invalid payload)."""


class NoNextStageError(BoardError):
    """DELIVERED orders cannot be advanced."""


class BoardRequestError(BoardError):
    """Network failure, timeout or unexpected server answer. Safe to retry."""
