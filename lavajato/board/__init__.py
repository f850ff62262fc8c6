"""
Yard board client.

Keeps a local copy of the open service orders, grouped by stage, and moves
cars between stages through the orders API.
"""

from lavajato.board.api_client import OrderApiClient
from lavajato.board.column_navigator import ColumnNavigator, SWIPE_THRESHOLD_PX
from lavajato.board.errors import (
    BoardError,
    OrderNotFoundError,
    StaleOrderError,
    TransitionRejectedError,
    NoNextStageError,
    BoardRequestError,
)
from lavajato.board.kanban_board import KanbanBoard
from lavajato.board.results import TransitionSuccess, TransitionFailure, TransitionResult

__all__ = [
    "OrderApiClient",
    "KanbanBoard",
    "ColumnNavigator",
    "SWIPE_THRESHOLD_PX",
    "BoardError",
    "OrderNotFoundError",
    "StaleOrderError",
    "TransitionRejectedError",
    "NoNextStageError",
    "BoardRequestError",
    "TransitionSuccess",
    "TransitionFailure",
    "TransitionResult",
]
