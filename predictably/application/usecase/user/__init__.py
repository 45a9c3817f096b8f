"""User use cases."""

from .get_user_history import (
    GetUserHistoryRequest,
    GetUserHistoryResponse,
    GetUserHistoryUseCase,
)
from .get_user_stats import (
    GetUserStatsRequest,
    GetUserStatsResponse,
    GetUserStatsUseCase,
)

__all__ = [
    "GetUserHistoryRequest",
    "GetUserHistoryResponse",
    "GetUserHistoryUseCase",
    "GetUserStatsRequest",
    "GetUserStatsResponse",
    "GetUserStatsUseCase",
]
