"""Domain services."""

from .base import Service
from .closing_service import ClosingService
from .identity_service import IdentityService
from .prediction_service import PredictionService
from .question_service import QuestionService
from .stats_service import StatsService
from .vote_service import VoteService

__all__ = [
    "ClosingService",
    "IdentityService",
    "PredictionService",
    "QuestionService",
    "Service",
    "StatsService",
    "VoteService",
]
