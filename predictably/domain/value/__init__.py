"""Domain value objects for the prediction game."""

from predictably.domain.value.identifiers import QuestionId, UserId
from predictably.domain.value.types import PredictionScore, Scale

__all__ = [
    # Identifiers
    "QuestionId",
    "UserId",
    # Types
    "PredictionScore",
    "Scale",
]
