"""Domain model entities for the prediction game."""

from predictably.domain.model.prediction import Prediction, PredictionInput
from predictably.domain.model.question import Question
from predictably.domain.model.stats import (
    ClosureSummary,
    QuestionDetails,
    UserHistoryEntry,
    UserStats,
)
from predictably.domain.model.vote import Vote, VoteDistribution, VoteHistogram

__all__ = [
    "Question",
    "Vote",
    "VoteDistribution",
    "VoteHistogram",
    "PredictionInput",
    "Prediction",
    "UserStats",
    "ClosureSummary",
    "UserHistoryEntry",
    "QuestionDetails",
]
