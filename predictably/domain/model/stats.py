"""Derived statistics read models.

None of these are stored. They are recomputed on demand from the raw
vote and prediction records.
"""

from typing import Optional

from pydantic import Field

from predictably.domain.model.common import DomainModel
from predictably.domain.model.prediction import Prediction
from predictably.domain.model.question import Question
from predictably.domain.model.vote import Vote, VoteHistogram
from predictably.domain.value import QuestionId


class UserStats(DomainModel):
    """Aggregate performance of a single user."""

    total_votes: int = 0
    total_predictions: int = 0
    correct_predictions: int = 0
    prediction_accuracy: float = 0.0  # Percentage of correct predictions
    average_prediction_accuracy: float = 0.0  # Mean distance from actual
    current_streak: int = 0
    best_streak: int = 0
    questions_submitted: int = 0
    questions_selected: int = 0


class ClosureSummary(DomainModel):
    """Result of a closing sweep."""

    closed_count: int = 0
    closed_questions: list[QuestionId] = Field(default_factory=list)


class UserHistoryEntry(DomainModel):
    """A question the user voted on, with their participation."""

    question: Question
    my_vote: Optional[int] = None
    my_prediction: Optional[float] = None
    prediction_correct: Optional[bool] = None
    prediction_accuracy: Optional[float] = None
    vote_histogram: VoteHistogram


class QuestionDetails(DomainModel):
    """Everything known about a question, from the caller's point of view."""

    question: Question
    my_vote: Optional[int] = None
    my_prediction: Optional[float] = None
    prediction_correct: Optional[bool] = None
    prediction_accuracy: Optional[float] = None
    vote_histogram: VoteHistogram
    all_votes: list[Vote] = Field(default_factory=list)
    all_predictions: list[Prediction] = Field(default_factory=list)
