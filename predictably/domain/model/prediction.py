"""Prediction entities.

A prediction is one user's guess of the crowd average for a question.
Only the predicted value is stored. Accuracy and correctness are derived
against the question's average whenever the prediction is read, so they
move while voting stays open.
"""

from datetime import datetime, timezone

from pydantic import Field

from predictably.domain.model.common import DomainModel
from predictably.domain.value import QuestionId, UserId


class PredictionInput(DomainModel):
    """Raw prediction as submitted by a user."""

    user_id: UserId
    question_id: QuestionId
    predicted_average: float
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class Prediction(PredictionInput):
    """Prediction evaluated against the current crowd average."""

    actual_average: float
    accuracy: float = Field(ge=0)
    is_correct: bool
