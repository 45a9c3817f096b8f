"""Test configuration and fixtures."""

from datetime import datetime, timedelta, timezone
from typing import Optional

from predictably.domain.model import Question
from predictably.domain.value import QuestionId, UserId

# Whole seconds, so stored millisecond timestamps compare equal
NOW = datetime.now(timezone.utc).replace(microsecond=0)


def make_question(
    question_id: str = "q1",
    text: str = "Pineapple belongs on pizza",
    date: datetime = NOW,
    is_active: bool = True,
    submitted_by: Optional[str] = None,
    closing_in: Optional[timedelta] = timedelta(hours=24),
) -> Question:
    """Helper function to build test questions.

    Args:
        question_id: Question id
        text: Statement text
        date: Creation time
        is_active: Whether voting is open
        submitted_by: Submitting user id
        closing_in: Voting window from ``date``, no deadline when None

    Returns:
        Question without votes
    """
    return Question(
        id=QuestionId(question_id),
        text=text,
        date=date,
        is_active=is_active,
        submitted_by=UserId(submitted_by) if submitted_by else None,
        closing_date=date + closing_in if closing_in is not None else None,
    )
