"""Vote entity.

A vote is one user's opinion value for one question. Each user holds at
most one vote per question; voting again overwrites the earlier value.
"""

from datetime import datetime, timezone

from pydantic import Field

from predictably.domain.model.common import DomainModel
from predictably.domain.value import QuestionId, UserId


class Vote(DomainModel):
    """Vote entity."""

    user_id: UserId
    question_id: QuestionId
    value: int
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class VoteDistribution(DomainModel):
    """Number of votes cast for a single scale value."""

    value: int
    count: int = Field(ge=0)


class VoteHistogram(DomainModel):
    """Dense distribution with one bucket per scale value, zeros included."""

    buckets: list[VoteDistribution]
    total_votes: int = Field(ge=0)
    average_vote: float
