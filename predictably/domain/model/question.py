"""Question aggregate root.

A question is a statement open for voting. It owns the running vote
aggregates from which the crowd average is derived.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field, computed_field

from predictably.domain.model.common import DomainModel
from predictably.domain.value import QuestionId, UserId


class Question(DomainModel):
    """Question aggregate root.

    Business rules:
    - The sum of vote values is stored, the average is derived from it
    - The average of a question without votes is 0
    - Voting closes once (is_active goes True -> False) and never reopens
    """

    id: QuestionId
    text: str
    date: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    total_votes: int = Field(default=0, ge=0)
    vote_sum: float = 0.0
    is_active: bool = True
    submitted_by: Optional[UserId] = None
    closing_date: Optional[datetime] = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def average_vote(self) -> float:
        """Crowd average, 0 when nobody has voted yet."""
        if self.total_votes <= 0:
            return 0.0
        return self.vote_sum / self.total_votes

    def is_expired(self, now: datetime) -> bool:
        """Whether the voting deadline has passed."""
        return self.closing_date is not None and self.closing_date <= now
