"""Closing domain service."""

from datetime import datetime, timedelta, timezone
from typing import Optional

import logfire

from predictably.domain.model import ClosureSummary
from predictably.domain.repository import GameRepository
from predictably.domain.value import QuestionId

from .base import Service


class ClosingService(Service):
    """Closes voting at each question's deadline and purges old questions.

    Stateless: both operations can be re-run at any time. A second sweep
    without new deadlines closes nothing.
    """

    def __init__(self, game_repository: GameRepository, retention_days: int) -> None:
        """Initialize closing service.

        Args:
            game_repository: Game repository
            retention_days: Days a closed question is kept before purging
        """
        self.game_repository = game_repository
        self.retention_days = retention_days

    async def close_expired_voting(
        self, now: Optional[datetime] = None
    ) -> ClosureSummary:
        """Close voting on every question whose deadline has passed."""
        now = now or datetime.now(timezone.utc)
        with logfire.span("close_expired_voting", now=now.isoformat()):
            summary = await self.game_repository.close_expired_voting(now)
            logfire.info(
                "Voting closure processed",
                closed_count=summary.closed_count,
                closed_questions=summary.closed_questions,
            )
            return summary

    async def purge_closed_questions(
        self, now: Optional[datetime] = None
    ) -> list[QuestionId]:
        """Delete questions that closed more than the retention period ago.

        Returns:
            Ids of the purged questions
        """
        now = now or datetime.now(timezone.utc)
        cutoff = now - timedelta(days=self.retention_days)
        purged: list[QuestionId] = []

        with logfire.span("purge_closed_questions", cutoff=cutoff.isoformat()):
            for question in await self.game_repository.list_questions():
                if question.is_active:
                    continue
                # Closed questions without a deadline age from their creation
                closed_at = question.closing_date or question.date
                if closed_at > cutoff:
                    continue
                await self.game_repository.delete_question(question.id)
                purged.append(question.id)

            logfire.info("Closed questions purged", purged_count=len(purged))
            return purged
