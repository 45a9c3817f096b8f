"""Vote domain service."""

from datetime import datetime, timezone
from typing import Optional

import logfire

from predictably.domain.error import NotFoundError, VotingClosedError
from predictably.domain.model import Vote, VoteDistribution
from predictably.domain.repository import GameRepository
from predictably.domain.value import QuestionId, UserId
from predictably.persistence.error import TransactionConflictError

from .base import Service


class VoteService(Service):
    """Domain service for vote operations."""

    def __init__(self, game_repository: GameRepository) -> None:
        """Initialize vote service.

        Args:
            game_repository: Game repository
        """
        self.game_repository = game_repository

    async def cast_vote(
        self,
        user_id: UserId,
        question_id: QuestionId,
        value: int,
        now: Optional[datetime] = None,
    ) -> Vote:
        """Cast or replace a user's vote on a question.

        The question's totals are updated in the same transaction as the
        vote itself. The value must already be validated against the scale.

        Args:
            user_id: Voting user
            question_id: Question voted on
            value: Vote value
            now: Vote time, current time when omitted

        Returns:
            Recorded vote

        Raises:
            NotFoundError: If the question does not exist
            VotingClosedError: If voting has closed or its deadline has passed
            TransactionConflictError: If a concurrent vote touched the question
        """
        with logfire.span("cast_vote", question_id=question_id, user_id=user_id):
            question = await self.game_repository.get_question(question_id)
            if question is None:
                logfire.warn("Vote on non-existent question", question_id=question_id)
                raise NotFoundError("Question", question_id)
            now = now or datetime.now(timezone.utc)
            # The deadline binds even before the closing sweep has run
            if not question.is_active or question.is_expired(now):
                logfire.warn("Vote on closed question", question_id=question_id)
                raise VotingClosedError(question_id)

            vote = Vote(
                user_id=user_id,
                question_id=question_id,
                value=value,
                timestamp=now,
            )
            try:
                recorded = await self.game_repository.record_vote(vote)
            except TransactionConflictError:
                logfire.warn(
                    "Concurrent vote aborted", question_id=question_id, user_id=user_id
                )
                raise

            if not recorded:
                logfire.warn("Question deleted while voting", question_id=question_id)
                raise NotFoundError("Question", question_id)

            await self.game_repository.set_user_data_expiration(user_id)
            logfire.info("Vote recorded", question_id=question_id, value=value)
            return vote

    async def get_user_vote(
        self, user_id: UserId, question_id: QuestionId
    ) -> Optional[Vote]:
        """Get a user's vote on a question, None if they have not voted."""
        return await self.game_repository.get_user_vote(user_id, question_id)

    async def get_question_votes(self, question_id: QuestionId) -> list[Vote]:
        return await self.game_repository.get_question_votes(question_id)

    async def get_distribution(
        self, question_id: QuestionId
    ) -> list[VoteDistribution]:
        return await self.game_repository.get_vote_distribution(question_id)
