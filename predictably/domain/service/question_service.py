"""Question domain service."""

from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import uuid4

import logfire

from predictably.config import GameSettings
from predictably.domain.error import (
    BusinessRuleViolationError,
    NotFoundError,
    ValidationError,
)
from predictably.domain.model import Question
from predictably.domain.repository import GameRepository
from predictably.domain.value import QuestionId, UserId

from .base import Service


class QuestionService(Service):
    """Domain service for question lifecycle operations."""

    def __init__(
        self, game_repository: GameRepository, game_settings: GameSettings
    ) -> None:
        """Initialize question service.

        Args:
            game_repository: Game repository
            game_settings: Game rules
        """
        self.game_repository = game_repository
        self.game_settings = game_settings

    async def create_question(
        self,
        text: str,
        submitted_by: Optional[UserId] = None,
        ttl_hours: Optional[int] = None,
        question_id: Optional[QuestionId] = None,
        now: Optional[datetime] = None,
    ) -> Question:
        """Open a new question for voting.

        Args:
            text: Statement to vote on
            submitted_by: Submitting user, if any
            ttl_hours: Voting window, settings default when omitted
            question_id: Platform post id to reuse, generated when omitted
            now: Creation time, current time when omitted

        Returns:
            Created question

        Raises:
            ValidationError: If the text is too short or the window invalid
            BusinessRuleViolationError: If ``question_id`` is already taken
        """
        text = text.strip()
        if len(text) < self.game_settings.min_question_length:
            raise ValidationError(
                f"Question must be at least "
                f"{self.game_settings.min_question_length} characters long"
            )

        if ttl_hours is None:
            ttl_hours = self.game_settings.default_ttl_hours
        if not (
            self.game_settings.min_ttl_hours
            <= ttl_hours
            <= self.game_settings.max_ttl_hours
        ):
            raise ValidationError(
                f"Voting window must be between {self.game_settings.min_ttl_hours} "
                f"and {self.game_settings.max_ttl_hours} hours"
            )

        if question_id is not None:
            # An existing question keeps its votes, totals and closed state
            if await self.game_repository.get_question(question_id) is not None:
                raise BusinessRuleViolationError(
                    f"Question {question_id} already exists"
                )

        created_at = now or datetime.now(timezone.utc)
        question = Question(
            id=question_id or QuestionId(uuid4().hex),
            text=text,
            date=created_at,
            total_votes=0,
            vote_sum=0.0,
            is_active=True,
            submitted_by=submitted_by,
            closing_date=created_at + timedelta(hours=ttl_hours),
        )

        with logfire.span("create_question", question_id=question.id):
            await self.game_repository.create_question(question)
            logfire.info(
                "Question created",
                question_id=question.id,
                submitted_by=submitted_by,
                closing_date=question.closing_date.isoformat()
                if question.closing_date
                else None,
            )
        return question

    async def get_question(self, question_id: QuestionId) -> Optional[Question]:
        """Get question by ID.

        Returns:
            Question if found, None otherwise
        """
        return await self.game_repository.get_question(question_id)

    async def require_question(self, question_id: QuestionId) -> Question:
        """Get question by ID.

        Raises:
            NotFoundError: If the question does not exist
        """
        question = await self.game_repository.get_question(question_id)
        if question is None:
            raise NotFoundError("Question", question_id)
        return question

    async def list_questions(self) -> list[Question]:
        """List every question, newest first."""
        return await self.game_repository.list_questions()

    async def delete_question(self, question_id: QuestionId) -> None:
        """Purge a question and everything that refers to it."""
        await self.require_question(question_id)
        await self.game_repository.delete_question(question_id)
        logfire.info("Question deleted", question_id=question_id)

    async def close_question(self, question_id: QuestionId) -> bool:
        """Close voting on a question ahead of its deadline.

        Returns:
            True if voting was open and is now closed, False if already closed
        """
        question = await self.require_question(question_id)
        if not question.is_active:
            return False
        await self.game_repository.set_question_active(question_id, False)
        logfire.info("Question closed", question_id=question_id)
        return True

    async def feature_question(self, question_id: QuestionId) -> None:
        """Make a question today's question, moving the current one to yesterday."""
        await self.require_question(question_id)
        current = await self.game_repository.get_today_question_id()
        if current and current != question_id:
            await self.game_repository.set_yesterday_question_id(current)
        await self.game_repository.set_today_question_id(question_id)
        logfire.info("Question featured", question_id=question_id, previous=current)

    async def get_today_question(self) -> Optional[Question]:
        question_id = await self.game_repository.get_today_question_id()
        if question_id is None:
            return None
        return await self.game_repository.get_question(question_id)

    async def get_yesterday_question(self) -> Optional[Question]:
        question_id = await self.game_repository.get_yesterday_question_id()
        if question_id is None:
            return None
        return await self.game_repository.get_question(question_id)
