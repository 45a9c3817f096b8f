"""Game repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional, Sequence

from predictably.domain.model import (
    ClosureSummary,
    Prediction,
    PredictionInput,
    Question,
    Vote,
    VoteDistribution,
)
from predictably.domain.value import QuestionId, UserId


class GameRepository(ABC):
    """Repository for questions, votes and predictions.

    Owns every write to the game records and to the indices that support
    them: the per-user vote and prediction timelines, the global question
    set and the closing-time index. Read paths return None or an empty
    collection for missing records instead of raising.
    """

    # ===== Questions =====

    @abstractmethod
    async def create_question(self, question: Question) -> Question:
        """Store a question and register it in the indices.

        Re-creating an existing id overwrites its metadata.

        Args:
            question: The question to store

        Returns:
            The stored question
        """
        pass

    @abstractmethod
    async def get_question(self, question_id: QuestionId) -> Optional[Question]:
        """Find a question by ID.

        Args:
            question_id: The question's identifier

        Returns:
            The question if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_questions_by_ids(
        self, question_ids: Sequence[QuestionId]
    ) -> list[Question]:
        """Find several questions, skipping ids that do not exist.

        Args:
            question_ids: Identifiers to look up

        Returns:
            Found questions, in the order of the given ids
        """
        pass

    @abstractmethod
    async def list_questions(self) -> list[Question]:
        """List every known question, newest first."""
        pass

    @abstractmethod
    async def delete_question(self, question_id: QuestionId) -> None:
        """Purge a question with its votes, predictions and index entries.

        Every delete is attempted even if an earlier one fails.

        Args:
            question_id: The question to purge
        """
        pass

    @abstractmethod
    async def set_question_active(self, question_id: QuestionId, active: bool) -> None:
        """Set the voting-open flag of a question."""
        pass

    # ===== Featured questions =====

    @abstractmethod
    async def set_today_question_id(self, question_id: QuestionId) -> None:
        """Point today's featured question at an id and mark it selected."""
        pass

    @abstractmethod
    async def get_today_question_id(self) -> Optional[QuestionId]:
        """Get today's featured question id."""
        pass

    @abstractmethod
    async def set_yesterday_question_id(self, question_id: QuestionId) -> None:
        """Point yesterday's featured question at an id."""
        pass

    @abstractmethod
    async def get_yesterday_question_id(self) -> Optional[QuestionId]:
        """Get yesterday's featured question id."""
        pass

    # ===== Votes =====

    @abstractmethod
    async def record_vote(self, vote: Vote) -> bool:
        """Store a vote and update the question's running totals.

        The vote and the totals are written in one optimistic transaction
        watching the question's vote map and metadata. A concurrent write to
        either aborts the transaction.

        Args:
            vote: The vote to store

        Returns:
            False without writing anything if the question no longer exists

        Raises:
            TransactionConflictError: If a watched key changed
        """
        pass

    @abstractmethod
    async def recompute_vote_totals(self, question_id: QuestionId) -> Question | None:
        """Rebuild a question's totals from its full vote map.

        Args:
            question_id: The question to repair

        Returns:
            The repaired question, None if it does not exist
        """
        pass

    @abstractmethod
    async def get_user_vote(
        self, user_id: UserId, question_id: QuestionId
    ) -> Optional[Vote]:
        """Find a user's vote on a question.

        Returns:
            The vote if both the vote and the question exist, None otherwise
        """
        pass

    @abstractmethod
    async def get_question_votes(self, question_id: QuestionId) -> list[Vote]:
        """List every vote on a question."""
        pass

    @abstractmethod
    async def get_vote_distribution(
        self, question_id: QuestionId
    ) -> list[VoteDistribution]:
        """Count votes per value, only for values that received votes.

        Returns:
            Distribution entries sorted by ascending value
        """
        pass

    @abstractmethod
    async def get_user_votes(self, user_id: UserId) -> dict[QuestionId, int]:
        """Map every question the user voted on to their vote value."""
        pass

    @abstractmethod
    async def get_user_history(
        self,
        user_id: UserId,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[Question]:
        """Page through the questions a user voted on, oldest vote first.

        Args:
            user_id: The user's ID
            limit: Maximum number of questions, all when omitted
            offset: Number of questions to skip

        Returns:
            Questions that still exist, in vote order
        """
        pass

    # ===== Predictions =====

    @abstractmethod
    async def record_prediction(self, prediction: PredictionInput) -> None:
        """Store a prediction and append it to the user's timeline."""
        pass

    @abstractmethod
    async def get_user_prediction(
        self, user_id: UserId, question_id: QuestionId
    ) -> Optional[Prediction]:
        """Find a user's prediction, evaluated against the current average.

        Returns:
            The evaluated prediction if both it and the question exist
        """
        pass

    @abstractmethod
    async def get_question_predictions(
        self, question_id: QuestionId
    ) -> list[Prediction]:
        """List every prediction on a question, evaluated live."""
        pass

    @abstractmethod
    async def get_user_predictions(self, user_id: UserId) -> dict[QuestionId, float]:
        """Map every question the user predicted on to the predicted value.

        Iteration order is the storage order of the underlying map.
        """
        pass

    @abstractmethod
    async def get_user_prediction_timeline(self, user_id: UserId) -> list[QuestionId]:
        """Question ids the user predicted on, oldest prediction first."""
        pass

    # ===== Users =====

    @abstractmethod
    async def get_user_submissions(self, user_id: UserId) -> set[QuestionId]:
        """Ids of the questions a user submitted."""
        pass

    @abstractmethod
    async def get_selected_question_ids(self) -> set[QuestionId]:
        """Ids of every question that has been featured."""
        pass

    @abstractmethod
    async def set_user_data_expiration(
        self, user_id: UserId, days: Optional[int] = None
    ) -> None:
        """Expire a user's personal records after a period of inactivity.

        Args:
            user_id: The user's ID
            days: Time to live, repository default when omitted
        """
        pass

    # ===== Closing =====

    @abstractmethod
    async def close_expired_voting(self, now: datetime) -> ClosureSummary:
        """Close voting on every question whose deadline has passed.

        Processed entries leave the closing index whether or not the
        question was still active, so each deadline is handled once.

        Args:
            now: Reference time

        Returns:
            Questions closed by this sweep
        """
        pass
