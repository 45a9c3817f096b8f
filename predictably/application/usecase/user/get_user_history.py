"""Get user history use case."""

from typing import Optional

from pydantic import BaseModel, Field

from predictably.application.usecase.base import BaseUseCase
from predictably.domain.model import UserHistoryEntry
from predictably.domain.service import (
    PredictionService,
    StatsService,
    VoteService,
)
from predictably.domain.repository import GameRepository
from predictably.domain.value import UserId


class GetUserHistoryRequest(BaseModel):
    """Get user history request."""

    user_id: str
    limit: Optional[int] = Field(default=None, ge=1)
    offset: int = Field(default=0, ge=0)


class GetUserHistoryResponse(BaseModel):
    """Get user history response."""

    user_history: list[UserHistoryEntry]
    total_count: int


class GetUserHistoryUseCase(BaseUseCase):
    """Use case for the questions a user voted on, with their results."""

    def __init__(
        self,
        game_repository: GameRepository,
        vote_service: VoteService,
        prediction_service: PredictionService,
        stats_service: StatsService,
    ) -> None:
        """Initialize get user history use case.

        Args:
            game_repository: Game repository, for the paged history index
            vote_service: Vote domain service
            prediction_service: Prediction domain service
            stats_service: Statistics domain service
        """
        self.game_repository = game_repository
        self.vote_service = vote_service
        self.prediction_service = prediction_service
        self.stats_service = stats_service

    async def execute(self, request: GetUserHistoryRequest) -> GetUserHistoryResponse:
        user_id = UserId(request.user_id)
        questions = await self.game_repository.get_user_history(
            user_id, limit=request.limit, offset=request.offset
        )

        entries: list[UserHistoryEntry] = []
        for question in questions:
            vote = await self.vote_service.get_user_vote(user_id, question.id)
            prediction = await self.prediction_service.get_user_prediction(
                user_id, question.id
            )
            histogram = await self.stats_service.get_histogram(question.id)
            if histogram is None:
                # Purged between the index read and now
                continue
            entries.append(
                UserHistoryEntry(
                    question=question,
                    my_vote=vote.value if vote else None,
                    my_prediction=prediction.predicted_average if prediction else None,
                    prediction_correct=prediction.is_correct if prediction else None,
                    prediction_accuracy=prediction.accuracy if prediction else None,
                    vote_histogram=histogram,
                )
            )

        return GetUserHistoryResponse(user_history=entries, total_count=len(entries))
