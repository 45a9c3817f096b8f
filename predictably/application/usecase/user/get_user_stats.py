"""Get user stats use case."""

from pydantic import BaseModel

from predictably.application.usecase.base import BaseUseCase
from predictably.domain.model import UserStats
from predictably.domain.service import StatsService
from predictably.domain.value import UserId


class GetUserStatsRequest(BaseModel):
    """Get user stats request."""

    user_id: str


class GetUserStatsResponse(BaseModel):
    """Get user stats response."""

    user_stats: UserStats


class GetUserStatsUseCase(BaseUseCase):
    """Use case for a user's performance statistics."""

    def __init__(self, stats_service: StatsService) -> None:
        self.stats_service = stats_service

    async def execute(self, request: GetUserStatsRequest) -> GetUserStatsResponse:
        stats = await self.stats_service.compute_user_stats(UserId(request.user_id))
        return GetUserStatsResponse(user_stats=stats)
