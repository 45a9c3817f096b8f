"""Scheduled job routes.

Called by the platform scheduler, never by players.
"""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from predictably.application.usecase.job import (
    CleanupRequest,
    CleanupResponse,
    CleanupUseCase,
    CloseVotingRequest,
    CloseVotingResponse,
    CloseVotingUseCase,
)

router = APIRouter(prefix="/internal/jobs", tags=["jobs"], route_class=DishkaRoute)


@router.post("/close-voting", response_model=CloseVotingResponse)
async def close_voting(
    close_voting_use_case: FromDishka[CloseVotingUseCase],
) -> CloseVotingResponse:
    """Close voting on every question past its deadline."""
    return await close_voting_use_case.execute(CloseVotingRequest())


@router.post("/cleanup", response_model=CleanupResponse)
async def cleanup(cleanup_use_case: FromDishka[CleanupUseCase]) -> CleanupResponse:
    """Purge questions closed longer than the retention period."""
    return await cleanup_use_case.execute(CleanupRequest())
