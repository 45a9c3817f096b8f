"""User routes."""

from typing import Optional

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, Query, Request, status

from predictably.application.usecase.user import (
    GetUserHistoryRequest,
    GetUserHistoryResponse,
    GetUserHistoryUseCase,
    GetUserStatsRequest,
    GetUserStatsResponse,
    GetUserStatsUseCase,
)
from predictably.domain.service import IdentityService

router = APIRouter(prefix="/api", tags=["users"], route_class=DishkaRoute)


@router.get("/my-history", response_model=GetUserHistoryResponse)
async def get_my_history(
    request: Request,
    get_user_history_use_case: FromDishka[GetUserHistoryUseCase],
    identity_service: FromDishka[IdentityService],
    limit: Optional[int] = Query(default=None, ge=1),
    offset: int = Query(default=0, ge=0),
) -> GetUserHistoryResponse:
    """Get the questions the caller voted on, oldest vote first.

    Args:
        request: Incoming request carrying the identity header
        get_user_history_use_case: Get user history use case from DI
        identity_service: Identity service (injected)
        limit: Page size, everything when omitted
        offset: Number of questions to skip

    Returns:
        History entries with the caller's vote, prediction and histogram
    """
    user_id = identity_service.get_user_id(request.headers)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not authenticated",
        )

    return await get_user_history_use_case.execute(
        GetUserHistoryRequest(user_id=user_id, limit=limit, offset=offset)
    )


@router.get("/my-stats", response_model=GetUserStatsResponse)
async def get_my_stats(
    request: Request,
    get_user_stats_use_case: FromDishka[GetUserStatsUseCase],
    identity_service: FromDishka[IdentityService],
) -> GetUserStatsResponse:
    """Get the caller's performance statistics."""
    user_id = identity_service.get_user_id(request.headers)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not authenticated",
        )

    return await get_user_stats_use_case.execute(GetUserStatsRequest(user_id=user_id))
