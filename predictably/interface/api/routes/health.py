"""Health check route."""

from datetime import datetime, timezone
from typing import Optional

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from predictably.config import Settings
from predictably.domain.repository import GameRepository

router = APIRouter(tags=["health"], route_class=DishkaRoute)


class HealthResponse(BaseModel):
    """Service status plus the featured question, which proves the store answers."""

    status: str
    timestamp: datetime
    environment: str
    git_sha: str
    today_question_id: Optional[str] = None


@router.get("/health", response_model=HealthResponse)
async def health_check(
    settings: FromDishka[Settings],
    game_repository: FromDishka[GameRepository],
) -> HealthResponse:
    """Report liveness. Store failures surface as 500 via the error handlers."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        environment=settings.environment,
        git_sha=settings.git_sha,
        today_question_id=await game_repository.get_today_question_id(),
    )
