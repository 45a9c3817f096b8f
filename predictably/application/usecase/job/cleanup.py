"""Cleanup job use case."""

from datetime import datetime
from typing import Optional

import logfire
from pydantic import BaseModel

from predictably.application.usecase.base import BaseUseCase
from predictably.domain.service import ClosingService


class CleanupRequest(BaseModel):
    """Cleanup request."""

    now: Optional[datetime] = None


class CleanupResponse(BaseModel):
    """Cleanup response."""

    purged_count: int
    purged_questions: list[str]


class CleanupUseCase(BaseUseCase):
    """Scheduled purge of questions closed past the retention period."""

    def __init__(self, closing_service: ClosingService) -> None:
        self.closing_service = closing_service

    async def execute(self, request: CleanupRequest) -> CleanupResponse:
        purged = await self.closing_service.purge_closed_questions(request.now)
        logfire.info("Cleanup completed", purged_count=len(purged))
        return CleanupResponse(
            purged_count=len(purged), purged_questions=list(purged)
        )
