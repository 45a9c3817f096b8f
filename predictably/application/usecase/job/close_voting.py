"""Close voting job use case."""

from datetime import datetime
from typing import Optional

import logfire
from pydantic import BaseModel

from predictably.application.usecase.base import BaseUseCase
from predictably.domain.service import ClosingService


class CloseVotingRequest(BaseModel):
    """Close voting request."""

    now: Optional[datetime] = None  # Reference time, current time when omitted


class CloseVotingResponse(BaseModel):
    """Close voting response."""

    closed_count: int
    closed_questions: list[str]
    message: str


class CloseVotingUseCase(BaseUseCase):
    """Scheduled sweep closing voting at each question's deadline."""

    def __init__(self, closing_service: ClosingService) -> None:
        self.closing_service = closing_service

    async def execute(self, request: CloseVotingRequest) -> CloseVotingResponse:
        summary = await self.closing_service.close_expired_voting(request.now)
        message = (
            f"Voting closure processing completed. "
            f"Closed {summary.closed_count} questions."
        )
        logfire.info(message, closed_questions=summary.closed_questions)
        return CloseVotingResponse(
            closed_count=summary.closed_count,
            closed_questions=list(summary.closed_questions),
            message=message,
        )
