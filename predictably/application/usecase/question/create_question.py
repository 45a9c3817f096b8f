"""Create question use case."""

from typing import Optional

from pydantic import BaseModel

from predictably.application.usecase.base import BaseUseCase
from predictably.domain.model import Question
from predictably.domain.service import QuestionService
from predictably.domain.value import QuestionId, UserId


class CreateQuestionRequest(BaseModel):
    """Create question request."""

    text: str
    ttl_hours: Optional[int] = None  # Hours of voting, range checked by the service
    question_id: Optional[str] = None  # Reuse the platform post id when given
    feature: bool = False  # Make it today's question
    user_id: Optional[str] = None


class CreateQuestionResponse(BaseModel):
    """Create question response."""

    question: Question
    featured: bool
    message: str = "Question created successfully"


class CreateQuestionUseCase(BaseUseCase):
    """Use case for submitting a new question."""

    def __init__(self, question_service: QuestionService) -> None:
        """Initialize create question use case.

        Args:
            question_service: Question domain service
        """
        self.question_service = question_service

    async def execute(self, request: CreateQuestionRequest) -> CreateQuestionResponse:
        """Execute create question flow.

        Raises:
            ValidationError: If the text or voting window is invalid
        """
        question = await self.question_service.create_question(
            text=request.text,
            submitted_by=UserId(request.user_id) if request.user_id else None,
            ttl_hours=request.ttl_hours,
            question_id=QuestionId(request.question_id) if request.question_id else None,
        )
        if request.feature:
            await self.question_service.feature_question(question.id)

        return CreateQuestionResponse(question=question, featured=request.feature)
