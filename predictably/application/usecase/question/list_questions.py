"""List questions use case."""

from typing import Optional

from pydantic import BaseModel

from predictably.application.usecase.base import BaseUseCase
from predictably.domain.model import Question
from predictably.domain.service import QuestionService


class ListQuestionsRequest(BaseModel):
    """List questions request."""

    active_only: bool = False


class ListQuestionsResponse(BaseModel):
    """List questions response."""

    questions: list[Question]
    today_question_id: Optional[str] = None
    yesterday_question_id: Optional[str] = None


class ListQuestionsUseCase(BaseUseCase):
    """Use case for listing every submitted question, newest first."""

    def __init__(self, question_service: QuestionService) -> None:
        self.question_service = question_service

    async def execute(self, request: ListQuestionsRequest) -> ListQuestionsResponse:
        questions = await self.question_service.list_questions()
        if request.active_only:
            questions = [question for question in questions if question.is_active]

        today = await self.question_service.get_today_question()
        yesterday = await self.question_service.get_yesterday_question()
        return ListQuestionsResponse(
            questions=questions,
            today_question_id=today.id if today else None,
            yesterday_question_id=yesterday.id if yesterday else None,
        )
