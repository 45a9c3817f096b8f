"""Get my prediction use case."""

from typing import Optional

from pydantic import BaseModel

from predictably.application.usecase.base import BaseUseCase
from predictably.domain.error import NotFoundError
from predictably.domain.model import Prediction, Question
from predictably.domain.service import PredictionService, QuestionService
from predictably.domain.value import QuestionId, UserId


class GetMyPredictionRequest(BaseModel):
    """Get my prediction request."""

    question_id: str
    user_id: str


class GetMyPredictionResponse(BaseModel):
    """Get my prediction response."""

    question: Question
    prediction: Optional[Prediction] = None


class GetMyPredictionUseCase(BaseUseCase):
    """Use case for reading the caller's prediction, scored live."""

    def __init__(
        self,
        question_service: QuestionService,
        prediction_service: PredictionService,
    ) -> None:
        self.question_service = question_service
        self.prediction_service = prediction_service

    async def execute(self, request: GetMyPredictionRequest) -> GetMyPredictionResponse:
        question_id = QuestionId(request.question_id)
        question = await self.question_service.get_question(question_id)
        if question is None:
            raise NotFoundError("Question", question_id)

        prediction = await self.prediction_service.get_user_prediction(
            UserId(request.user_id), question_id
        )
        return GetMyPredictionResponse(question=question, prediction=prediction)
