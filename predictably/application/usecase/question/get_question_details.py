"""Get question details use case."""

from typing import Optional

from pydantic import BaseModel

from predictably.application.usecase.base import BaseUseCase
from predictably.domain.error import NotFoundError
from predictably.domain.model import QuestionDetails
from predictably.domain.service import (
    PredictionService,
    QuestionService,
    StatsService,
    VoteService,
)
from predictably.domain.value import QuestionId, UserId


class GetQuestionDetailsRequest(BaseModel):
    """Get question details request."""

    question_id: str
    user_id: Optional[str] = None  # Anonymous callers get no personal fields


class GetQuestionDetailsResponse(BaseModel):
    """Get question details response."""

    question_details: QuestionDetails
    message: str = "Question details retrieved successfully"


class GetQuestionDetailsUseCase(BaseUseCase):
    """Use case for the results view of a single question."""

    def __init__(
        self,
        question_service: QuestionService,
        vote_service: VoteService,
        prediction_service: PredictionService,
        stats_service: StatsService,
    ) -> None:
        """Initialize get question details use case.

        Args:
            question_service: Question domain service
            vote_service: Vote domain service
            prediction_service: Prediction domain service
            stats_service: Statistics domain service
        """
        self.question_service = question_service
        self.vote_service = vote_service
        self.prediction_service = prediction_service
        self.stats_service = stats_service

    async def execute(
        self, request: GetQuestionDetailsRequest
    ) -> GetQuestionDetailsResponse:
        question_id = QuestionId(request.question_id)
        question = await self.question_service.get_question(question_id)
        if question is None:
            raise NotFoundError("Question", question_id)

        vote = prediction = None
        if request.user_id:
            user_id = UserId(request.user_id)
            vote = await self.vote_service.get_user_vote(user_id, question_id)
            prediction = await self.prediction_service.get_user_prediction(
                user_id, question_id
            )

        histogram = await self.stats_service.get_histogram(question_id)
        if histogram is None:
            raise NotFoundError("Question", question_id)

        details = QuestionDetails(
            question=question,
            my_vote=vote.value if vote else None,
            my_prediction=prediction.predicted_average if prediction else None,
            prediction_correct=prediction.is_correct if prediction else None,
            prediction_accuracy=prediction.accuracy if prediction else None,
            vote_histogram=histogram,
            all_votes=await self.vote_service.get_question_votes(question_id),
            all_predictions=await self.prediction_service.get_question_predictions(
                question_id
            ),
        )
        return GetQuestionDetailsResponse(question_details=details)
