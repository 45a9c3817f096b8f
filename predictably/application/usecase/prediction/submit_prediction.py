"""Submit prediction use case."""

from pydantic import BaseModel

from predictably.application.usecase.base import BaseUseCase
from predictably.domain.error import NotFoundError, ValidationError
from predictably.domain.model import Prediction, VoteHistogram
from predictably.domain.service import PredictionService, StatsService
from predictably.domain.value import QuestionId, Scale, UserId


class SubmitPredictionRequest(BaseModel):
    """Submit prediction request."""

    question_id: str
    predicted_average: float
    user_id: str


class SubmitPredictionResponse(BaseModel):
    """Submit prediction response."""

    prediction: Prediction
    actual_average: float
    is_correct: bool
    vote_histogram: VoteHistogram
    message: str = "Prediction submitted successfully"


class SubmitPredictionUseCase(BaseUseCase):
    """Use case for predicting the crowd average of a question."""

    def __init__(
        self,
        prediction_service: PredictionService,
        stats_service: StatsService,
        scale: Scale,
    ) -> None:
        """Initialize submit prediction use case.

        Args:
            prediction_service: Prediction domain service
            stats_service: Statistics domain service
            scale: Allowed prediction range
        """
        self.prediction_service = prediction_service
        self.stats_service = stats_service
        self.scale = scale

    async def execute(
        self, request: SubmitPredictionRequest
    ) -> SubmitPredictionResponse:
        """Execute prediction flow.

        Raises:
            ValidationError: If the prediction is outside the scale
            NotFoundError: If the question does not exist
        """
        if not self.scale.contains(request.predicted_average):
            raise ValidationError(
                f"Prediction must be between {self.scale.minimum} "
                f"and {self.scale.maximum}"
            )

        question_id = QuestionId(request.question_id)
        prediction = await self.prediction_service.submit_prediction(
            user_id=UserId(request.user_id),
            question_id=question_id,
            predicted_average=request.predicted_average,
        )
        histogram = await self.stats_service.get_histogram(question_id)
        if histogram is None:
            raise NotFoundError("Question", question_id)

        return SubmitPredictionResponse(
            prediction=prediction,
            actual_average=prediction.actual_average,
            is_correct=prediction.is_correct,
            vote_histogram=histogram,
        )
