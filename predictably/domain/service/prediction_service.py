"""Prediction domain service."""

from datetime import datetime, timezone
from typing import Optional

import logfire

from predictably.domain.error import NotFoundError
from predictably.domain.model import Prediction, PredictionInput
from predictably.domain.repository import GameRepository
from predictably.domain.service.scoring import evaluate_prediction
from predictably.domain.value import QuestionId, UserId

from .base import Service


class PredictionService(Service):
    """Domain service for prediction operations.

    Predictions are accepted whether or not voting is still open. They are
    always scored against the question's current average.
    """

    def __init__(
        self, game_repository: GameRepository, correct_threshold: float
    ) -> None:
        """Initialize prediction service.

        Args:
            game_repository: Game repository
            correct_threshold: Distance under which a prediction is correct
        """
        self.game_repository = game_repository
        self.correct_threshold = correct_threshold

    async def submit_prediction(
        self,
        user_id: UserId,
        question_id: QuestionId,
        predicted_average: float,
        now: Optional[datetime] = None,
    ) -> Prediction:
        """Store a user's prediction and score it.

        Returns:
            The prediction evaluated against the current average

        Raises:
            NotFoundError: If the question does not exist
        """
        with logfire.span(
            "submit_prediction", question_id=question_id, user_id=user_id
        ):
            question = await self.game_repository.get_question(question_id)
            if question is None:
                logfire.warn(
                    "Prediction on non-existent question", question_id=question_id
                )
                raise NotFoundError("Question", question_id)

            submitted = PredictionInput(
                user_id=user_id,
                question_id=question_id,
                predicted_average=predicted_average,
                timestamp=now or datetime.now(timezone.utc),
            )
            await self.game_repository.record_prediction(submitted)
            await self.game_repository.set_user_data_expiration(user_id)

            score = evaluate_prediction(
                predicted_average, question.average_vote, self.correct_threshold
            )
            logfire.info(
                "Prediction recorded",
                question_id=question_id,
                accuracy=score.accuracy,
                is_correct=score.is_correct,
            )
            return Prediction(
                **submitted.model_dump(),
                actual_average=question.average_vote,
                accuracy=score.accuracy,
                is_correct=score.is_correct,
            )

    async def get_user_prediction(
        self, user_id: UserId, question_id: QuestionId
    ) -> Optional[Prediction]:
        """Get a user's prediction, scored against the current average."""
        return await self.game_repository.get_user_prediction(user_id, question_id)

    async def get_question_predictions(
        self, question_id: QuestionId
    ) -> list[Prediction]:
        return await self.game_repository.get_question_predictions(question_id)
