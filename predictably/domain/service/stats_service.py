"""Statistics domain service."""

from typing import Optional

import logfire

from predictably.domain.model import UserStats, VoteHistogram
from predictably.domain.repository import GameRepository
from predictably.domain.service.scoring import (
    build_histogram,
    evaluate_prediction,
    walk_streaks,
)
from predictably.domain.value import QuestionId, Scale, UserId

from .base import Service


class StatsService(Service):
    """Derives histograms and per-user statistics from stored records.

    Nothing here is cached. Every figure is recomputed from the vote and
    prediction records on each call, so it always reflects the current
    crowd averages.
    """

    def __init__(
        self,
        game_repository: GameRepository,
        scale: Scale,
        correct_threshold: float,
    ) -> None:
        """Initialize statistics service.

        Args:
            game_repository: Game repository
            scale: Vote scale used for histogram buckets
            correct_threshold: Distance under which a prediction is correct
        """
        self.game_repository = game_repository
        self.scale = scale
        self.correct_threshold = correct_threshold

    async def get_histogram(self, question_id: QuestionId) -> Optional[VoteHistogram]:
        """Dense vote histogram for a question.

        Returns:
            Histogram, or None if the question does not exist
        """
        question = await self.game_repository.get_question(question_id)
        if question is None:
            return None
        distribution = await self.game_repository.get_vote_distribution(question_id)
        return build_histogram(question, distribution, self.scale)

    async def _prediction_walk_order(
        self, user_id: UserId, predicted: dict[QuestionId, float]
    ) -> list[QuestionId]:
        """Order a user's predictions chronologically.

        Predictions missing from the timeline index predate it; they come
        first, in map order.
        """
        timeline = await self.game_repository.get_user_prediction_timeline(user_id)
        indexed = [qid for qid in timeline if qid in predicted]
        seen = set(indexed)
        legacy = [qid for qid in predicted if qid not in seen]
        return legacy + indexed

    async def compute_user_stats(self, user_id: UserId) -> UserStats:
        """Compute a user's performance statistics.

        Predictions on questions that no longer exist count towards the
        total but are left out of accuracy and streaks.
        """
        with logfire.span("compute_user_stats", user_id=user_id):
            votes = await self.game_repository.get_user_votes(user_id)
            predicted = await self.game_repository.get_user_predictions(user_id)
            order = await self._prediction_walk_order(user_id, predicted)

            questions = {
                question.id: question
                for question in await self.game_repository.get_questions_by_ids(order)
            }

            accuracy_sum = 0.0
            outcomes: list[bool] = []
            for question_id in order:
                question = questions.get(question_id)
                if question is None:
                    continue
                score = evaluate_prediction(
                    predicted[question_id],
                    question.average_vote,
                    self.correct_threshold,
                )
                accuracy_sum += score.accuracy
                outcomes.append(score.is_correct)

            current_streak, best_streak = walk_streaks(outcomes)
            total_predictions = len(predicted)
            correct_predictions = sum(outcomes)

            submitted = await self.game_repository.get_user_submissions(user_id)
            selected = await self.game_repository.get_selected_question_ids()

            return UserStats(
                total_votes=len(votes),
                total_predictions=total_predictions,
                correct_predictions=correct_predictions,
                prediction_accuracy=(
                    100 * correct_predictions / total_predictions
                    if total_predictions
                    else 0.0
                ),
                average_prediction_accuracy=(
                    accuracy_sum / total_predictions if total_predictions else 0.0
                ),
                current_streak=current_streak,
                best_streak=best_streak,
                questions_submitted=len(submitted),
                questions_selected=len(submitted & selected),
            )
