"""Unit tests for StatsService."""

from datetime import timedelta

import pytest

from predictably.domain.model import PredictionInput, Vote
from predictably.domain.repository import GameRepository
from predictably.domain.service import StatsService
from predictably.domain.value import QuestionId, UserId
from predictably.persistence import keys
from predictably.persistence.store import KeyValueStore
from tests.conftest import NOW, make_question
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no services needed
unit_env = create_env_fixture()

PLAYER = UserId("player")


async def seed_question(repo: GameRepository, question_id: str, average: int) -> None:
    """Create a question whose crowd average is exactly ``average``."""
    await repo.create_question(make_question(question_id))
    await repo.record_vote(
        Vote(user_id=UserId("crowd"), question_id=QuestionId(question_id), value=average)
    )


async def predict(
    repo: GameRepository, question_id: str, value: float, minutes: int
) -> None:
    await repo.record_prediction(
        PredictionInput(
            user_id=PLAYER,
            question_id=QuestionId(question_id),
            predicted_average=value,
            timestamp=NOW + timedelta(minutes=minutes),
        )
    )


class TestGetHistogram:
    """Tests for get_histogram method."""

    @pytest.mark.asyncio
    async def test_histogram_has_bucket_per_scale_value(self, unit_env):
        # Arrange
        stats_service = await unit_env.get(StatsService)
        repo = await unit_env.get(GameRepository)
        await seed_question(repo, "q1", 3)

        # Act
        histogram = await stats_service.get_histogram(QuestionId("q1"))

        # Assert
        assert len(histogram.buckets) == 21
        assert {b.value: b.count for b in histogram.buckets}[3] == 1
        assert histogram.total_votes == 1
        assert histogram.average_vote == 3.0

    @pytest.mark.asyncio
    async def test_histogram_of_unknown_question_is_none(self, unit_env):
        stats_service = await unit_env.get(StatsService)

        assert await stats_service.get_histogram(QuestionId("nope")) is None


class TestComputeUserStats:
    """Tests for compute_user_stats method."""

    @pytest.mark.asyncio
    async def test_user_without_activity_has_zero_stats(self, unit_env):
        stats_service = await unit_env.get(StatsService)

        stats = await stats_service.compute_user_stats(PLAYER)

        assert stats.total_votes == 0
        assert stats.total_predictions == 0
        assert stats.prediction_accuracy == 0.0
        assert stats.average_prediction_accuracy == 0.0
        assert stats.current_streak == 0
        assert stats.best_streak == 0

    @pytest.mark.asyncio
    async def test_streaks_follow_prediction_time_not_insertion(self, unit_env):
        """Outcomes ordered by time are [correct, correct, wrong, correct]."""
        # Arrange
        stats_service = await unit_env.get(StatsService)
        repo = await unit_env.get(GameRepository)
        for question_id in ["q1", "q2", "q3", "q4"]:
            await seed_question(repo, question_id, 0)

        # Inserted in an order that differs from the timestamps
        await predict(repo, "q4", 0, minutes=40)  # correct
        await predict(repo, "q3", 9, minutes=30)  # wrong
        await predict(repo, "q1", 1, minutes=10)  # correct
        await predict(repo, "q2", -2, minutes=20)  # correct

        # Act
        stats = await stats_service.compute_user_stats(PLAYER)

        # Assert
        assert stats.total_predictions == 4
        assert stats.correct_predictions == 3
        assert stats.prediction_accuracy == 75.0
        assert stats.average_prediction_accuracy == (0 + 9 + 1 + 2) / 4
        assert stats.best_streak == 2
        assert stats.current_streak == 1

    @pytest.mark.asyncio
    async def test_legacy_predictions_walk_first_in_map_order(self, unit_env):
        """Predictions missing from the timeline precede indexed ones."""
        # Arrange
        stats_service = await unit_env.get(StatsService)
        repo = await unit_env.get(GameRepository)
        store = await unit_env.get(KeyValueStore)
        for question_id in ["old", "new"]:
            await seed_question(repo, question_id, 0)
        await predict(repo, "new", 10, minutes=0)  # wrong, indexed
        await store.hset(keys.user_predictions(PLAYER), {"old": "0"})  # correct, legacy

        # Act
        stats = await stats_service.compute_user_stats(PLAYER)

        # Assert
        assert stats.total_predictions == 2
        assert stats.best_streak == 1
        assert stats.current_streak == 0

    @pytest.mark.asyncio
    async def test_predictions_on_deleted_questions_count_but_are_not_scored(
        self, unit_env
    ):
        # Arrange
        stats_service = await unit_env.get(StatsService)
        repo = await unit_env.get(GameRepository)
        store = await unit_env.get(KeyValueStore)
        await seed_question(repo, "kept", 0)
        await seed_question(repo, "gone", 0)
        await predict(repo, "kept", 0, minutes=0)
        await predict(repo, "gone", 0, minutes=1)
        await store.delete(keys.question_metadata("gone"))

        # Act
        stats = await stats_service.compute_user_stats(PLAYER)

        # Assert
        assert stats.total_predictions == 2
        assert stats.correct_predictions == 1
        assert stats.prediction_accuracy == 50.0
        assert stats.current_streak == 1

    @pytest.mark.asyncio
    async def test_counts_votes_and_submissions(self, unit_env):
        # Arrange
        stats_service = await unit_env.get(StatsService)
        repo = await unit_env.get(GameRepository)
        await repo.create_question(make_question("mine1", submitted_by=PLAYER))
        await repo.create_question(make_question("mine2", submitted_by=PLAYER))
        await repo.create_question(make_question("theirs", submitted_by="other"))
        await repo.set_today_question_id(QuestionId("mine2"))
        await repo.set_today_question_id(QuestionId("theirs"))
        for question_id in ["mine1", "theirs"]:
            await repo.record_vote(
                Vote(user_id=PLAYER, question_id=QuestionId(question_id), value=1)
            )

        # Act
        stats = await stats_service.compute_user_stats(PLAYER)

        # Assert
        assert stats.total_votes == 2
        assert stats.questions_submitted == 2
        assert stats.questions_selected == 1
