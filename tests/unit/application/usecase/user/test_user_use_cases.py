"""Unit tests for user use cases."""

from datetime import timedelta

import pytest

from predictably.application.usecase.user import (
    GetUserHistoryRequest,
    GetUserHistoryUseCase,
    GetUserStatsRequest,
    GetUserStatsUseCase,
)
from predictably.domain.model import PredictionInput, Vote
from predictably.domain.repository import GameRepository
from predictably.domain.value import QuestionId, UserId
from tests.conftest import NOW, make_question
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestGetUserHistoryUseCase:
    """Tests for GetUserHistoryUseCase."""

    @pytest.mark.asyncio
    async def test_history_entries_carry_participation(self, unit_env):
        # Arrange
        use_case = await unit_env.get(GetUserHistoryUseCase)
        repo = await unit_env.get(GameRepository)
        for minutes, question_id in enumerate(["q1", "q2"]):
            await repo.create_question(make_question(question_id))
            await repo.record_vote(
                Vote(
                    user_id=UserId("alice"),
                    question_id=QuestionId(question_id),
                    value=2,
                    timestamp=NOW + timedelta(minutes=minutes),
                )
            )
        await repo.record_prediction(
            PredictionInput(
                user_id=UserId("alice"), question_id=QuestionId("q2"), predicted_average=5
            )
        )

        # Act
        response = await use_case.execute(GetUserHistoryRequest(user_id="alice"))

        # Assert
        assert response.total_count == 2
        first, second = response.user_history
        assert first.question.id == "q1"
        assert first.my_vote == 2
        assert first.my_prediction is None
        assert first.prediction_correct is None
        assert second.my_prediction == 5.0
        assert second.prediction_accuracy == 3.0
        assert second.prediction_correct is False
        assert second.vote_histogram.total_votes == 1

    @pytest.mark.asyncio
    async def test_history_pagination(self, unit_env):
        # Arrange
        use_case = await unit_env.get(GetUserHistoryUseCase)
        repo = await unit_env.get(GameRepository)
        for minutes, question_id in enumerate(["q1", "q2", "q3"]):
            await repo.create_question(make_question(question_id))
            await repo.record_vote(
                Vote(
                    user_id=UserId("alice"),
                    question_id=QuestionId(question_id),
                    value=0,
                    timestamp=NOW + timedelta(minutes=minutes),
                )
            )

        # Act
        response = await use_case.execute(
            GetUserHistoryRequest(user_id="alice", limit=2, offset=1)
        )

        # Assert
        assert [e.question.id for e in response.user_history] == ["q2", "q3"]


class TestGetUserStatsUseCase:
    """Tests for GetUserStatsUseCase."""

    @pytest.mark.asyncio
    async def test_stats_for_new_user(self, unit_env):
        use_case = await unit_env.get(GetUserStatsUseCase)

        response = await use_case.execute(GetUserStatsRequest(user_id="newcomer"))

        assert response.user_stats.total_votes == 0
        assert response.user_stats.best_streak == 0
