"""Unit tests for scheduled job use cases."""

from datetime import timedelta

import pytest

from predictably.application.usecase.job import (
    CleanupRequest,
    CleanupUseCase,
    CloseVotingRequest,
    CloseVotingUseCase,
)
from predictably.domain.repository import GameRepository
from tests.conftest import NOW, make_question
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestCloseVotingUseCase:
    """Tests for CloseVotingUseCase."""

    @pytest.mark.asyncio
    async def test_reports_closed_questions(self, unit_env):
        # Arrange
        use_case = await unit_env.get(CloseVotingUseCase)
        repo = await unit_env.get(GameRepository)
        await repo.create_question(make_question("q1", closing_in=timedelta(hours=1)))

        # Act
        first = await use_case.execute(CloseVotingRequest(now=NOW + timedelta(hours=1)))
        second = await use_case.execute(CloseVotingRequest(now=NOW + timedelta(hours=1)))

        # Assert
        assert first.closed_count == 1
        assert first.closed_questions == ["q1"]
        assert first.message.endswith("Closed 1 questions.")
        assert second.closed_count == 0


class TestCleanupUseCase:
    """Tests for CleanupUseCase."""

    @pytest.mark.asyncio
    async def test_purges_expired_closed_questions(self, unit_env):
        use_case = await unit_env.get(CleanupUseCase)
        repo = await unit_env.get(GameRepository)
        await repo.create_question(make_question("q1", is_active=False))

        response = await use_case.execute(CleanupRequest(now=NOW + timedelta(days=60)))

        assert response.purged_questions == ["q1"]
        assert await repo.list_questions() == []
