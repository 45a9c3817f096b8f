"""Integration tests for the game repository over a real Redis server.

Requires Redis at ``REDIS__URL`` (default redis://localhost:6379/0).
Run with ``pytest -m integration``.
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from predictably.domain.model import Question, Vote
from predictably.domain.repository import GameRepository
from predictably.domain.value import QuestionId, UserId
from predictably.persistence import keys
from predictably.persistence.error import TransactionConflictError
from predictably.persistence.store import KeyValueStore
from tests.harness import create_env_fixture

pytestmark = pytest.mark.integration

# Integration test fixture - real Redis
integration_env = create_env_fixture(unmock={"persistence"})


def unique_question(closing_in: timedelta = timedelta(hours=1)) -> Question:
    now = datetime.now(timezone.utc)
    return Question(
        id=QuestionId(f"it-{uuid4().hex}"),
        text="Integration statement",
        date=now,
        closing_date=now + closing_in,
    )


class TestRedisGameRepository:
    """Round trips through Redis."""

    @pytest.mark.asyncio
    async def test_revote_applies_delta_in_transaction(self, integration_env):
        # Arrange
        repo = await integration_env.get(GameRepository)
        question = unique_question()
        await repo.create_question(question)

        try:
            # Act
            await repo.record_vote(Vote(user_id=UserId("a"), question_id=question.id, value=5))
            await repo.record_vote(Vote(user_id=UserId("a"), question_id=question.id, value=9))
            await repo.record_vote(Vote(user_id=UserId("b"), question_id=question.id, value=-3))

            # Assert
            stored = await repo.get_question(question.id)
            assert stored.total_votes == 2
            assert stored.average_vote == 3.0
        finally:
            await repo.delete_question(question.id)

    @pytest.mark.asyncio
    async def test_concurrent_write_aborts_watched_transaction(self, integration_env):
        # Arrange
        store = await integration_env.get(KeyValueStore)
        votes_key = keys.question_votes(f"it-{uuid4().hex}")

        try:
            # Act & Assert
            async with store.transaction(votes_key) as txn:
                await txn.hget(votes_key, "a")
                await store.hset(votes_key, {"b": "1"})
                txn.multi()
                txn.hset(votes_key, {"a": "2"})
                with pytest.raises(TransactionConflictError):
                    await txn.execute()

            assert await store.hgetall(votes_key) == {"b": "1"}
        finally:
            await store.delete(votes_key)

    @pytest.mark.asyncio
    async def test_closing_sweep_is_idempotent(self, integration_env):
        # Arrange
        repo = await integration_env.get(GameRepository)
        question = unique_question(closing_in=timedelta(seconds=-1))
        await repo.create_question(question)

        try:
            # Act
            first = await repo.close_expired_voting(datetime.now(timezone.utc))
            second = await repo.close_expired_voting(datetime.now(timezone.utc))

            # Assert
            assert question.id in first.closed_questions
            assert question.id not in second.closed_questions
            assert (await repo.get_question(question.id)).is_active is False
        finally:
            await repo.delete_question(question.id)
