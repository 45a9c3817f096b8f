"""Key-value store implementation of the game repository."""

import asyncio
from collections import Counter
from datetime import datetime
from typing import Optional, Sequence

import logfire

from predictably.domain.model import (
    ClosureSummary,
    Prediction,
    PredictionInput,
    Question,
    Vote,
    VoteDistribution,
)
from predictably.domain.repository import GameRepository
from predictably.domain.service.scoring import evaluate_prediction
from predictably.domain.value import QuestionId, UserId
from predictably.persistence import keys
from predictably.persistence.mappers import (
    ACTIVE,
    INACTIVE,
    entry_to_vote,
    from_millis,
    hash_to_question,
    parse_float,
    parse_int,
    question_to_hash,
    to_millis,
)
from predictably.persistence.store import KeyValueStore
from predictably.persistence.store.base import format_number

SECONDS_PER_DAY = 24 * 60 * 60


class KeyValueGameRepository(GameRepository):
    """GameRepository over any KeyValueStore (Redis in production)."""

    def __init__(
        self,
        store: KeyValueStore,
        correct_threshold: float,
        user_data_ttl_days: int = 30,
    ) -> None:
        """Initialize repository with a store.

        Args:
            store: Key-value store holding the game records
            correct_threshold: Distance under which a prediction is correct
            user_data_ttl_days: Default expiry of personal records
        """
        self.store = store
        self.correct_threshold = correct_threshold
        self.user_data_ttl_days = user_data_ttl_days

    # ===== Questions =====

    async def create_question(self, question: Question) -> Question:
        """Store a question and register it in the indices."""
        metadata_key = keys.question_metadata(question.id)
        # Drop optional fields left over from an earlier version of the record
        await self.store.delete(metadata_key)
        await self.store.hset(metadata_key, question_to_hash(question))
        await self.store.sadd(keys.ALL_QUESTIONS, question.id)

        if question.closing_date is not None:
            await self.store.zadd(
                keys.CLOSING_SCHEDULE, {question.id: to_millis(question.closing_date)}
            )
        else:
            await self.store.zrem(keys.CLOSING_SCHEDULE, question.id)

        if question.submitted_by:
            await self.store.sadd(
                keys.user_submissions(question.submitted_by), question.id
            )
        return question

    async def get_question(self, question_id: QuestionId) -> Optional[Question]:
        """Find a question by ID."""
        record = await self.store.hgetall(keys.question_metadata(question_id))
        if not record:
            return None
        return hash_to_question(question_id, record)

    async def get_questions_by_ids(
        self, question_ids: Sequence[QuestionId]
    ) -> list[Question]:
        """Find several questions, skipping missing ids."""
        if not question_ids:
            return []
        records = await asyncio.gather(
            *(self.store.hgetall(keys.question_metadata(qid)) for qid in question_ids)
        )
        return [
            hash_to_question(qid, record)
            for qid, record in zip(question_ids, records)
            if record
        ]

    async def list_questions(self) -> list[Question]:
        """List every known question, newest first."""
        question_ids = sorted(await self.store.smembers(keys.ALL_QUESTIONS))
        questions = await self.get_questions_by_ids(
            [QuestionId(qid) for qid in question_ids]
        )
        return sorted(questions, key=lambda q: q.date, reverse=True)

    async def delete_question(self, question_id: QuestionId) -> None:
        """Purge a question with every record that refers to it."""
        with logfire.span("delete_question", question_id=question_id):
            metadata_key = keys.question_metadata(question_id)
            votes_key = keys.question_votes(question_id)
            predictions_key = keys.question_predictions(question_id)

            submitter = await self.store.hget(metadata_key, "submittedBy")
            voters = await self.store.hgetall(votes_key)
            predictors = await self.store.hgetall(predictions_key)

            operations = [
                self.store.delete(metadata_key),
                self.store.delete(votes_key),
                self.store.delete(predictions_key),
                self.store.srem(keys.ALL_QUESTIONS, question_id),
                self.store.srem(keys.SELECTED_QUESTIONS, question_id),
                self.store.zrem(keys.CLOSING_SCHEDULE, question_id),
            ]
            if submitter:
                operations.append(
                    self.store.srem(keys.user_submissions(submitter), question_id)
                )
            for user_id in voters:
                operations.append(self.store.hdel(keys.user_votes(user_id), question_id))
                operations.append(self.store.zrem(keys.user_history(user_id), question_id))
            for user_id in predictors:
                operations.append(
                    self.store.hdel(keys.user_predictions(user_id), question_id)
                )
                operations.append(
                    self.store.zrem(keys.user_prediction_history(user_id), question_id)
                )

            # Every delete is attempted, the first failure is reported afterwards
            results = await asyncio.gather(*operations, return_exceptions=True)
            failures = [r for r in results if isinstance(r, Exception)]
            if failures:
                logfire.warn(
                    "Question purge incomplete",
                    question_id=question_id,
                    failed=len(failures),
                    attempted=len(operations),
                )
                raise failures[0]

    async def set_question_active(self, question_id: QuestionId, active: bool) -> None:
        """Set the voting-open flag of an existing question."""
        metadata_key = keys.question_metadata(question_id)
        if not await self.store.hgetall(metadata_key):
            return
        await self.store.hset(metadata_key, {"isActive": ACTIVE if active else INACTIVE})

    # ===== Featured questions =====

    async def set_today_question_id(self, question_id: QuestionId) -> None:
        await self.store.set(keys.TODAY_QUESTION_ID, question_id)
        await self.store.sadd(keys.SELECTED_QUESTIONS, question_id)

    async def get_today_question_id(self) -> Optional[QuestionId]:
        question_id = await self.store.get(keys.TODAY_QUESTION_ID)
        return QuestionId(question_id) if question_id else None

    async def set_yesterday_question_id(self, question_id: QuestionId) -> None:
        await self.store.set(keys.YESTERDAY_QUESTION_ID, question_id)

    async def get_yesterday_question_id(self) -> Optional[QuestionId]:
        question_id = await self.store.get(keys.YESTERDAY_QUESTION_ID)
        return QuestionId(question_id) if question_id else None

    # ===== Votes =====

    async def record_vote(self, vote: Vote) -> bool:
        """Store a vote and apply its delta to the running totals.

        The previous value is read under WATCH so a re-vote replaces the
        user's contribution instead of adding a second one. The metadata is
        watched too: increments on a deleted question would recreate a
        partial record.
        """
        votes_key = keys.question_votes(vote.question_id)
        metadata_key = keys.question_metadata(vote.question_id)

        async with self.store.transaction(votes_key, metadata_key) as txn:
            if await txn.hget(metadata_key, "id") is None:
                return False
            previous = await txn.hget(votes_key, vote.user_id)

            txn.multi()
            txn.hset(votes_key, {vote.user_id: str(vote.value)})
            txn.hset(keys.user_votes(vote.user_id), {vote.question_id: str(vote.value)})
            txn.zadd(
                keys.user_history(vote.user_id),
                {vote.question_id: to_millis(vote.timestamp)},
            )
            if previous is None:
                txn.hincrby(metadata_key, "totalVotes", 1)
                txn.hincrbyfloat(metadata_key, "voteSum", vote.value)
            else:
                delta = vote.value - parse_int(previous)
                if delta:
                    txn.hincrbyfloat(metadata_key, "voteSum", delta)
            await txn.execute()
        return True

    async def recompute_vote_totals(self, question_id: QuestionId) -> Question | None:
        """Rebuild totals by reducing the full vote map."""
        if await self.get_question(question_id) is None:
            return None
        votes = await self.store.hgetall(keys.question_votes(question_id))
        values = [parse_int(value) for value in votes.values()]
        await self.store.hset(
            keys.question_metadata(question_id),
            {"totalVotes": str(len(values)), "voteSum": str(sum(values))},
        )
        return await self.get_question(question_id)

    async def get_user_vote(
        self, user_id: UserId, question_id: QuestionId
    ) -> Optional[Vote]:
        raw_value = await self.store.hget(keys.question_votes(question_id), user_id)
        if raw_value is None:
            return None
        question = await self.get_question(question_id)
        if question is None:
            return None
        score = await self.store.zscore(keys.user_history(user_id), question_id)
        timestamp = from_millis(score) if score is not None else question.date
        return entry_to_vote(user_id, question_id, raw_value, timestamp)

    async def get_question_votes(self, question_id: QuestionId) -> list[Vote]:
        question = await self.get_question(question_id)
        if question is None:
            return []
        votes = await self.store.hgetall(keys.question_votes(question_id))
        scores = await asyncio.gather(
            *(self.store.zscore(keys.user_history(uid), question_id) for uid in votes)
        )
        return [
            entry_to_vote(
                user_id,
                question_id,
                raw_value,
                from_millis(score) if score is not None else question.date,
            )
            for (user_id, raw_value), score in zip(votes.items(), scores)
        ]

    async def get_vote_distribution(
        self, question_id: QuestionId
    ) -> list[VoteDistribution]:
        votes = await self.store.hgetall(keys.question_votes(question_id))
        counts = Counter(parse_int(value) for value in votes.values())
        return [
            VoteDistribution(value=value, count=count)
            for value, count in sorted(counts.items())
        ]

    async def get_user_votes(self, user_id: UserId) -> dict[QuestionId, int]:
        votes = await self.store.hgetall(keys.user_votes(user_id))
        return {QuestionId(qid): parse_int(value) for qid, value in votes.items()}

    async def get_user_history(
        self,
        user_id: UserId,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[Question]:
        if limit is not None and limit <= 0:
            return []
        start = max(offset, 0)
        end = start + limit - 1 if limit is not None else -1
        question_ids = await self.store.zrange(keys.user_history(user_id), start, end)
        return await self.get_questions_by_ids(
            [QuestionId(qid) for qid in question_ids]
        )

    # ===== Predictions =====

    async def record_prediction(self, prediction: PredictionInput) -> None:
        value = format_number(prediction.predicted_average)
        await self.store.hset(
            keys.question_predictions(prediction.question_id),
            {prediction.user_id: value},
        )
        await self.store.hset(
            keys.user_predictions(prediction.user_id),
            {prediction.question_id: value},
        )
        await self.store.zadd(
            keys.user_prediction_history(prediction.user_id),
            {prediction.question_id: to_millis(prediction.timestamp)},
        )

    def _evaluate(
        self,
        user_id: str,
        question: Question,
        raw_value: str,
        timestamp: datetime,
    ) -> Prediction:
        predicted = parse_float(raw_value)
        score = evaluate_prediction(
            predicted, question.average_vote, self.correct_threshold
        )
        return Prediction(
            user_id=UserId(user_id),
            question_id=question.id,
            predicted_average=predicted,
            actual_average=question.average_vote,
            accuracy=score.accuracy,
            is_correct=score.is_correct,
            timestamp=timestamp,
        )

    async def get_user_prediction(
        self, user_id: UserId, question_id: QuestionId
    ) -> Optional[Prediction]:
        raw_value = await self.store.hget(
            keys.question_predictions(question_id), user_id
        )
        if raw_value is None:
            return None
        question = await self.get_question(question_id)
        if question is None:
            return None
        score = await self.store.zscore(
            keys.user_prediction_history(user_id), question_id
        )
        timestamp = from_millis(score) if score is not None else question.date
        return self._evaluate(user_id, question, raw_value, timestamp)

    async def get_question_predictions(
        self, question_id: QuestionId
    ) -> list[Prediction]:
        question = await self.get_question(question_id)
        if question is None:
            return []
        predictions = await self.store.hgetall(keys.question_predictions(question_id))
        scores = await asyncio.gather(
            *(
                self.store.zscore(keys.user_prediction_history(uid), question_id)
                for uid in predictions
            )
        )
        return [
            self._evaluate(
                user_id,
                question,
                raw_value,
                from_millis(score) if score is not None else question.date,
            )
            for (user_id, raw_value), score in zip(predictions.items(), scores)
        ]

    async def get_user_predictions(self, user_id: UserId) -> dict[QuestionId, float]:
        predictions = await self.store.hgetall(keys.user_predictions(user_id))
        return {QuestionId(qid): parse_float(value) for qid, value in predictions.items()}

    async def get_user_prediction_timeline(self, user_id: UserId) -> list[QuestionId]:
        question_ids = await self.store.zrange(
            keys.user_prediction_history(user_id), 0, -1
        )
        return [QuestionId(qid) for qid in question_ids]

    # ===== Users =====

    async def get_user_submissions(self, user_id: UserId) -> set[QuestionId]:
        members = await self.store.smembers(keys.user_submissions(user_id))
        return {QuestionId(qid) for qid in members}

    async def get_selected_question_ids(self) -> set[QuestionId]:
        members = await self.store.smembers(keys.SELECTED_QUESTIONS)
        return {QuestionId(qid) for qid in members}

    async def set_user_data_expiration(
        self, user_id: UserId, days: Optional[int] = None
    ) -> None:
        seconds = (days or self.user_data_ttl_days) * SECONDS_PER_DAY
        await asyncio.gather(
            *(self.store.expire(key, seconds) for key in keys.user_keys(user_id))
        )

    # ===== Closing =====

    async def close_expired_voting(self, now: datetime) -> ClosureSummary:
        due = await self.store.zrangebyscore(
            keys.CLOSING_SCHEDULE, float("-inf"), to_millis(now)
        )
        closed: list[QuestionId] = []
        for member, _ in due:
            question_id = QuestionId(member)
            question = await self.get_question(question_id)
            if question is not None and question.is_active:
                await self.store.hset(
                    keys.question_metadata(question_id), {"isActive": INACTIVE}
                )
                closed.append(question_id)
            # Removed even when already closed so each deadline is handled once
            await self.store.zrem(keys.CLOSING_SCHEDULE, question_id)
        return ClosureSummary(closed_count=len(closed), closed_questions=closed)
