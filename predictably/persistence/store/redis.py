"""Redis implementation of the key-value store."""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterator
from contextlib import asynccontextmanager, contextmanager
from typing import Mapping, Optional

import logfire
from redis.asyncio import Redis
from redis.asyncio.client import Pipeline
from redis.exceptions import RedisError, WatchError

from predictably.config import Settings
from predictably.persistence.error import StoreError, TransactionConflictError
from predictably.persistence.store.base import KeyValueStore, Transaction


def create_redis_client(settings: Settings) -> Redis:
    """Create async Redis client.

    Args:
        settings: Application settings with Redis URL

    Returns:
        Client returning decoded strings
    """
    return Redis.from_url(
        settings.redis.url,
        decode_responses=True,  # The store contract is str in, str out
        max_connections=settings.redis.max_connections,
    )


@contextmanager
def _store_errors(operation: str) -> Iterator[None]:
    """Surface client failures as StoreError."""
    try:
        yield
    except RedisError as e:
        logfire.warn("Redis call failed", operation=operation, error=str(e))
        raise StoreError(f"Redis {operation} failed: {e}") from e


class RedisTransaction(Transaction):
    """Transaction backed by a watching Redis pipeline."""

    def __init__(self, pipeline: Pipeline, watch_keys: tuple[str, ...]) -> None:
        self.pipeline = pipeline
        self.watch_keys = watch_keys

    async def hget(self, key: str, field: str) -> Optional[str]:
        with _store_errors("hget"):
            return await self.pipeline.hget(key, field)  # type: ignore[misc]

    def multi(self) -> None:
        self.pipeline.multi()

    def hset(self, key: str, mapping: Mapping[str, str]) -> None:
        self.pipeline.hset(key, mapping=dict(mapping))

    def hincrby(self, key: str, field: str, amount: int) -> None:
        self.pipeline.hincrby(key, field, amount)

    def hincrbyfloat(self, key: str, field: str, amount: float) -> None:
        self.pipeline.hincrbyfloat(key, field, amount)

    def zadd(self, key: str, mapping: Mapping[str, float]) -> None:
        self.pipeline.zadd(key, dict(mapping))

    async def execute(self) -> None:
        try:
            await self.pipeline.execute()
        except WatchError as e:
            raise TransactionConflictError(self.watch_keys) from e
        except RedisError as e:
            raise StoreError(f"Redis transaction failed: {e}") from e


class RedisKeyValueStore(KeyValueStore):
    """KeyValueStore over a redis.asyncio client."""

    def __init__(self, client: Redis) -> None:
        """Initialize store with a Redis client.

        Args:
            client: Client created with decode_responses=True
        """
        self.client = client

    async def get(self, key: str) -> Optional[str]:
        with _store_errors("get"):
            return await self.client.get(key)

    async def set(self, key: str, value: str) -> None:
        with _store_errors("set"):
            await self.client.set(key, value)

    async def delete(self, *keys: str) -> int:
        with _store_errors("delete"):
            return await self.client.delete(*keys)

    async def expire(self, key: str, seconds: int) -> bool:
        with _store_errors("expire"):
            return bool(await self.client.expire(key, seconds))

    async def hget(self, key: str, field: str) -> Optional[str]:
        with _store_errors("hget"):
            return await self.client.hget(key, field)  # type: ignore[misc]

    async def hgetall(self, key: str) -> dict[str, str]:
        with _store_errors("hgetall"):
            return await self.client.hgetall(key)  # type: ignore[misc]

    async def hset(self, key: str, mapping: Mapping[str, str]) -> int:
        with _store_errors("hset"):
            return await self.client.hset(key, mapping=dict(mapping))  # type: ignore[misc]

    async def hdel(self, key: str, *fields: str) -> int:
        with _store_errors("hdel"):
            return await self.client.hdel(key, *fields)  # type: ignore[misc]

    async def sadd(self, key: str, *members: str) -> int:
        with _store_errors("sadd"):
            return await self.client.sadd(key, *members)  # type: ignore[misc]

    async def srem(self, key: str, *members: str) -> int:
        with _store_errors("srem"):
            return await self.client.srem(key, *members)  # type: ignore[misc]

    async def smembers(self, key: str) -> set[str]:
        with _store_errors("smembers"):
            return set(await self.client.smembers(key))  # type: ignore[misc]

    async def zadd(self, key: str, mapping: Mapping[str, float]) -> int:
        with _store_errors("zadd"):
            return await self.client.zadd(key, dict(mapping))

    async def zrem(self, key: str, *members: str) -> int:
        with _store_errors("zrem"):
            return await self.client.zrem(key, *members)

    async def zscore(self, key: str, member: str) -> Optional[float]:
        with _store_errors("zscore"):
            score = await self.client.zscore(key, member)
        return None if score is None else float(score)

    async def zrange(self, key: str, start: int, end: int) -> list[str]:
        with _store_errors("zrange"):
            return list(await self.client.zrange(key, start, end))

    async def zrangebyscore(
        self, key: str, minimum: float, maximum: float
    ) -> list[tuple[str, float]]:
        with _store_errors("zrangebyscore"):
            rows = await self.client.zrangebyscore(
                key, minimum, maximum, withscores=True
            )
        return [(member, float(score)) for member, score in rows]

    @asynccontextmanager
    async def transaction(self, *watch_keys: str) -> AsyncIterator[Transaction]:
        # Leaving the pipeline context unwatches and resets the connection
        async with self.client.pipeline(transaction=True) as pipeline:
            with _store_errors("watch"):
                await pipeline.watch(*watch_keys)
            yield RedisTransaction(pipeline, watch_keys)

    async def close(self) -> None:
        await self.client.aclose()
