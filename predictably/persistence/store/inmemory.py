"""In-memory key-value store for testing.

Mirrors the Redis semantics the game depends on: a single keyspace of
typed values, lazy key expiry and WATCH-based optimistic transactions.
"""

from __future__ import annotations

import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any, Callable, Mapping, Optional

from predictably.persistence.error import StoreError, TransactionConflictError
from predictably.persistence.store.base import (
    KeyValueStore,
    Transaction,
    format_number,
)


class _SortedSet(dict):
    """Member to score mapping, distinct from hashes for type checks."""


class InMemoryTransaction(Transaction):
    """Transaction that checks watched key versions at execute time."""

    def __init__(self, store: "InMemoryKeyValueStore", watch_keys: tuple[str, ...]):
        self.store = store
        self.watch_keys = watch_keys
        self._watched = {key: store.version(key) for key in watch_keys}
        self._queue: list[Callable[[], Any]] = []
        self._queueing = False

    async def hget(self, key: str, field: str) -> Optional[str]:
        return await self.store.hget(key, field)

    def multi(self) -> None:
        self._queueing = True

    def _enqueue(self, operation: Callable[[], Any]) -> None:
        if not self._queueing:
            raise StoreError("Writes must be queued after multi()")
        self._queue.append(operation)

    def hset(self, key: str, mapping: Mapping[str, str]) -> None:
        self._enqueue(lambda: self.store._hset(key, mapping))

    def hincrby(self, key: str, field: str, amount: int) -> None:
        self._enqueue(lambda: self.store._hincr(key, field, amount, integer=True))

    def hincrbyfloat(self, key: str, field: str, amount: float) -> None:
        self._enqueue(lambda: self.store._hincr(key, field, amount, integer=False))

    def zadd(self, key: str, mapping: Mapping[str, float]) -> None:
        self._enqueue(lambda: self.store._zadd(key, mapping))

    async def execute(self) -> None:
        # No suspension point between the version check and the writes
        changed = tuple(
            key
            for key, version in self._watched.items()
            if self.store.version(key) != version
        )
        if changed:
            self._queue.clear()
            raise TransactionConflictError(changed)
        for operation in self._queue:
            operation()
        self._queue.clear()


class InMemoryKeyValueStore(KeyValueStore):
    """In-memory implementation of KeyValueStore for testing."""

    def __init__(self) -> None:
        self._data: dict[str, Any] = {}
        self._expires: dict[str, float] = {}
        self._versions: dict[str, int] = {}

    # ===== Internals =====

    def version(self, key: str) -> int:
        """Modification counter of a key, used for WATCH."""
        self._expire_if_due(key)
        return self._versions.get(key, 0)

    def ttl(self, key: str) -> Optional[float]:
        """Seconds left before a key expires, None without expiry."""
        self._expire_if_due(key)
        deadline = self._expires.get(key)
        return None if deadline is None else deadline - time.monotonic()

    def _touch(self, key: str) -> None:
        self._versions[key] = self._versions.get(key, 0) + 1

    def _expire_if_due(self, key: str) -> None:
        deadline = self._expires.get(key)
        if deadline is not None and deadline <= time.monotonic():
            self._data.pop(key, None)
            self._expires.pop(key, None)
            self._touch(key)

    def _read(self, key: str, kind: type) -> Any:
        self._expire_if_due(key)
        value = self._data.get(key)
        if value is not None and type(value) is not kind:
            raise StoreError(f"WRONGTYPE operation against key {key}")
        return value

    def _write(self, key: str, kind: type) -> Any:
        value = self._read(key, kind)
        if value is None:
            value = kind()
            self._data[key] = value
        self._touch(key)
        return value

    def _drop_if_empty(self, key: str) -> None:
        if key in self._data and not self._data[key]:
            del self._data[key]
            self._expires.pop(key, None)

    def _hset(self, key: str, mapping: Mapping[str, str]) -> int:
        fields = self._write(key, dict)
        added = sum(1 for field in mapping if field not in fields)
        for field, value in mapping.items():
            fields[field] = str(value)
        return added

    def _hincr(self, key: str, field: str, amount: float, integer: bool) -> str:
        fields = self._write(key, dict)
        current = fields.get(field, "0")
        try:
            total = int(current) + int(amount) if integer else float(current) + amount
        except ValueError as e:
            raise StoreError(f"Hash value is not a number: {key} {field}") from e
        fields[field] = format_number(total)
        return fields[field]

    def _zadd(self, key: str, mapping: Mapping[str, float]) -> int:
        scores = self._write(key, _SortedSet)
        added = sum(1 for member in mapping if member not in scores)
        for member, score in mapping.items():
            scores[member] = float(score)
        return added

    def _sorted(self, key: str) -> list[tuple[str, float]]:
        scores = self._read(key, _SortedSet) or {}
        return sorted(scores.items(), key=lambda item: (item[1], item[0]))

    # ===== Strings and keys =====

    async def get(self, key: str) -> Optional[str]:
        return self._read(key, str)

    async def set(self, key: str, value: str) -> None:
        self._expire_if_due(key)
        self._data[key] = str(value)
        self._expires.pop(key, None)
        self._touch(key)

    async def delete(self, *keys: str) -> int:
        removed = 0
        for key in keys:
            self._expire_if_due(key)
            if key in self._data:
                del self._data[key]
                self._expires.pop(key, None)
                self._touch(key)
                removed += 1
        return removed

    async def expire(self, key: str, seconds: int) -> bool:
        self._expire_if_due(key)
        if key not in self._data:
            return False
        self._expires[key] = time.monotonic() + seconds
        return True

    # ===== Hashes =====

    async def hget(self, key: str, field: str) -> Optional[str]:
        fields = self._read(key, dict)
        return None if fields is None else fields.get(field)

    async def hgetall(self, key: str) -> dict[str, str]:
        return dict(self._read(key, dict) or {})

    async def hset(self, key: str, mapping: Mapping[str, str]) -> int:
        return self._hset(key, mapping)

    async def hdel(self, key: str, *fields: str) -> int:
        stored = self._read(key, dict)
        if not stored:
            return 0
        removed = sum(1 for field in fields if stored.pop(field, None) is not None)
        if removed:
            self._touch(key)
            self._drop_if_empty(key)
        return removed

    # ===== Sets =====

    async def sadd(self, key: str, *members: str) -> int:
        stored = self._write(key, set)
        added = len(set(members) - stored)
        stored.update(members)
        return added

    async def srem(self, key: str, *members: str) -> int:
        stored = self._read(key, set)
        if not stored:
            return 0
        removed = len(stored & set(members))
        if removed:
            stored.difference_update(members)
            self._touch(key)
            self._drop_if_empty(key)
        return removed

    async def smembers(self, key: str) -> set[str]:
        return set(self._read(key, set) or set())

    # ===== Sorted sets =====

    async def zadd(self, key: str, mapping: Mapping[str, float]) -> int:
        return self._zadd(key, mapping)

    async def zrem(self, key: str, *members: str) -> int:
        scores = self._read(key, _SortedSet)
        if not scores:
            return 0
        removed = sum(1 for member in members if scores.pop(member, None) is not None)
        if removed:
            self._touch(key)
            self._drop_if_empty(key)
        return removed

    async def zscore(self, key: str, member: str) -> Optional[float]:
        scores = self._read(key, _SortedSet) or {}
        return scores.get(member)

    async def zrange(self, key: str, start: int, end: int) -> list[str]:
        members = [member for member, _ in self._sorted(key)]
        if end < 0:
            end = len(members) + end
        if start < 0:
            start = max(len(members) + start, 0)
        return members[start : end + 1]

    async def zrangebyscore(
        self, key: str, minimum: float, maximum: float
    ) -> list[tuple[str, float]]:
        return [
            (member, score)
            for member, score in self._sorted(key)
            if minimum <= score <= maximum
        ]

    # ===== Transactions =====

    @asynccontextmanager
    async def transaction(self, *watch_keys: str) -> AsyncIterator[Transaction]:
        yield InMemoryTransaction(self, watch_keys)
