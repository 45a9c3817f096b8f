"""Key-value store interface.

The game only relies on a small Redis-like capability set: strings,
hashes, sets, sorted sets, key expiry and optimistic WATCH/MULTI/EXEC
transactions. Values are always strings; callers parse and format.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from typing import Mapping, Optional


def format_number(value: float) -> str:
    """Format a number the way Redis replies to float increments."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


class Transaction(ABC):
    """Optimistic transaction over watched keys.

    Reads issued before ``multi()`` run immediately while the keys are
    watched. Writes issued after ``multi()`` are queued and applied by
    ``execute()`` only if no watched key changed in the meantime.
    """

    @abstractmethod
    async def hget(self, key: str, field: str) -> Optional[str]:
        """Read a hash field while watching."""
        pass

    @abstractmethod
    def multi(self) -> None:
        """Start queueing writes."""
        pass

    @abstractmethod
    def hset(self, key: str, mapping: Mapping[str, str]) -> None:
        """Queue a hash write."""
        pass

    @abstractmethod
    def hincrby(self, key: str, field: str, amount: int) -> None:
        """Queue an integer increment of a hash field."""
        pass

    @abstractmethod
    def hincrbyfloat(self, key: str, field: str, amount: float) -> None:
        """Queue a float increment of a hash field."""
        pass

    @abstractmethod
    def zadd(self, key: str, mapping: Mapping[str, float]) -> None:
        """Queue a sorted-set write."""
        pass

    @abstractmethod
    async def execute(self) -> None:
        """Apply the queued writes atomically.

        Raises:
            TransactionConflictError: If a watched key changed
        """
        pass


class KeyValueStore(ABC):
    """Async key-value store used by the game repository."""

    # ===== Strings and keys =====

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    async def delete(self, *keys: str) -> int:
        """Delete keys, returning how many existed."""
        pass

    @abstractmethod
    async def expire(self, key: str, seconds: int) -> bool:
        """Set a time to live, returning False if the key does not exist."""
        pass

    # ===== Hashes =====

    @abstractmethod
    async def hget(self, key: str, field: str) -> Optional[str]:
        pass

    @abstractmethod
    async def hgetall(self, key: str) -> dict[str, str]:
        """Every field of a hash, in insertion order. Empty if missing."""
        pass

    @abstractmethod
    async def hset(self, key: str, mapping: Mapping[str, str]) -> int:
        """Write fields, returning how many were new."""
        pass

    @abstractmethod
    async def hdel(self, key: str, *fields: str) -> int:
        pass

    # ===== Sets =====

    @abstractmethod
    async def sadd(self, key: str, *members: str) -> int:
        pass

    @abstractmethod
    async def srem(self, key: str, *members: str) -> int:
        pass

    @abstractmethod
    async def smembers(self, key: str) -> set[str]:
        pass

    # ===== Sorted sets =====

    @abstractmethod
    async def zadd(self, key: str, mapping: Mapping[str, float]) -> int:
        pass

    @abstractmethod
    async def zrem(self, key: str, *members: str) -> int:
        pass

    @abstractmethod
    async def zscore(self, key: str, member: str) -> Optional[float]:
        pass

    @abstractmethod
    async def zrange(self, key: str, start: int, end: int) -> list[str]:
        """Members by rank, ascending score, ``end`` inclusive (-1 = last)."""
        pass

    @abstractmethod
    async def zrangebyscore(
        self, key: str, minimum: float, maximum: float
    ) -> list[tuple[str, float]]:
        """Members with ``minimum <= score <= maximum``, ascending score."""
        pass

    # ===== Transactions =====

    @abstractmethod
    def transaction(self, *watch_keys: str) -> AbstractAsyncContextManager[Transaction]:
        """Open an optimistic transaction watching the given keys.

        Usage:
            async with store.transaction("question:1:votes") as txn:
                previous = await txn.hget("question:1:votes", "alice")
                txn.multi()
                txn.hset("question:1:votes", {"alice": "3"})
                await txn.execute()
        """
        pass

    async def close(self) -> None:
        """Release connections held by the store."""
        return None
