"""Key-value store adapters."""

from predictably.persistence.store.base import KeyValueStore, Transaction
from predictably.persistence.store.inmemory import InMemoryKeyValueStore
from predictably.persistence.store.redis import RedisKeyValueStore

__all__ = [
    "KeyValueStore",
    "Transaction",
    "InMemoryKeyValueStore",
    "RedisKeyValueStore",
]
