"""Tests for the store class definitions."""

from typing import get_type_hints

import pytest

from predictably.persistence.store import (
    InMemoryKeyValueStore,
    KeyValueStore,
    RedisKeyValueStore,
)


class TestStoreAnnotations:
    """The ``set`` method must not shadow the builtin in annotations."""

    @pytest.mark.parametrize(
        "store_class", [KeyValueStore, InMemoryKeyValueStore, RedisKeyValueStore]
    )
    def test_smembers_returns_builtin_set(self, store_class):
        hints = get_type_hints(store_class.smembers)

        assert hints["return"] == set[str]

    @pytest.mark.asyncio
    async def test_in_memory_smembers_is_a_set(self):
        store = InMemoryKeyValueStore()
        await store.sadd("questions:all", "q1", "q2")

        members = await store.smembers("questions:all")

        assert isinstance(members, set)
        assert members == {"q1", "q2"}
