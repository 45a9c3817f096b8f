"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire

from predictably.config import GameSettings, Settings
from predictably.domain.repository import GameRepository
from predictably.persistence.repository import KeyValueGameRepository
from predictably.persistence.store import KeyValueStore, RedisKeyValueStore
from predictably.persistence.store.redis import create_redis_client
from predictably.util.di.base import ProviderBase
from predictably.util.observability import instrument_redis


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using Redis."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_store(self, settings: Settings) -> AsyncIterator[KeyValueStore]:
        """Provide the Redis-backed store, closed with the container."""
        # Instrument before the first connection is opened
        instrument_redis()
        store = RedisKeyValueStore(create_redis_client(settings))
        try:
            yield store
        finally:
            await store.close()
            logfire.info("Redis store closed")

    @provide(scope=Scope.REQUEST)
    def get_game_repository(
        self, store: KeyValueStore, game_settings: GameSettings
    ) -> GameRepository:
        """Provide Game repository."""
        return KeyValueGameRepository(
            store,
            correct_threshold=game_settings.correct_threshold,
            user_data_ttl_days=game_settings.user_data_ttl_days,
        )
