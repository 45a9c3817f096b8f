"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from predictably.config import GameSettings, IdentitySettings, Settings
from predictably.domain.value import Scale
from predictably.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_game_settings(self, settings: Settings) -> GameSettings:
        """Provide game rules."""
        return settings.game

    @provide(scope=Scope.APP)
    def provide_identity_settings(self, settings: Settings) -> IdentitySettings:
        """Provide identity settings."""
        return settings.identity

    @provide(scope=Scope.APP)
    def provide_scale(self, game_settings: GameSettings) -> Scale:
        """Provide the vote scale."""
        return Scale(minimum=game_settings.scale_min, maximum=game_settings.scale_max)
