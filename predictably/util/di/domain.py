"""Domain layer DI providers."""

from dishka import Scope, provide

from predictably.config import GameSettings, IdentitySettings
from predictably.domain.repository import GameRepository
from predictably.domain.service import (
    ClosingService,
    IdentityService,
    PredictionService,
    QuestionService,
    StatsService,
    VoteService,
)
from predictably.domain.value import Scale
from predictably.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with the repository lifecycle.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_identity_service(
        self, identity_settings: IdentitySettings
    ) -> IdentityService:
        """Provide platform identity service."""
        return IdentityService(identity_settings=identity_settings)

    @provide
    def get_question_service(
        self, game_repository: GameRepository, game_settings: GameSettings
    ) -> QuestionService:
        """Provide question domain service."""
        return QuestionService(
            game_repository=game_repository, game_settings=game_settings
        )

    @provide
    def get_vote_service(self, game_repository: GameRepository) -> VoteService:
        """Provide vote domain service."""
        return VoteService(game_repository=game_repository)

    @provide
    def get_prediction_service(
        self, game_repository: GameRepository, game_settings: GameSettings
    ) -> PredictionService:
        """Provide prediction domain service."""
        return PredictionService(
            game_repository=game_repository,
            correct_threshold=game_settings.correct_threshold,
        )

    @provide
    def get_stats_service(
        self,
        game_repository: GameRepository,
        game_settings: GameSettings,
        scale: Scale,
    ) -> StatsService:
        """Provide statistics domain service."""
        return StatsService(
            game_repository=game_repository,
            scale=scale,
            correct_threshold=game_settings.correct_threshold,
        )

    @provide
    def get_closing_service(
        self, game_repository: GameRepository, game_settings: GameSettings
    ) -> ClosingService:
        """Provide closing domain service."""
        return ClosingService(
            game_repository=game_repository,
            retention_days=game_settings.retention_days,
        )
