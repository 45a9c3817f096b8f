"""Application layer DI providers."""

from dishka import Scope, provide

from predictably.application.usecase.job import CleanupUseCase, CloseVotingUseCase
from predictably.application.usecase.prediction import (
    GetMyPredictionUseCase,
    SubmitPredictionUseCase,
)
from predictably.application.usecase.question import (
    CreateQuestionUseCase,
    GetQuestionDetailsUseCase,
    ListQuestionsUseCase,
)
from predictably.application.usecase.user import (
    GetUserHistoryUseCase,
    GetUserStatsUseCase,
)
from predictably.application.usecase.vote import GetMyVoteUseCase, SubmitVoteUseCase
from predictably.domain.repository import GameRepository
from predictably.domain.service import (
    ClosingService,
    PredictionService,
    QuestionService,
    StatsService,
    VoteService,
)
from predictably.domain.value import Scale
from predictably.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_submit_vote_use_case(
        self, vote_service: VoteService, stats_service: StatsService, scale: Scale
    ) -> SubmitVoteUseCase:
        """Provide submit vote use case."""
        return SubmitVoteUseCase(
            vote_service=vote_service, stats_service=stats_service, scale=scale
        )

    @provide(scope=Scope.REQUEST)
    def get_get_my_vote_use_case(
        self, question_service: QuestionService, vote_service: VoteService
    ) -> GetMyVoteUseCase:
        """Provide get my vote use case."""
        return GetMyVoteUseCase(
            question_service=question_service, vote_service=vote_service
        )

    # Prediction use cases
    @provide(scope=Scope.REQUEST)
    def get_submit_prediction_use_case(
        self,
        prediction_service: PredictionService,
        stats_service: StatsService,
        scale: Scale,
    ) -> SubmitPredictionUseCase:
        """Provide submit prediction use case."""
        return SubmitPredictionUseCase(
            prediction_service=prediction_service,
            stats_service=stats_service,
            scale=scale,
        )

    @provide(scope=Scope.REQUEST)
    def get_get_my_prediction_use_case(
        self,
        question_service: QuestionService,
        prediction_service: PredictionService,
    ) -> GetMyPredictionUseCase:
        """Provide get my prediction use case."""
        return GetMyPredictionUseCase(
            question_service=question_service, prediction_service=prediction_service
        )

    # Question use cases
    @provide(scope=Scope.REQUEST)
    def get_create_question_use_case(
        self, question_service: QuestionService
    ) -> CreateQuestionUseCase:
        """Provide create question use case."""
        return CreateQuestionUseCase(question_service=question_service)

    @provide(scope=Scope.REQUEST)
    def get_get_question_details_use_case(
        self,
        question_service: QuestionService,
        vote_service: VoteService,
        prediction_service: PredictionService,
        stats_service: StatsService,
    ) -> GetQuestionDetailsUseCase:
        """Provide get question details use case."""
        return GetQuestionDetailsUseCase(
            question_service=question_service,
            vote_service=vote_service,
            prediction_service=prediction_service,
            stats_service=stats_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_list_questions_use_case(
        self, question_service: QuestionService
    ) -> ListQuestionsUseCase:
        """Provide list questions use case."""
        return ListQuestionsUseCase(question_service=question_service)

    # User use cases
    @provide(scope=Scope.REQUEST)
    def get_get_user_history_use_case(
        self,
        game_repository: GameRepository,
        vote_service: VoteService,
        prediction_service: PredictionService,
        stats_service: StatsService,
    ) -> GetUserHistoryUseCase:
        """Provide get user history use case."""
        return GetUserHistoryUseCase(
            game_repository=game_repository,
            vote_service=vote_service,
            prediction_service=prediction_service,
            stats_service=stats_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_get_user_stats_use_case(
        self, stats_service: StatsService
    ) -> GetUserStatsUseCase:
        """Provide get user stats use case."""
        return GetUserStatsUseCase(stats_service=stats_service)

    # Job use cases
    @provide(scope=Scope.REQUEST)
    def get_close_voting_use_case(
        self, closing_service: ClosingService
    ) -> CloseVotingUseCase:
        """Provide close voting use case."""
        return CloseVotingUseCase(closing_service=closing_service)

    @provide(scope=Scope.REQUEST)
    def get_cleanup_use_case(self, closing_service: ClosingService) -> CleanupUseCase:
        """Provide cleanup use case."""
        return CleanupUseCase(closing_service=closing_service)
