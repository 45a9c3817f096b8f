"""Submit vote use case."""

from pydantic import BaseModel

from predictably.application.usecase.base import BaseUseCase
from predictably.domain.error import NotFoundError, ValidationError
from predictably.domain.model import Vote, VoteHistogram
from predictably.domain.service import StatsService, VoteService
from predictably.domain.value import QuestionId, Scale, UserId


class SubmitVoteRequest(BaseModel):
    """Submit vote request."""

    question_id: str
    value: int
    user_id: str  # From the platform identity header


class SubmitVoteResponse(BaseModel):
    """Submit vote response."""

    vote: Vote
    vote_histogram: VoteHistogram
    message: str = "Vote submitted successfully"


class SubmitVoteUseCase(BaseUseCase):
    """Use case for voting on a question."""

    def __init__(
        self, vote_service: VoteService, stats_service: StatsService, scale: Scale
    ) -> None:
        """Initialize submit vote use case.

        Args:
            vote_service: Vote domain service
            stats_service: Statistics domain service
            scale: Allowed vote values
        """
        self.vote_service = vote_service
        self.stats_service = stats_service
        self.scale = scale

    async def execute(self, request: SubmitVoteRequest) -> SubmitVoteResponse:
        """Execute vote flow.

        Raises:
            ValidationError: If the value is outside the scale
            NotFoundError: If the question does not exist
            VotingClosedError: If voting has closed
        """
        if not self.scale.contains(request.value):
            raise ValidationError(
                f"Vote value must be between {self.scale.minimum} "
                f"and {self.scale.maximum}"
            )

        question_id = QuestionId(request.question_id)
        vote = await self.vote_service.cast_vote(
            user_id=UserId(request.user_id),
            question_id=question_id,
            value=request.value,
        )
        histogram = await self.stats_service.get_histogram(question_id)
        if histogram is None:
            raise NotFoundError("Question", question_id)

        return SubmitVoteResponse(vote=vote, vote_histogram=histogram)
