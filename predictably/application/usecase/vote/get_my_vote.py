"""Get my vote use case."""

from typing import Optional

from pydantic import BaseModel

from predictably.application.usecase.base import BaseUseCase
from predictably.domain.error import NotFoundError
from predictably.domain.model import Question, Vote
from predictably.domain.service import QuestionService, VoteService
from predictably.domain.value import QuestionId, UserId


class GetMyVoteRequest(BaseModel):
    """Get my vote request."""

    question_id: str
    user_id: str


class GetMyVoteResponse(BaseModel):
    """Get my vote response."""

    question: Question
    vote: Optional[Vote] = None


class GetMyVoteUseCase(BaseUseCase):
    """Use case for reading the caller's vote on a question."""

    def __init__(
        self, question_service: QuestionService, vote_service: VoteService
    ) -> None:
        self.question_service = question_service
        self.vote_service = vote_service

    async def execute(self, request: GetMyVoteRequest) -> GetMyVoteResponse:
        question_id = QuestionId(request.question_id)
        question = await self.question_service.get_question(question_id)
        if question is None:
            raise NotFoundError("Question", question_id)

        vote = await self.vote_service.get_user_vote(
            UserId(request.user_id), question_id
        )
        return GetMyVoteResponse(question=question, vote=vote)
