"""Vote routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, Request, status
from pydantic import BaseModel

from predictably.application.usecase.vote import (
    GetMyVoteRequest,
    GetMyVoteResponse,
    GetMyVoteUseCase,
    SubmitVoteRequest,
    SubmitVoteResponse,
    SubmitVoteUseCase,
)
from predictably.domain.service import IdentityService

router = APIRouter(prefix="/api", tags=["votes"], route_class=DishkaRoute)


class VoteAPIRequest(BaseModel):
    """API request for voting on a question."""

    question_id: str
    value: int


@router.post("/vote", response_model=SubmitVoteResponse)
async def submit_vote(
    body: VoteAPIRequest,
    request: Request,
    submit_vote_use_case: FromDishka[SubmitVoteUseCase],
    identity_service: FromDishka[IdentityService],
) -> SubmitVoteResponse:
    """Vote on a question, replacing any earlier vote.

    Args:
        body: Question and vote value
        request: Incoming request carrying the identity header
        submit_vote_use_case: Submit vote use case from DI
        identity_service: Identity service (injected)

    Returns:
        Recorded vote and the updated histogram

    Raises:
        HTTPException: If not authenticated
    """
    user_id = identity_service.get_user_id(request.headers)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not authenticated",
        )

    return await submit_vote_use_case.execute(
        SubmitVoteRequest(
            question_id=body.question_id, value=body.value, user_id=user_id
        )
    )


@router.get("/my-vote/{question_id}", response_model=GetMyVoteResponse)
async def get_my_vote(
    question_id: str,
    request: Request,
    get_my_vote_use_case: FromDishka[GetMyVoteUseCase],
    identity_service: FromDishka[IdentityService],
) -> GetMyVoteResponse:
    """Get the caller's vote on a question, null if they have not voted."""
    user_id = identity_service.get_user_id(request.headers)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not authenticated",
        )

    return await get_my_vote_use_case.execute(
        GetMyVoteRequest(question_id=question_id, user_id=user_id)
    )
