"""Question routes."""

from typing import Optional

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, Request, status
from pydantic import BaseModel, Field

from predictably.application.usecase.question import (
    CreateQuestionRequest,
    CreateQuestionResponse,
    CreateQuestionUseCase,
    GetQuestionDetailsRequest,
    GetQuestionDetailsResponse,
    GetQuestionDetailsUseCase,
    ListQuestionsRequest,
    ListQuestionsResponse,
    ListQuestionsUseCase,
)
from predictably.domain.service import IdentityService

router = APIRouter(prefix="/api", tags=["questions"], route_class=DishkaRoute)


class CreateQuestionAPIRequest(BaseModel):
    """API request for submitting a question."""

    text: str = Field(min_length=1, max_length=500)
    ttl_hours: Optional[int] = None
    question_id: Optional[str] = None
    feature: bool = False


@router.get("/questions", response_model=ListQuestionsResponse)
async def list_questions(
    list_questions_use_case: FromDishka[ListQuestionsUseCase],
    active_only: bool = False,
) -> ListQuestionsResponse:
    """List submitted questions, newest first."""
    return await list_questions_use_case.execute(
        ListQuestionsRequest(active_only=active_only)
    )


@router.post(
    "/questions",
    response_model=CreateQuestionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_question(
    body: CreateQuestionAPIRequest,
    request: Request,
    create_question_use_case: FromDishka[CreateQuestionUseCase],
    identity_service: FromDishka[IdentityService],
) -> CreateQuestionResponse:
    """Submit a question for voting.

    Requires authentication. The caller is recorded as the submitter.
    """
    user_id = identity_service.get_user_id(request.headers)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not authenticated",
        )

    return await create_question_use_case.execute(
        CreateQuestionRequest(
            text=body.text,
            ttl_hours=body.ttl_hours,
            question_id=body.question_id,
            feature=body.feature,
            user_id=user_id,
        )
    )


@router.get(
    "/question-details/{question_id}", response_model=GetQuestionDetailsResponse
)
async def get_question_details(
    question_id: str,
    request: Request,
    get_question_details_use_case: FromDishka[GetQuestionDetailsUseCase],
    identity_service: FromDishka[IdentityService],
) -> GetQuestionDetailsResponse:
    """Get a question's results.

    Anonymous callers get the same payload without personal fields.
    """
    user_id = identity_service.get_user_id(request.headers)
    return await get_question_details_use_case.execute(
        GetQuestionDetailsRequest(question_id=question_id, user_id=user_id)
    )
