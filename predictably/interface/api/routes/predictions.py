"""Prediction routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, Request, status
from pydantic import BaseModel

from predictably.application.usecase.prediction import (
    GetMyPredictionRequest,
    GetMyPredictionResponse,
    GetMyPredictionUseCase,
    SubmitPredictionRequest,
    SubmitPredictionResponse,
    SubmitPredictionUseCase,
)
from predictably.domain.service import IdentityService

router = APIRouter(prefix="/api", tags=["predictions"], route_class=DishkaRoute)


class PredictAPIRequest(BaseModel):
    """API request for predicting a question's crowd average."""

    question_id: str
    predicted_average: float


@router.post("/predict", response_model=SubmitPredictionResponse)
async def submit_prediction(
    body: PredictAPIRequest,
    request: Request,
    submit_prediction_use_case: FromDishka[SubmitPredictionUseCase],
    identity_service: FromDishka[IdentityService],
) -> SubmitPredictionResponse:
    """Predict the crowd average of a question.

    The response scores the prediction against the average at this moment.
    Later reads rescore it while voting stays open.

    Raises:
        HTTPException: If not authenticated
    """
    user_id = identity_service.get_user_id(request.headers)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not authenticated",
        )

    return await submit_prediction_use_case.execute(
        SubmitPredictionRequest(
            question_id=body.question_id,
            predicted_average=body.predicted_average,
            user_id=user_id,
        )
    )


@router.get("/my-prediction/{question_id}", response_model=GetMyPredictionResponse)
async def get_my_prediction(
    question_id: str,
    request: Request,
    get_my_prediction_use_case: FromDishka[GetMyPredictionUseCase],
    identity_service: FromDishka[IdentityService],
) -> GetMyPredictionResponse:
    """Get the caller's prediction on a question, scored live."""
    user_id = identity_service.get_user_id(request.headers)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not authenticated",
        )

    return await get_my_prediction_use_case.execute(
        GetMyPredictionRequest(question_id=question_id, user_id=user_id)
    )
