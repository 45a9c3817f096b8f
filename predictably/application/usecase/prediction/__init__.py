"""Prediction use cases."""

from .get_my_prediction import (
    GetMyPredictionRequest,
    GetMyPredictionResponse,
    GetMyPredictionUseCase,
)
from .submit_prediction import (
    SubmitPredictionRequest,
    SubmitPredictionResponse,
    SubmitPredictionUseCase,
)

__all__ = [
    "GetMyPredictionRequest",
    "GetMyPredictionResponse",
    "GetMyPredictionUseCase",
    "SubmitPredictionRequest",
    "SubmitPredictionResponse",
    "SubmitPredictionUseCase",
]
