"""Vote use cases."""

from .get_my_vote import GetMyVoteRequest, GetMyVoteResponse, GetMyVoteUseCase
from .submit_vote import SubmitVoteRequest, SubmitVoteResponse, SubmitVoteUseCase

__all__ = [
    "GetMyVoteRequest",
    "GetMyVoteResponse",
    "GetMyVoteUseCase",
    "SubmitVoteRequest",
    "SubmitVoteResponse",
    "SubmitVoteUseCase",
]
