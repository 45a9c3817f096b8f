"""Scheduled job use cases."""

from .cleanup import CleanupRequest, CleanupResponse, CleanupUseCase
from .close_voting import CloseVotingRequest, CloseVotingResponse, CloseVotingUseCase

__all__ = [
    "CleanupRequest",
    "CleanupResponse",
    "CleanupUseCase",
    "CloseVotingRequest",
    "CloseVotingResponse",
    "CloseVotingUseCase",
]
