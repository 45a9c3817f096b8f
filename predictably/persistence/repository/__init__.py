"""Game repository implementations."""

from predictably.persistence.repository.game import KeyValueGameRepository

__all__ = [
    "KeyValueGameRepository",
]
