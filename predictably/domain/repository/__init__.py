"""Repository interfaces for the prediction game.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from predictably.domain.repository.game import GameRepository

__all__ = [
    "GameRepository",
]
