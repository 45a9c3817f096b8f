"""Use case base."""

from abc import ABC, abstractmethod
from typing import Any


class BaseUseCase(ABC):
    """One player or job operation: validate the request, call services, shape the response."""

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass
