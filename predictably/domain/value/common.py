"""Base class for value objects."""

from pydantic import BaseModel, ConfigDict


class ValueObject(BaseModel):
    """Immutable value compared field by field, e.g. a scale or a score."""

    model_config = ConfigDict(frozen=True)
