"""Shared base for game records."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Immutable game record.

    Records are rebuilt from storage on every read, never mutated in place;
    use ``model_copy(update=...)`` to derive a changed one.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)
