"""Domain value objects for the prediction game.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

from pydantic import model_validator

from predictably.domain.value.common import ValueObject


class Scale(ValueObject):
    """Inclusive integer range bounding every vote and prediction.

    Examples: Scale(minimum=-10, maximum=10) has 21 values.
    """

    minimum: int
    maximum: int

    @model_validator(mode="after")
    def validate_bounds(self) -> "Scale":
        """Validate the range is not empty."""
        if self.minimum >= self.maximum:
            raise ValueError("Scale minimum must be lower than maximum")
        return self

    def values(self) -> range:
        """Every integer on the scale, ascending."""
        return range(self.minimum, self.maximum + 1)

    def contains(self, value: float) -> bool:
        """Whether a value lies within the scale bounds."""
        return self.minimum <= value <= self.maximum


class PredictionScore(ValueObject):
    """Outcome of comparing a prediction to the crowd average."""

    accuracy: float  # Absolute distance from the actual average
    is_correct: bool
