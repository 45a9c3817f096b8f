"""Base class for dependency injection providers."""

from typing import ClassVar, Literal

from dishka import Provider

# Components the test container can swap for in-memory fakes
Component = Literal["persistence"]


class ProviderBase(Provider):
    """Provider with mock-selection metadata.

    A provider with subclasses is a mockable component: its subclasses are
    the production and mock implementations, told apart by ``__is_mock__``.
    A provider without subclasses is used as is.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False

    @classmethod
    def is_mockable(cls) -> bool:
        return bool(cls.__subclasses__())

    @classmethod
    def implementation(cls, use_mock: bool = False) -> type["ProviderBase"]:
        """Pick the concrete provider class for this component.

        Raises:
            ValueError: If no implementation of the requested kind exists
        """
        if not cls.is_mockable():
            return cls

        for subclass in cls.__subclasses__():
            if subclass.__is_mock__ == use_mock:
                return subclass

        kind = "mock" if use_mock else "production"
        raise ValueError(
            f"No {kind} implementation for {cls.__mock_component__ or cls.__name__}"
        )
