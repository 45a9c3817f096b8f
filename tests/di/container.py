"""Test container with in-memory persistence unless told otherwise."""

from dishka import AsyncContainer, Provider, make_async_container

from predictably.util.di import PROVIDERS, Component, mockable_components


def build_test_container(
    unmock: set[Component] | None = None,
    extra_providers: list[Provider] | None = None,
) -> AsyncContainer:
    """Build a container for tests.

    Every mockable component uses its mock unless named in ``unmock``.

    Args:
        unmock: Components to run against real infrastructure
        extra_providers: Additional providers, e.g. FastapiProvider for route tests

    Raises:
        ValueError: If ``unmock`` names an unknown component

    Examples:
        # Unit tests - in-memory store
        container = build_test_container()

        # Integration tests - real Redis
        container = build_test_container(unmock={"persistence"})
    """
    unmock = unmock or set()
    unknown = unmock - mockable_components()
    if unknown:
        raise ValueError(f"Unknown components: {unknown}")

    providers = [
        base.implementation(use_mock=base.__mock_component__ not in unmock)()
        if base.is_mockable()
        else base()
        for base in PROVIDERS
    ]
    return make_async_container(*providers, *(extra_providers or []))
