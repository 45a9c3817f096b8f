"""Dependency injection module."""

from predictably.util.di.application import ProdApplicationProvider
from predictably.util.di.base import Component, ProviderBase
from predictably.util.di.core import ProdConfigProvider
from predictably.util.di.domain import ProdDomainProvider
from predictably.util.di.infrastructure import (
    PersistenceProvider,
    ProdPersistenceProvider,
)

# Order does not matter to dishka; config, domain and use cases are concrete,
# persistence is the one swappable component.
PROVIDERS: list[type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    PersistenceProvider,
]


def mockable_components() -> set[Component]:
    """Names of the components that have a mock implementation."""
    return {
        base.__mock_component__
        for base in PROVIDERS
        if base.is_mockable() and base.__mock_component__
    }


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "mockable_components",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "PersistenceProvider",
    "ProdPersistenceProvider",
]
