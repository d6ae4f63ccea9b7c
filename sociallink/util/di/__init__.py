"""Dependency injection module."""

from typing import Type

from sociallink.util.di.application import ProdApplicationProvider
from sociallink.util.di.base import Component, ProviderBase
from sociallink.util.di.core import ProdConfigProvider
from sociallink.util.di.domain import ProdDomainProvider
from sociallink.util.di.infrastructure import (
    OAuth2Provider,
    PersistenceProvider,
    ProdOAuth2Provider,
    ProdPersistenceProvider,
)

# Container assembly order; mockable components last
PROVIDERS: list[Type[ProviderBase]] = [
    # Always used as-is
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    # Swapped for fakes in tests
    OAuth2Provider,
    PersistenceProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Pick the provider class to instantiate for a container entry.

    Entries without subclasses are used directly. Entries with subclasses
    (``OAuth2Provider``, ``PersistenceProvider``) resolve to the subclass
    whose ``__is_mock__`` matches ``use_mock``. Test doubles only become
    visible once ``tests.di`` has been imported.

    Args:
        base: Entry from PROVIDERS
        use_mock: Select the test double instead of the production class

    Returns:
        Provider class, not instantiated

    Raises:
        ValueError: If no subclass matches
    """
    subclasses = base.__subclasses__()
    if not subclasses:
        return base

    impl = next(
        (c for c in subclasses if getattr(c, "__is_mock__", False) == use_mock),
        None,
    )

    if not impl:
        kind = "mock" if use_mock else "production"
        component_name = getattr(base, "__mock_component__", base.__name__)
        raise ValueError(f"No {kind} implementation for {component_name}")

    return impl


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    # Core providers
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    # Infrastructure base classes
    "OAuth2Provider",
    "PersistenceProvider",
    # Infrastructure implementations
    "ProdOAuth2Provider",
    "ProdPersistenceProvider",
]
