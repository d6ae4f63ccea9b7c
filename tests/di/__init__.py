"""Mock providers for testing."""

from .oauth2 import MockOAuth2Provider
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "MockOAuth2Provider",
    "MockPersistenceProvider",
    "build_test_container",
]
