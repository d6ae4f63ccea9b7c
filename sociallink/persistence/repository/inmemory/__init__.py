"""In-memory repository implementations for testing."""

from .role import InMemoryRoleRepository
from .social_account_link import InMemorySocialAccountLinkRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryRoleRepository",
    "InMemorySocialAccountLinkRepository",
    "InMemoryUserRepository",
]
