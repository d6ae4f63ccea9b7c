"""Mock persistence providers for testing."""

from dishka import Scope, provide

from sociallink.domain.repository import (
    RoleRepository,
    SocialAccountLinkRepository,
    UserRepository,
)
from sociallink.persistence.repository.inmemory import (
    InMemoryRoleRepository,
    InMemorySocialAccountLinkRepository,
    InMemoryUserRepository,
)
from sociallink.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Uses REQUEST scope to ensure test isolation - each test gets fresh repositories.
    The role repository starts with the customer role, like a migrated database.
    """

    __is_mock__ = True

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self) -> UserRepository:
        """Provide in-memory user repository."""
        return InMemoryUserRepository()

    @provide(scope=Scope.REQUEST)
    def get_role_repository(self) -> RoleRepository:
        """Provide in-memory role repository."""
        return InMemoryRoleRepository()

    @provide(scope=Scope.REQUEST)
    def get_social_account_link_repository(self) -> SocialAccountLinkRepository:
        """Provide in-memory social account link repository."""
        return InMemorySocialAccountLinkRepository()
