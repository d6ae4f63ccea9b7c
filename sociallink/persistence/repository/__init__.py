"""PostgreSQL repository implementations."""

from sociallink.persistence.repository.role import PostgresRoleRepository
from sociallink.persistence.repository.social_account_link import (
    PostgresSocialAccountLinkRepository,
)
from sociallink.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresRoleRepository",
    "PostgresSocialAccountLinkRepository",
    "PostgresUserRepository",
]
