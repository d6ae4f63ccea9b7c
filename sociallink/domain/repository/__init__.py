"""Repository interfaces for the social login domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from sociallink.domain.repository.role import RoleRepository
from sociallink.domain.repository.social_account_link import (
    SocialAccountLinkRepository,
)
from sociallink.domain.repository.user import UserRepository

__all__ = [
    "RoleRepository",
    "SocialAccountLinkRepository",
    "UserRepository",
]
