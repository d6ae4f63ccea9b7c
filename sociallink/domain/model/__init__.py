"""Domain model entities for social login."""

from sociallink.domain.model.role import Role
from sociallink.domain.model.social_account_link import SocialAccountLink
from sociallink.domain.model.user import User

__all__ = [
    "Role",
    "SocialAccountLink",
    "User",
]
