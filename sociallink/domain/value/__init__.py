"""Domain value objects for social login."""

from sociallink.domain.value.identifiers import (
    RoleId,
    SocialAccountLinkId,
    UserId,
)
from sociallink.domain.value.types import (
    AuthProvider,
    RoleName,
    UserIdentifier,
    VerifiedIdentity,
    WidgetAuthData,
)

__all__ = [
    # Identifiers
    "UserId",
    "RoleId",
    "SocialAccountLinkId",
    # Types
    "AuthProvider",
    "RoleName",
    "UserIdentifier",
    "VerifiedIdentity",
    "WidgetAuthData",
]
