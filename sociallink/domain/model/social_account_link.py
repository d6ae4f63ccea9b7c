"""Social account link entity.

Links an external provider identity to a local user account.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from sociallink.domain.model.common import DomainModel
from sociallink.domain.value import AuthProvider, SocialAccountLinkId, UserId


class SocialAccountLink(DomainModel):
    """External identity linked to a user account.

    A user can link several provider identities. The pair
    (provider, provider_id) belongs to at most one non-deleted link,
    and per user at most one non-deleted link is primary.
    """

    id: SocialAccountLinkId
    user_id: UserId
    provider: AuthProvider
    provider_id: str  # Permanent ID from provider
    provider_username: Optional[str] = None
    provider_email: Optional[str] = None
    provider_name: Optional[str] = None
    provider_avatar_url: Optional[str] = None
    provider_data: Optional[str] = None  # Raw provider payload (audit only)
    is_primary: bool = False  # Default external login method
    is_deleted: bool = False  # Soft delete on unlink
    last_used_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def display_name(self) -> str:
        """Best human-readable label for this link."""
        return (
            self.provider_name
            or self.provider_username
            or f"{self.provider.value}:{self.provider_id}"
        )
