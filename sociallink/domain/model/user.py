"""User aggregate root.

Users sign in with a local password, with linked social accounts,
or with both.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from sociallink.domain.model.common import DomainModel
from sociallink.domain.value import RoleName, UserId, UserIdentifier


class User(DomainModel):
    """User aggregate root - provider-agnostic.

    Social-only users have no password hash. Such a user must keep at
    least one linked social account, otherwise they could never log in.
    """

    id: UserId
    identifier: UserIdentifier
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    password_hash: Optional[str] = None
    profile_image_url: Optional[str] = None
    roles: list[RoleName] = Field(default_factory=list)
    is_deleted: bool = False
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def has_password(self) -> bool:
        """Whether a local password credential is set."""
        return bool(self.password_hash)

    @property
    def full_name(self) -> Optional[str]:
        """First and last name joined, or None if neither is set."""
        parts = [p for p in (self.first_name, self.last_name) if p]
        return " ".join(parts) or None
