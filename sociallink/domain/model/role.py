"""Role entity."""

from datetime import datetime, timezone

from pydantic import Field

from sociallink.domain.model.common import DomainModel
from sociallink.domain.value import RoleId, RoleName


class Role(DomainModel):
    """Authorization role. Roles are bootstrapped by migrations."""

    id: RoleId
    name: RoleName
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
