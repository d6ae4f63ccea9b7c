"""In-memory role repository for testing."""

from typing import Optional
from uuid import uuid4

from sociallink.domain.model.role import Role
from sociallink.domain.repository.role import RoleRepository
from sociallink.domain.value import RoleId, RoleName


class InMemoryRoleRepository(RoleRepository):
    """In-memory implementation of RoleRepository for testing.

    Starts with the given roles bootstrapped, like a migrated database.
    """

    def __init__(self, names: tuple[RoleName, ...] = (RoleName.CUSTOMER,)) -> None:
        self._roles: dict[RoleName, Role] = {
            name: Role(id=RoleId(uuid4()), name=name) for name in names
        }

    async def find_by_name(self, name: RoleName) -> Optional[Role]:
        """Find a role by name."""
        return self._roles.get(name)

    async def save(self, role: Role) -> Role:
        """Insert a role, keeping the existing one if the name is taken."""
        return self._roles.setdefault(role.name, role)
