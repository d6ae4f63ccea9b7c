"""Role repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from sociallink.domain.model.role import Role
from sociallink.domain.value import RoleName


class RoleRepository(ABC):
    """Repository for Role entity."""

    @abstractmethod
    async def find_by_name(self, name: RoleName) -> Optional[Role]:
        """Find a role by name.

        Args:
            name: The role name

        Returns:
            The role if configured, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, role: Role) -> Role:
        pass
