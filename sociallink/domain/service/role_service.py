"""Role domain service."""

import logfire

from sociallink.domain.error import RoleConfigurationMissingError
from sociallink.domain.model import Role
from sociallink.domain.repository import RoleRepository
from sociallink.domain.value import RoleName

from .base import Service


class RoleService(Service):
    """Domain service for role lookups."""

    def __init__(self, role_repository: RoleRepository) -> None:
        self.role_repository = role_repository

    async def require_role(self, name: RoleName) -> Role:
        """Get a bootstrapped role.

        Args:
            name: Role name

        Returns:
            The configured role

        Raises:
            RoleConfigurationMissingError: If the role was never bootstrapped
        """
        role = await self.role_repository.find_by_name(name)
        if not role:
            logfire.error("Required role not configured", role=name.value)
            raise RoleConfigurationMissingError(name.value)
        return role
