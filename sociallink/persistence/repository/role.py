"""PostgreSQL implementation of Role repository."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from sociallink.domain.model import Role
from sociallink.domain.repository import RoleRepository
from sociallink.domain.value import RoleName
from sociallink.persistence.mappers import role_to_dict, row_to_role
from sociallink.persistence.tables import roles_table


class PostgresRoleRepository(RoleRepository):
    """PostgreSQL implementation of RoleRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_name(self, name: RoleName) -> Optional[Role]:
        """Find a role by name."""
        stmt = select(roles_table).where(roles_table.c.name == name.value)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_role(dict(row)) if row else None

    async def save(self, role: Role) -> Role:
        """Insert a role, keeping the existing row if the name is taken."""
        stmt = (
            insert(roles_table)
            .values(**role_to_dict(role))
            .on_conflict_do_nothing(index_elements=[roles_table.c.name])
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return role
