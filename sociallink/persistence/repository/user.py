"""PostgreSQL implementation of User repository."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from sociallink.domain.error import DuplicateIdentifierError
from sociallink.domain.model import User
from sociallink.domain.repository import UserRepository
from sociallink.domain.value import UserId
from sociallink.persistence.mappers import row_to_user, user_to_dict
from sociallink.persistence.tables import users_table

IDENTIFIER_INDEX = "idx_users_identifier"


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: User ID to look up

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(
            users_table.c.id == user_id,
            users_table.c.is_deleted == False,  # noqa: E712
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by their email.

        Args:
            email: Email to search for

        Returns:
            User if found, None otherwise
        """
        stmt = (
            select(users_table)
            .where(
                users_table.c.email == email,
                users_table.c.is_deleted == False,  # noqa: E712
            )
            .order_by(users_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def exists_by_identifier(self, identifier: str) -> bool:
        """Check if a non-deleted user already uses an identifier.

        Args:
            identifier: Candidate account identifier

        Returns:
            True if taken, False otherwise
        """
        stmt = select(users_table.c.id).where(
            users_table.c.identifier == identifier,
            users_table.c.is_deleted == False,  # noqa: E712
        )
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: User to save

        Returns:
            Saved user

        Raises:
            DuplicateIdentifierError: If another live user holds the identifier
        """
        try:
            # Savepoint keeps the outer transaction usable after a conflict
            async with self.session.begin_nested():
                await self._write(user)
        except IntegrityError as e:
            if IDENTIFIER_INDEX not in str(e.orig):
                raise
            raise DuplicateIdentifierError(user.identifier.root) from e
        return user

    async def _write(self, user: User) -> None:
        # Soft-deleted rows count as existing
        stmt = select(users_table.c.id).where(users_table.c.id == user.id)
        existing = (await self.session.execute(stmt)).first()

        user_dict = user_to_dict(user)
        if existing:
            stmt = (
                users_table.update()
                .where(users_table.c.id == user.id)
                .values(**user_dict)
            )
        else:
            stmt = users_table.insert().values(**user_dict)

        await self.session.execute(stmt)
        await self.session.flush()

    async def delete(self, user_id: UserId) -> None:
        """Hard-delete a user.

        Args:
            user_id: User ID to delete
        """
        stmt = users_table.delete().where(users_table.c.id == user_id)
        await self.session.execute(stmt)
        await self.session.flush()
