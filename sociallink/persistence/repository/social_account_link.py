"""PostgreSQL implementation of SocialAccountLink repository."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from sociallink.domain.error import DuplicateLinkError
from sociallink.domain.model import SocialAccountLink
from sociallink.domain.repository import SocialAccountLinkRepository
from sociallink.domain.value import AuthProvider, SocialAccountLinkId, UserId
from sociallink.persistence.mappers import (
    row_to_social_account_link,
    social_account_link_to_dict,
)
from sociallink.persistence.tables import social_account_links_table

links_table = social_account_links_table


class PostgresSocialAccountLinkRepository(SocialAccountLinkRepository):
    """PostgreSQL implementation of SocialAccountLinkRepository.

    The partial unique index on (provider, provider_id) is the final
    arbiter between concurrent logins of the same identity.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(
        self, link_id: SocialAccountLinkId
    ) -> Optional[SocialAccountLink]:
        """Get a link by ID, soft-deleted links included.

        Args:
            link_id: Link ID to look up

        Returns:
            SocialAccountLink if found, None otherwise
        """
        stmt = select(links_table).where(links_table.c.id == link_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_social_account_link(dict(row)) if row else None

    async def find_by_provider(
        self, provider: AuthProvider, provider_id: str
    ) -> Optional[SocialAccountLink]:
        """Get the live link of a provider identity.

        Args:
            provider: Authentication provider
            provider_id: Provider-specific user ID

        Returns:
            SocialAccountLink if found, None otherwise
        """
        stmt = select(links_table).where(
            links_table.c.provider == provider.value,
            links_table.c.provider_id == provider_id,
            links_table.c.is_deleted == False,  # noqa: E712
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_social_account_link(dict(row)) if row else None

    async def find_all_by_user_id(self, user_id: UserId) -> list[SocialAccountLink]:
        """Find all live links of a user, oldest first.

        Args:
            user_id: User ID to find links for

        Returns:
            List of SocialAccountLink objects (may be empty)
        """
        stmt = (
            select(links_table)
            .where(
                links_table.c.user_id == user_id,
                links_table.c.is_deleted == False,  # noqa: E712
            )
            .order_by(links_table.c.created_at, links_table.c.id)
        )
        result = await self.session.execute(stmt)
        rows = result.mappings().all()
        return [row_to_social_account_link(dict(row)) for row in rows]

    async def save(self, link: SocialAccountLink) -> SocialAccountLink:
        """Save link to database.

        Args:
            link: SocialAccountLink to save

        Returns:
            Saved SocialAccountLink

        Raises:
            DuplicateLinkError: If the identity already has a live link
        """
        try:
            # Savepoint keeps the outer transaction usable after a conflict
            async with self.session.begin_nested():
                await self._write(link)
        except IntegrityError as e:
            raise DuplicateLinkError(link.provider.value, link.provider_id) from e
        return link

    async def save_all(
        self, links: list[SocialAccountLink]
    ) -> list[SocialAccountLink]:
        """Save several links in one savepoint.

        Args:
            links: Links to persist

        Returns:
            Saved links
        """
        async with self.session.begin_nested():
            for link in links:
                await self._write(link)
        return links

    async def _write(self, link: SocialAccountLink) -> None:
        link_dict = social_account_link_to_dict(link)

        existing = await self.find_by_id(link.id)
        if existing:
            stmt = (
                links_table.update()
                .where(links_table.c.id == link.id)
                .values(**link_dict)
            )
        else:
            stmt = links_table.insert().values(**link_dict)

        await self.session.execute(stmt)
        await self.session.flush()
