"""In-memory social account link repository for testing."""

from typing import Optional

from sociallink.domain.error import DuplicateLinkError
from sociallink.domain.model.social_account_link import SocialAccountLink
from sociallink.domain.repository.social_account_link import (
    SocialAccountLinkRepository,
)
from sociallink.domain.value import AuthProvider, SocialAccountLinkId, UserId


class InMemorySocialAccountLinkRepository(SocialAccountLinkRepository):
    """In-memory implementation of SocialAccountLinkRepository for testing.

    Enforces the same live-identity uniqueness as the database index.
    """

    def __init__(self) -> None:
        self._links: dict[SocialAccountLinkId, SocialAccountLink] = {}

    async def find_by_id(
        self, link_id: SocialAccountLinkId
    ) -> Optional[SocialAccountLink]:
        """Find link by ID, soft-deleted links included."""
        return self._links.get(link_id)

    async def find_by_provider(
        self, provider: AuthProvider, provider_id: str
    ) -> Optional[SocialAccountLink]:
        """Find the live link of a provider identity."""
        return self._find_live(provider, provider_id)

    def _find_live(
        self, provider: AuthProvider, provider_id: str
    ) -> Optional[SocialAccountLink]:
        for link in self._links.values():
            if (
                link.provider == provider
                and link.provider_id == provider_id
                and not link.is_deleted
            ):
                return link
        return None

    async def find_all_by_user_id(self, user_id: UserId) -> list[SocialAccountLink]:
        """Find all live links of a user, oldest first."""
        matches = [
            link
            for link in self._links.values()
            if link.user_id == user_id and not link.is_deleted
        ]
        # Sort by created_at
        matches.sort(key=lambda link: link.created_at)
        return matches

    async def save(self, link: SocialAccountLink) -> SocialAccountLink:
        """Save link, rejecting a second live link for one identity."""
        if not link.is_deleted:
            holder = self._find_live(link.provider, link.provider_id)
            if holder and holder.id != link.id:
                raise DuplicateLinkError(link.provider.value, link.provider_id)

        self._links[link.id] = link
        return link

    async def save_all(self, links: list[SocialAccountLink]) -> list[SocialAccountLink]:
        """Save several links at once."""
        for link in links:
            self._links[link.id] = link
        return links
