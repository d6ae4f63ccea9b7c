"""Social account link repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from sociallink.domain.model.social_account_link import SocialAccountLink
from sociallink.domain.value import AuthProvider, SocialAccountLinkId, UserId


class SocialAccountLinkRepository(ABC):
    """Repository for SocialAccountLink entity.

    Finders only return non-deleted links unless stated otherwise.
    """

    @abstractmethod
    async def find_by_id(
        self, link_id: SocialAccountLinkId
    ) -> Optional[SocialAccountLink]:
        """Find a link by ID, including soft-deleted ones.

        Args:
            link_id: The link's unique identifier

        Returns:
            The link if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_provider(
        self, provider: AuthProvider, provider_id: str
    ) -> Optional[SocialAccountLink]:
        """Find the non-deleted link for a provider identity.

        Args:
            provider: The authentication provider
            provider_id: The user's ID on that provider

        Returns:
            The link if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all_by_user_id(self, user_id: UserId) -> list[SocialAccountLink]:
        """Get all non-deleted links of a user, oldest first.

        Args:
            user_id: The user's unique identifier

        Returns:
            List of links (may be empty)
        """
        pass

    @abstractmethod
    async def save(self, link: SocialAccountLink) -> SocialAccountLink:
        """Save a link (create or update).

        Args:
            link: The link to save

        Returns:
            The saved link

        Raises:
            DuplicateLinkError: If another non-deleted link already holds
                the same (provider, provider_id)
        """
        pass

    @abstractmethod
    async def save_all(self, links: list[SocialAccountLink]) -> list[SocialAccountLink]:
        """Persist several links of one user as a single batch.

        Readers never observe a state where only part of the batch
        is applied.

        Args:
            links: Links to update

        Returns:
            The saved links
        """
        pass
