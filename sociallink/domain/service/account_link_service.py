"""Social account link domain service.

Owns the link lifecycle and its per-user invariants:

- the first link of a user is primary
- at most one non-deleted link per user is primary, and exactly one
  while the user has any links
- a user without a password keeps at least one link
- a provider identity belongs to at most one user
"""

from datetime import datetime, timezone
from uuid import uuid4

import logfire

from sociallink.domain.error import (
    AlreadyLinkedElsewhereError,
    CannotUnlinkLastMethodError,
    DuplicateLinkError,
    NotFoundError,
)
from sociallink.domain.model import SocialAccountLink
from sociallink.domain.repository import SocialAccountLinkRepository, UserRepository
from sociallink.domain.value import SocialAccountLinkId, UserId, VerifiedIdentity

from .base import Service


class AccountLinkService(Service):
    """Domain service for social account links."""

    def __init__(
        self,
        link_repository: SocialAccountLinkRepository,
        user_repository: UserRepository,
    ) -> None:
        """Initialize account link service.

        Args:
            link_repository: Social account link repository
            user_repository: User repository (password checks on unlink)
        """
        self.link_repository = link_repository
        self.user_repository = user_repository

    async def list_links(self, user_id: UserId) -> list[SocialAccountLink]:
        """Get all non-deleted links of a user, oldest first."""
        with logfire.span("account_link_service.list_links", user_id=str(user_id)):
            links = await self.link_repository.find_all_by_user_id(user_id)
            logfire.info("Links retrieved", user_id=str(user_id), count=len(links))
            return links

    async def get_link_by_provider(
        self, identity: VerifiedIdentity
    ) -> SocialAccountLink | None:
        """Get the non-deleted link for a verified identity, if any."""
        return await self.link_repository.find_by_provider(
            identity.provider, identity.provider_id
        )

    async def refresh(
        self, link: SocialAccountLink, identity: VerifiedIdentity
    ) -> SocialAccountLink:
        """Copy the latest provider profile onto a link and mark it used.

        Args:
            link: Existing link of the identity
            identity: Freshly verified identity

        Returns:
            Updated link
        """
        now = datetime.now(timezone.utc)
        updated = link.model_copy(
            update={
                "provider_username": identity.username,
                "provider_email": identity.email,
                "provider_name": identity.name,
                "provider_avatar_url": identity.avatar_url,
                "provider_data": identity.raw_payload,
                "last_used_at": now,
                "updated_at": now,
            }
        )
        saved = await self.link_repository.save(updated)
        logfire.info(
            "Link refreshed",
            link_id=str(saved.id),
            provider=saved.provider.value,
            user_id=str(saved.user_id),
        )
        return saved

    async def create_link(
        self, user_id: UserId, identity: VerifiedIdentity
    ) -> SocialAccountLink:
        """Insert a new link for an identity no one has linked yet.

        The link is primary if it is the user's first.

        Args:
            user_id: Owning user
            identity: Verified identity to link

        Returns:
            Created link

        Raises:
            DuplicateLinkError: If the identity got linked in the meantime
        """
        existing_links = await self.link_repository.find_all_by_user_id(user_id)
        now = datetime.now(timezone.utc)
        link = SocialAccountLink(
            id=SocialAccountLinkId(uuid4()),
            user_id=user_id,
            provider=identity.provider,
            provider_id=identity.provider_id,
            provider_username=identity.username,
            provider_email=identity.email,
            provider_name=identity.name,
            provider_avatar_url=identity.avatar_url,
            provider_data=identity.raw_payload,
            is_primary=not existing_links,
            last_used_at=now,
            created_at=now,
            updated_at=now,
        )
        saved = await self.link_repository.save(link)
        logfire.info(
            "Link created",
            link_id=str(saved.id),
            provider=saved.provider.value,
            provider_id=saved.provider_id,
            user_id=str(user_id),
            is_primary=saved.is_primary,
        )
        return saved

    async def link(
        self,
        user_id: UserId,
        identity: VerifiedIdentity,
        make_primary: bool = False,
    ) -> SocialAccountLink:
        """Link an identity to the acting user, or refresh the existing link.

        Args:
            user_id: Acting user
            identity: Verified identity to link
            make_primary: Also make this the user's primary link

        Returns:
            Created or refreshed link

        Raises:
            AlreadyLinkedElsewhereError: If another user owns the identity
        """
        with logfire.span(
            "account_link_service.link",
            user_id=str(user_id),
            provider=identity.provider.value,
            provider_id=identity.provider_id,
        ):
            link = await self._upsert(user_id, identity)
            if make_primary and not link.is_primary:
                link = await self.make_primary(user_id, link.id)
            return link

    async def _upsert(
        self, user_id: UserId, identity: VerifiedIdentity
    ) -> SocialAccountLink:
        existing = await self.get_link_by_provider(identity)
        if existing is None:
            try:
                return await self.create_link(user_id, identity)
            except DuplicateLinkError:
                # Linked concurrently; decide again against the winner
                existing = await self.get_link_by_provider(identity)
                if existing is None:
                    raise

        if existing.user_id != user_id:
            logfire.warn(
                "Identity already linked to another user",
                provider=identity.provider.value,
                provider_id=identity.provider_id,
                user_id=str(user_id),
            )
            raise AlreadyLinkedElsewhereError(
                identity.provider.value, identity.provider_id
            )

        return await self.refresh(existing, identity)

    async def make_primary(
        self, user_id: UserId, link_id: SocialAccountLinkId
    ) -> SocialAccountLink:
        """Make one of the user's links primary and demote all others.

        Args:
            user_id: Acting user
            link_id: Link to promote

        Returns:
            The promoted link

        Raises:
            NotFoundError: If the user has no such non-deleted link
        """
        with logfire.span(
            "account_link_service.make_primary",
            user_id=str(user_id),
            link_id=str(link_id),
        ):
            links = await self.link_repository.find_all_by_user_id(user_id)
            target = next((link for link in links if link.id == link_id), None)
            if target is None:
                logfire.warn(
                    "Link not found for user", user_id=str(user_id), link_id=str(link_id)
                )
                raise NotFoundError("SocialAccountLink", str(link_id))

            now = datetime.now(timezone.utc)
            changed = [
                link.model_copy(
                    update={"is_primary": link.id == link_id, "updated_at": now}
                )
                for link in links
                if link.is_primary != (link.id == link_id)
            ]
            if changed:
                await self.link_repository.save_all(changed)

            logfire.info(
                "Primary link changed",
                user_id=str(user_id),
                link_id=str(link_id),
                changed=len(changed),
            )
            return next((link for link in changed if link.id == link_id), target)

    async def unlink(self, user_id: UserId, link_id: SocialAccountLinkId) -> None:
        """Soft-delete one of the user's links.

        If the removed link was primary, the most recently used remaining
        link becomes primary in the same batch.

        Args:
            user_id: Acting user
            link_id: Link to remove

        Raises:
            NotFoundError: If the user has no such non-deleted link
            CannotUnlinkLastMethodError: If it is the user's last link and
                the user has no password
        """
        with logfire.span(
            "account_link_service.unlink", user_id=str(user_id), link_id=str(link_id)
        ):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                raise NotFoundError("User", str(user_id))

            links = await self.link_repository.find_all_by_user_id(user_id)
            target = next((link for link in links if link.id == link_id), None)
            if target is None:
                logfire.warn(
                    "Link not found for user", user_id=str(user_id), link_id=str(link_id)
                )
                raise NotFoundError("SocialAccountLink", str(link_id))

            remaining = [link for link in links if link.id != link_id]
            if not remaining and not user.has_password:
                logfire.warn("Refusing to unlink last login method", user_id=str(user_id))
                raise CannotUnlinkLastMethodError(str(user_id))

            now = datetime.now(timezone.utc)
            batch = [
                target.model_copy(
                    update={"is_deleted": True, "is_primary": False, "updated_at": now}
                )
            ]
            if target.is_primary and remaining:
                successor = max(
                    remaining, key=lambda link: link.last_used_at or link.created_at
                )
                batch.append(
                    successor.model_copy(update={"is_primary": True, "updated_at": now})
                )

            await self.link_repository.save_all(batch)
            logfire.info(
                "Link removed",
                user_id=str(user_id),
                link_id=str(link_id),
                provider=target.provider.value,
                promoted=len(batch) > 1,
            )
