"""Identity resolution domain service.

Finds or creates the local user behind a verified identity.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import uuid4

import logfire

from sociallink.domain.error import (
    DuplicateIdentifierError,
    DuplicateLinkError,
    NotFoundError,
)
from sociallink.domain.model import SocialAccountLink, User
from sociallink.domain.repository import UserRepository
from sociallink.domain.value import (
    AuthProvider,
    RoleName,
    UserId,
    UserIdentifier,
    VerifiedIdentity,
)

from .account_link_service import AccountLinkService
from .base import Service
from .identifier_allocator import allocate_identifier, identifier_base
from .role_service import RoleService
from .user_service import UserService


@dataclass(frozen=True)
class ResolutionResult:
    """User and link a verified identity resolved to."""

    user: User
    link: SocialAccountLink
    is_new_user: bool


def split_name(name: str | None) -> tuple[str | None, str | None]:
    """Split a display name on its first whitespace run.

    Returns:
        (first_name, last_name); either may be None
    """
    if not name or not name.strip():
        return None, None
    parts = name.strip().split(None, 1)
    return parts[0], parts[1] if len(parts) > 1 else None


class IdentityResolutionService(Service):
    """Resolves verified identities to local users.

    Each attempt runs exactly one of:

    1. existing link  -> its user, link refreshed
    2. email match    -> existing user, new link (OAuth2 only)
    3. no match       -> new customer user with its first (primary) link
    """

    def __init__(
        self,
        user_service: UserService,
        user_repository: UserRepository,
        role_service: RoleService,
        account_link_service: AccountLinkService,
        max_attempts: int = 3,
    ) -> None:
        """Initialize identity resolution service.

        Args:
            user_service: User domain service
            user_repository: User repository
            role_service: Role domain service
            account_link_service: Account link domain service
            max_attempts: Resolution attempts when losing a creation race
        """
        self.user_service = user_service
        self.user_repository = user_repository
        self.role_service = role_service
        self.account_link_service = account_link_service
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.max_attempts = max_attempts

    async def resolve(self, identity: VerifiedIdentity) -> ResolutionResult:
        """Find or create the user for a verified identity.

        Concurrent first logins of the same identity race on user and link
        creation. The loser sees DuplicateIdentifierError (both picked the
        same identifier) or DuplicateLinkError, undoes its own writes and
        starts over, which then finds the winner's link.

        Args:
            identity: Verified identity

        Returns:
            Resolved user, its link for this identity, and whether the
            user was created by this call

        Raises:
            RoleConfigurationMissingError: If the customer role is missing
            NotFoundError: If a link points at a missing user
            DuplicateIdentifierError, DuplicateLinkError: If every attempt
                lost a creation race
        """
        with logfire.span(
            "identity_resolution_service.resolve",
            provider=identity.provider.value,
            provider_id=identity.provider_id,
        ):
            attempt = 1
            while True:
                try:
                    return await self._resolve_once(identity)
                except (DuplicateIdentifierError, DuplicateLinkError) as e:
                    if attempt >= self.max_attempts:
                        logfire.error(
                            "Identity resolution kept losing creation races",
                            provider=identity.provider.value,
                            provider_id=identity.provider_id,
                            conflict=type(e).__name__,
                            attempts=attempt,
                        )
                        raise
                    logfire.warn(
                        "Identity linked concurrently, resolving again",
                        provider=identity.provider.value,
                        provider_id=identity.provider_id,
                        conflict=type(e).__name__,
                        attempt=attempt,
                    )
                    attempt += 1

    async def _resolve_once(self, identity: VerifiedIdentity) -> ResolutionResult:
        # Step 1: existing link
        link = await self.account_link_service.get_link_by_provider(identity)
        if link:
            user = await self.user_repository.find_by_id(link.user_id)
            if not user:
                logfire.error(
                    "Link points at missing user",
                    link_id=str(link.id),
                    user_id=str(link.user_id),
                )
                raise NotFoundError("User", str(link.user_id))

            refreshed = await self.account_link_service.refresh(link, identity)
            logfire.info(
                "Existing user logged in",
                user_id=str(user.id),
                provider=identity.provider.value,
            )
            return ResolutionResult(user=user, link=refreshed, is_new_user=False)

        # Step 2: email match, only where the provider vouches for the email
        if identity.provider == AuthProvider.OAUTH2 and identity.email:
            user = await self.user_service.get_user_by_email(identity.email)
            if user:
                new_link = await self.account_link_service.create_link(
                    user.id, identity
                )
                logfire.info(
                    "Identity linked to existing user by email",
                    user_id=str(user.id),
                    provider=identity.provider.value,
                )
                return ResolutionResult(user=user, link=new_link, is_new_user=False)

        # Step 3: new customer
        return await self._create_user(identity)

    async def _create_user(self, identity: VerifiedIdentity) -> ResolutionResult:
        role = await self.role_service.require_role(RoleName.CUSTOMER)

        identifier = await allocate_identifier(
            identifier_base(identity), self.user_service.identifier_exists
        )
        first_name, last_name = split_name(identity.name)
        now = datetime.now(timezone.utc)

        user = User(
            id=UserId(uuid4()),
            identifier=UserIdentifier(identifier),
            email=identity.email,
            first_name=first_name,
            last_name=last_name,
            password_hash=None,  # Social-only account
            profile_image_url=identity.avatar_url,
            roles=[role.name],
            created_at=now,
            updated_at=now,
        )
        # A rejected insert leaves nothing behind to undo
        saved_user = await self.user_service.save(user)

        try:
            link = await self.account_link_service.create_link(saved_user.id, identity)
        except DuplicateLinkError:
            # Never leave a user without its first link
            await self.user_service.delete(saved_user.id)
            raise

        logfire.info(
            "New user created",
            user_id=str(saved_user.id),
            identifier=identifier,
            provider=identity.provider.value,
            provider_id=identity.provider_id,
        )
        return ResolutionResult(user=saved_user, link=link, is_new_user=True)
