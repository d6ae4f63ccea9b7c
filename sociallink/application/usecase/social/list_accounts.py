"""List social accounts use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from sociallink.application.usecase.base import BaseUseCase
from sociallink.domain.model import SocialAccountLink
from sociallink.domain.service import AccountLinkService, UserService
from sociallink.domain.value import AuthProvider, UserId


class SocialAccountItem(BaseModel):
    """One linked social account as shown to its owner."""

    link_id: str
    provider: AuthProvider
    provider_id: str
    provider_username: str | None
    provider_email: str | None
    display_name: str
    avatar_url: str | None
    is_primary: bool
    last_used_at: datetime | None
    created_at: datetime

    @classmethod
    def from_link(cls, link: SocialAccountLink) -> "SocialAccountItem":
        return cls(
            link_id=str(link.id),
            provider=link.provider,
            provider_id=link.provider_id,
            provider_username=link.provider_username,
            provider_email=link.provider_email,
            display_name=link.display_name,
            avatar_url=link.provider_avatar_url,
            is_primary=link.is_primary,
            last_used_at=link.last_used_at,
            created_at=link.created_at,
        )


class ListSocialAccountsRequest(BaseModel):
    """List social accounts request."""

    user_id: str  # From authenticated user


class ListSocialAccountsResponse(BaseModel):
    """List social accounts response."""

    accounts: list[SocialAccountItem]
    has_password: bool


class ListSocialAccountsUseCase(BaseUseCase):
    """Use case for listing the social accounts linked to a user."""

    def __init__(
        self,
        user_service: UserService,
        account_link_service: AccountLinkService,
    ) -> None:
        """Initialize list social accounts use case.

        Args:
            user_service: User domain service
            account_link_service: Account link domain service
        """
        self.user_service = user_service
        self.account_link_service = account_link_service

    async def execute(
        self, request: ListSocialAccountsRequest
    ) -> ListSocialAccountsResponse:
        """List the user's live links, oldest first.

        Raises:
            NotFoundError: If the user does not exist
        """
        user_id = UserId(UUID(request.user_id))
        user = await self.user_service.get_by_id(user_id)
        links = await self.account_link_service.list_links(user_id)

        return ListSocialAccountsResponse(
            accounts=[SocialAccountItem.from_link(link) for link in links],
            has_password=user.has_password,
        )
