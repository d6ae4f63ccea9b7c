"""Unlink social account use case."""

from uuid import UUID

from pydantic import BaseModel

from sociallink.application.usecase.base import BaseUseCase
from sociallink.domain.service import AccountLinkService
from sociallink.domain.value import SocialAccountLinkId, UserId


class UnlinkSocialAccountRequest(BaseModel):
    """Unlink social account request."""

    user_id: str  # From authenticated user
    link_id: str


class UnlinkSocialAccountResponse(BaseModel):
    """Unlink social account response."""

    link_id: str
    unlinked: bool


class UnlinkSocialAccountUseCase(BaseUseCase):
    """Use case for removing one of the user's social accounts."""

    def __init__(self, account_link_service: AccountLinkService) -> None:
        self.account_link_service = account_link_service

    async def execute(
        self, request: UnlinkSocialAccountRequest
    ) -> UnlinkSocialAccountResponse:
        """Unlink the account, promoting another one if it was primary.

        Raises:
            NotFoundError: If the user has no such link
            CannotUnlinkLastMethodError: If it is the user's only way to log in
        """
        await self.account_link_service.unlink(
            UserId(UUID(request.user_id)),
            SocialAccountLinkId(UUID(request.link_id)),
        )
        return UnlinkSocialAccountResponse(link_id=request.link_id, unlinked=True)
