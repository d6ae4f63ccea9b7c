"""Set primary social account use case."""

from uuid import UUID

from pydantic import BaseModel

from sociallink.application.usecase.base import BaseUseCase
from sociallink.domain.service import AccountLinkService
from sociallink.domain.value import SocialAccountLinkId, UserId

from .list_accounts import SocialAccountItem


class SetPrimarySocialAccountRequest(BaseModel):
    """Set primary social account request."""

    user_id: str  # From authenticated user
    link_id: str


class SetPrimarySocialAccountResponse(BaseModel):
    """Set primary social account response."""

    account: SocialAccountItem


class SetPrimarySocialAccountUseCase(BaseUseCase):
    """Use case for choosing the user's primary social account."""

    def __init__(self, account_link_service: AccountLinkService) -> None:
        self.account_link_service = account_link_service

    async def execute(
        self, request: SetPrimarySocialAccountRequest
    ) -> SetPrimarySocialAccountResponse:
        link = await self.account_link_service.make_primary(
            UserId(UUID(request.user_id)),
            SocialAccountLinkId(UUID(request.link_id)),
        )
        return SetPrimarySocialAccountResponse(account=SocialAccountItem.from_link(link))
