"""Link social account use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from sociallink.application.usecase.base import BaseUseCase
from sociallink.domain.service import (
    AccountLinkService,
    IdentityVerificationDispatcher,
    UserService,
    VerificationRequest,
)
from sociallink.domain.value import AuthProvider, UserId, WidgetAuthData

from .list_accounts import SocialAccountItem


class LinkSocialAccountRequest(BaseModel):
    """Link social account request."""

    user_id: str  # From authenticated user
    provider: AuthProvider
    widget_data: WidgetAuthData | None = None
    code: str | None = None
    redirect_uri: str | None = None
    make_primary: bool = False


class LinkSocialAccountResponse(BaseModel):
    """Link social account response."""

    account: SocialAccountItem


class LinkSocialAccountUseCase(BaseUseCase):
    """Use case for linking another provider identity to a logged-in user."""

    def __init__(
        self,
        verification_dispatcher: IdentityVerificationDispatcher,
        user_service: UserService,
        account_link_service: AccountLinkService,
    ) -> None:
        """Initialize link social account use case.

        Args:
            verification_dispatcher: Routes the request to its provider verifier
            user_service: User domain service
            account_link_service: Account link domain service
        """
        self.verification_dispatcher = verification_dispatcher
        self.user_service = user_service
        self.account_link_service = account_link_service

    async def execute(
        self, request: LinkSocialAccountRequest
    ) -> LinkSocialAccountResponse:
        """Execute link flow.

        Steps:
        1. Make sure the acting user exists
        2. Verify the provider input
        3. Link the identity (or refresh it if already linked to this user)

        Raises:
            NotFoundError: If the acting user does not exist
            AlreadyLinkedElsewhereError: If another user owns the identity
            SocialLoginError: If verification fails
        """
        user_id = UserId(UUID(request.user_id))

        with logfire.span(
            "link_social_account",
            user_id=request.user_id,
            provider=request.provider.value,
        ):
            await self.user_service.get_by_id(user_id)

            identity = await self.verification_dispatcher.verify(
                VerificationRequest(
                    provider=request.provider,
                    widget_data=request.widget_data,
                    code=request.code,
                    redirect_uri=request.redirect_uri,
                )
            )
            link = await self.account_link_service.link(
                user_id, identity, make_primary=request.make_primary
            )

            return LinkSocialAccountResponse(account=SocialAccountItem.from_link(link))
