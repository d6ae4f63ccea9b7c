"""Social login use case."""

import logfire
from pydantic import BaseModel

from sociallink.application.usecase.base import BaseUseCase
from sociallink.domain.model import SocialAccountLink, User
from sociallink.domain.service import (
    IdentityResolutionService,
    IdentityVerificationDispatcher,
    VerificationRequest,
)
from sociallink.domain.value import AuthProvider, RoleName, WidgetAuthData


class SocialLoginRequest(BaseModel):
    """Social login request.

    Widget logins carry the signed claims, OAuth2 logins carry the
    authorization code from the provider callback.
    """

    provider: AuthProvider
    widget_data: WidgetAuthData | None = None
    code: str | None = None
    redirect_uri: str | None = None  # Defaults to the configured callback


class SocialLoginResponse(BaseModel):
    """Social login response."""

    user_id: str
    identifier: str
    email: str | None
    full_name: str | None
    roles: list[RoleName]
    provider: AuthProvider
    link_id: str
    provider_username: str | None
    is_new_user: bool


class SocialLoginUseCase(BaseUseCase):
    """Use case for logging in (or signing up) with a social provider."""

    def __init__(
        self,
        verification_dispatcher: IdentityVerificationDispatcher,
        identity_resolution_service: IdentityResolutionService,
    ) -> None:
        """Initialize social login use case.

        Args:
            verification_dispatcher: Routes the request to its provider verifier
            identity_resolution_service: Finds or creates the local user
        """
        self.verification_dispatcher = verification_dispatcher
        self.identity_resolution_service = identity_resolution_service

    async def execute(self, request: SocialLoginRequest) -> SocialLoginResponse:
        """Execute social login flow.

        Steps:
        1. Verify the provider input (nothing is written on failure)
        2. Resolve the verified identity to a user, creating one if needed

        Args:
            request: Provider tag plus provider-specific input

        Returns:
            Resolved user and link

        Raises:
            SocialLoginError: If verification or resolution fails
        """
        with logfire.span("social_login", provider=request.provider.value):
            identity = await self.verification_dispatcher.verify(
                VerificationRequest(
                    provider=request.provider,
                    widget_data=request.widget_data,
                    code=request.code,
                    redirect_uri=request.redirect_uri,
                )
            )

            result = await self.identity_resolution_service.resolve(identity)

            logfire.info(
                "Social login succeeded",
                user_id=str(result.user.id),
                provider=identity.provider.value,
                is_new_user=result.is_new_user,
            )

            return self._to_response(result.user, result.link, result.is_new_user)

    @staticmethod
    def _to_response(
        user: User, link: SocialAccountLink, is_new_user: bool
    ) -> SocialLoginResponse:
        return SocialLoginResponse(
            user_id=str(user.id),
            identifier=user.identifier.root,
            email=user.email,
            full_name=user.full_name,
            roles=user.roles,
            provider=link.provider,
            link_id=str(link.id),
            provider_username=link.provider_username,
            is_new_user=is_new_user,
        )
