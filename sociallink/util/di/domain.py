"""Domain layer DI providers."""

from dishka import Scope, provide

from sociallink.adapter.oauth2 import OAuth2ProfileResolver
from sociallink.config import SocialAuthSettings
from sociallink.domain.repository import (
    RoleRepository,
    SocialAccountLinkRepository,
    UserRepository,
)
from sociallink.domain.service import (
    AccountLinkService,
    IdentityResolutionService,
    IdentityVerificationDispatcher,
    RoleService,
    SignedAssertionVerifier,
    UserService,
)
from sociallink.util.di.base import ProviderBase
from sociallink.util.error import ConfigurationError


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_signed_assertion_verifier(
        self, social_settings: SocialAuthSettings
    ) -> SignedAssertionVerifier:
        """Provide widget claims verifier.

        Raises:
            ConfigurationError: If the bot token is not configured
        """
        widget = social_settings.widget
        if not widget.bot_token.get_secret_value():
            raise ConfigurationError("Widget bot token must be configured")

        return SignedAssertionVerifier(
            bot_token=widget.bot_token,
            max_auth_age_seconds=widget.max_auth_age_seconds,
            max_clock_skew_seconds=widget.max_clock_skew_seconds,
        )

    @provide(scope=Scope.APP)
    def get_verification_dispatcher(
        self,
        assertion_verifier: SignedAssertionVerifier,
        profile_resolver: OAuth2ProfileResolver,
    ) -> IdentityVerificationDispatcher:
        """Provide verification dispatcher over all providers."""
        return IdentityVerificationDispatcher(
            assertion_verifier=assertion_verifier,
            profile_resolver=profile_resolver,
        )

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_role_service(self, role_repository: RoleRepository) -> RoleService:
        """Provide role domain service."""
        return RoleService(role_repository=role_repository)

    @provide
    def get_account_link_service(
        self,
        link_repository: SocialAccountLinkRepository,
        user_repository: UserRepository,
    ) -> AccountLinkService:
        """Provide account link domain service."""
        return AccountLinkService(
            link_repository=link_repository, user_repository=user_repository
        )

    @provide
    def get_identity_resolution_service(
        self,
        user_service: UserService,
        user_repository: UserRepository,
        role_service: RoleService,
        account_link_service: AccountLinkService,
        social_settings: SocialAuthSettings,
    ) -> IdentityResolutionService:
        """Provide identity resolution domain service."""
        return IdentityResolutionService(
            user_service=user_service,
            user_repository=user_repository,
            role_service=role_service,
            account_link_service=account_link_service,
            max_attempts=social_settings.max_resolution_attempts,
        )
