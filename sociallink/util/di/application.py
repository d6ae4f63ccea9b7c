"""Application layer DI providers."""

from dishka import Scope, provide

from sociallink.application.usecase.social import (
    LinkSocialAccountUseCase,
    ListSocialAccountsUseCase,
    SetPasswordUseCase,
    SetPrimarySocialAccountUseCase,
    SocialLoginUseCase,
    UnlinkSocialAccountUseCase,
)
from sociallink.domain.service import (
    AccountLinkService,
    IdentityResolutionService,
    IdentityVerificationDispatcher,
    UserService,
)
from sociallink.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Login
    @provide(scope=Scope.REQUEST)
    def get_social_login_use_case(
        self,
        verification_dispatcher: IdentityVerificationDispatcher,
        identity_resolution_service: IdentityResolutionService,
    ) -> SocialLoginUseCase:
        """Provide social login use case."""
        return SocialLoginUseCase(
            verification_dispatcher=verification_dispatcher,
            identity_resolution_service=identity_resolution_service,
        )

    # Account links
    @provide(scope=Scope.REQUEST)
    def get_link_social_account_use_case(
        self,
        verification_dispatcher: IdentityVerificationDispatcher,
        user_service: UserService,
        account_link_service: AccountLinkService,
    ) -> LinkSocialAccountUseCase:
        """Provide link social account use case."""
        return LinkSocialAccountUseCase(
            verification_dispatcher=verification_dispatcher,
            user_service=user_service,
            account_link_service=account_link_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_list_social_accounts_use_case(
        self, user_service: UserService, account_link_service: AccountLinkService
    ) -> ListSocialAccountsUseCase:
        """Provide list social accounts use case."""
        return ListSocialAccountsUseCase(
            user_service=user_service, account_link_service=account_link_service
        )

    @provide(scope=Scope.REQUEST)
    def get_unlink_social_account_use_case(
        self, account_link_service: AccountLinkService
    ) -> UnlinkSocialAccountUseCase:
        """Provide unlink social account use case."""
        return UnlinkSocialAccountUseCase(account_link_service=account_link_service)

    @provide(scope=Scope.REQUEST)
    def get_set_primary_social_account_use_case(
        self, account_link_service: AccountLinkService
    ) -> SetPrimarySocialAccountUseCase:
        """Provide set primary social account use case."""
        return SetPrimarySocialAccountUseCase(
            account_link_service=account_link_service
        )

    # Password
    @provide(scope=Scope.REQUEST)
    def get_set_password_use_case(self, user_service: UserService) -> SetPasswordUseCase:
        """Provide set password use case."""
        return SetPasswordUseCase(user_service=user_service)
