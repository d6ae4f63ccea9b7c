"""Social login and account link use cases."""

from .link_account import LinkSocialAccountUseCase
from .list_accounts import ListSocialAccountsUseCase
from .login import SocialLoginUseCase
from .set_password import SetPasswordUseCase
from .set_primary import SetPrimarySocialAccountUseCase
from .unlink_account import UnlinkSocialAccountUseCase

__all__ = [
    "LinkSocialAccountUseCase",
    "ListSocialAccountsUseCase",
    "SetPasswordUseCase",
    "SetPrimarySocialAccountUseCase",
    "SocialLoginUseCase",
    "UnlinkSocialAccountUseCase",
]
