"""Domain services."""

from .account_link_service import AccountLinkService
from .assertion_verifier import SignedAssertionVerifier
from .base import Service
from .identity_resolution_service import IdentityResolutionService, ResolutionResult
from .profile_resolver import ProviderProfileResolver
from .role_service import RoleService
from .user_service import UserService
from .verification_dispatcher import (
    IdentityVerificationDispatcher,
    VerificationRequest,
)

__all__ = [
    "AccountLinkService",
    "IdentityResolutionService",
    "IdentityVerificationDispatcher",
    "ProviderProfileResolver",
    "ResolutionResult",
    "RoleService",
    "Service",
    "SignedAssertionVerifier",
    "UserService",
    "VerificationRequest",
]
