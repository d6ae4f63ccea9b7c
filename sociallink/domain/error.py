"""Domain layer errors."""

from enum import Enum
from typing import ClassVar


class DomainError(Exception):
    """Base domain error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class DuplicateLinkError(DomainError):
    """Raised by repositories when (provider, provider_id) is already linked.

    Storage-level unique violation. Callers that were creating a link for
    a brand-new identity treat it as "identity now exists" and re-resolve.
    """

    def __init__(self, provider: str, provider_id: str):
        self.provider = provider
        self.provider_id = provider_id
        super().__init__(f"Identity already linked: {provider}:{provider_id}")


class DuplicateIdentifierError(DomainError):
    """Raised by repositories when a live user already holds an identifier.

    Storage-level unique violation. During resolution it means a
    concurrent login created a user with the same identifier first,
    and the identity is re-resolved.
    """

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"Identifier already taken: {identifier}")


class FailureReason(str, Enum):
    """Tag carried by every social login failure."""

    INVALID_ASSERTION = "invalid_assertion"
    INVALID_SIGNATURE = "invalid_signature"
    STALE_ASSERTION = "stale_assertion"
    MISSING_PROVIDER_DATA = "missing_provider_data"
    UNSUPPORTED = "unsupported"
    EXCHANGE_FAILED = "exchange_failed"
    PROFILE_FETCH_FAILED = "profile_fetch_failed"
    ALREADY_LINKED_ELSEWHERE = "already_linked_elsewhere"
    CANNOT_UNLINK_LAST_METHOD = "cannot_unlink_last_method"
    ROLE_CONFIGURATION_MISSING = "role_configuration_missing"


class SocialLoginError(DomainError):
    """Base for recoverable social login failures.

    Subclasses set ``reason`` so callers can branch on a tag
    instead of on exception types.
    """

    reason: ClassVar[FailureReason]


class InvalidAssertionError(SocialLoginError):
    """Signed claims are incomplete or malformed."""

    reason = FailureReason.INVALID_ASSERTION


class InvalidSignatureError(SocialLoginError):
    """Supplied hash does not match the claims."""

    reason = FailureReason.INVALID_SIGNATURE


class StaleAssertionError(SocialLoginError):
    """Signed claims are older than the accepted window."""

    reason = FailureReason.STALE_ASSERTION


class MissingProviderDataError(SocialLoginError):
    """Request lacks the input the selected provider needs."""

    reason = FailureReason.MISSING_PROVIDER_DATA


class UnsupportedProviderError(SocialLoginError):
    """Provider cannot be used for social login."""

    reason = FailureReason.UNSUPPORTED


class ExchangeFailedError(SocialLoginError):
    """Authorization code could not be exchanged for a token."""

    reason = FailureReason.EXCHANGE_FAILED


class ProfileFetchFailedError(SocialLoginError):
    """Profile could not be fetched with the obtained token."""

    reason = FailureReason.PROFILE_FETCH_FAILED


class AlreadyLinkedElsewhereError(SocialLoginError):
    """Provider identity belongs to another user."""

    reason = FailureReason.ALREADY_LINKED_ELSEWHERE

    def __init__(self, provider: str, provider_id: str):
        self.provider = provider
        self.provider_id = provider_id
        super().__init__(
            f"{provider} account {provider_id} is already linked to another user"
        )


class CannotUnlinkLastMethodError(SocialLoginError):
    """Unlinking would leave the user without any way to log in."""

    reason = FailureReason.CANNOT_UNLINK_LAST_METHOD

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(
            f"Cannot unlink the only login method of user {user_id}. "
            "Set a password or link another account first."
        )


class RoleConfigurationMissingError(SocialLoginError):
    """Bootstrap role required for new users does not exist."""

    reason = FailureReason.ROLE_CONFIGURATION_MISSING

    def __init__(self, role: str):
        self.role = role
        super().__init__(f"Role not configured: {role}")
