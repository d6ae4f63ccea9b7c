"""Domain value objects for social login.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

from enum import Enum

from pydantic import field_validator

from sociallink.domain.value.common import RootValueObject, ValueObject


class AuthProvider(str, Enum):
    """Closed set of login providers.

    Adding a provider means adding a member here and a verifier for it,
    never widening an existing verifier.
    """

    WIDGET = "widget"  # Signed claims verified locally with a shared secret
    OAUTH2 = "oauth2"  # Authorization code exchanged server-to-server
    LOCAL = "local"  # Password login, never handled by social login


class RoleName(str, Enum):
    """Platform roles, lowest privilege first."""

    CUSTOMER = "customer"
    BUSINESS_USER = "business_user"
    BUSINESS_OWNER = "business_owner"
    PLATFORM_OWNER = "platform_owner"


class UserIdentifier(RootValueObject[str]):
    """Local account identifier (login name) of a user.

    Examples: 'dara', 'dara17', 'widget_999'
    """

    @field_validator("root")
    @classmethod
    def validate_identifier(cls, v: str) -> str:
        """Validate identifier is not empty and within length limits."""
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Identifier must be 1-255 characters")
        return v


class WidgetAuthData(ValueObject):
    """Claims handed to the client by the widget-style provider.

    Required claims are optional here on purpose so that the verifier,
    not the request parser, decides how an incomplete assertion fails.
    """

    id: int | None = None
    first_name: str | None = None
    last_name: str | None = None
    username: str | None = None
    photo_url: str | None = None
    auth_date: int | None = None  # Unix seconds
    hash: str | None = None  # Hex HMAC-SHA256 over the data-check string


class VerifiedIdentity(ValueObject):
    """Normalized result of a successful provider verification.

    Independent of which provider produced it.
    """

    provider: AuthProvider
    provider_id: str  # Permanent ID assigned by the provider
    email: str | None = None
    name: str | None = None
    username: str | None = None
    avatar_url: str | None = None
    raw_payload: str | None = None  # Serialized provider data, kept for audit
