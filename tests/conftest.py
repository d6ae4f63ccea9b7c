"""Test configuration and fixtures."""

from datetime import datetime, timezone
from uuid import uuid4

from sociallink.domain.model import User
from sociallink.domain.service.assertion_verifier import (
    build_data_check_string,
    compute_signature,
)
from sociallink.domain.value import (
    AuthProvider,
    RoleName,
    UserId,
    UserIdentifier,
    VerifiedIdentity,
    WidgetAuthData,
)

TEST_BOT_TOKEN = "123456:TEST-bot-token"


def sign_widget_data(bot_token: str = TEST_BOT_TOKEN, **claims) -> WidgetAuthData:
    """Helper function to build widget claims signed like the provider does.

    Args:
        bot_token: Shared secret to sign with
        **claims: Widget claims (id, first_name, auth_date, ...)

    Returns:
        WidgetAuthData with a valid hash
    """
    unsigned = WidgetAuthData(**claims)
    signature = compute_signature(build_data_check_string(unsigned), bot_token)
    return unsigned.model_copy(update={"hash": signature})


def make_identity(
    provider: AuthProvider = AuthProvider.OAUTH2,
    provider_id: str = "oauth-42",
    email: str | None = "dara@example.com",
    name: str | None = "Dara Khan",
    username: str | None = None,
) -> VerifiedIdentity:
    """Helper function to build a verified identity.

    OAuth2 identities use the email as username unless one is given.
    """
    if username is None and provider == AuthProvider.OAUTH2:
        username = email
    return VerifiedIdentity(
        provider=provider,
        provider_id=provider_id,
        email=email,
        name=name,
        username=username,
        avatar_url=None,
        raw_payload="{}",
    )


def make_user(
    identifier: str = "dara",
    email: str | None = "dara@example.com",
    password_hash: str | None = None,
) -> User:
    """Helper function to build a customer user."""
    return User(
        id=UserId(uuid4()),
        identifier=UserIdentifier(identifier),
        email=email,
        password_hash=password_hash,
        roles=[RoleName.CUSTOMER],
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        updated_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )
