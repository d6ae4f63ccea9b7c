"""Local verification of widget-style signed claims.

The provider signs the claims with a key derived from the bot token:

    secret_key = SHA256(bot_token)
    hash = hex(HMAC_SHA256(secret_key, data_check_string))

where data_check_string is every received claim except the hash, sorted
by key and rendered as ``key=value`` lines joined with ``\\n``.
"""

import hashlib
import hmac
import time
from collections.abc import Callable

import logfire
from pydantic import SecretStr

from sociallink.domain.error import (
    InvalidAssertionError,
    InvalidSignatureError,
    StaleAssertionError,
)
from sociallink.domain.value import AuthProvider, VerifiedIdentity, WidgetAuthData

from .base import Service

# Claims that take part in the signature. Anything else is ignored.
SIGNED_CLAIM_KEYS = (
    "id",
    "first_name",
    "last_name",
    "username",
    "photo_url",
    "auth_date",
)

DEFAULT_MAX_AUTH_AGE_SECONDS = 86400


def build_data_check_string(data: WidgetAuthData) -> str:
    """Build the canonical string the provider signed.

    Args:
        data: Claims as received from the client

    Returns:
        Present claims sorted by key, ``key=value`` joined by newlines
    """
    claims = data.model_dump(include=set(SIGNED_CLAIM_KEYS), exclude_none=True)
    return "\n".join(f"{key}={claims[key]}" for key in sorted(claims))


def compute_signature(data_check_string: str, bot_token: str) -> str:
    """Compute the lowercase hex HMAC-SHA256 of a data-check string.

    Args:
        data_check_string: Canonical string from build_data_check_string
        bot_token: Shared secret

    Returns:
        Lowercase hex digest
    """
    secret_key = hashlib.sha256(bot_token.encode("utf-8")).digest()
    return hmac.new(
        secret_key, data_check_string.encode("utf-8"), hashlib.sha256
    ).hexdigest()


def build_full_name(first_name: str | None, last_name: str | None) -> str | None:
    """Join first and last name, either of which may be absent."""
    parts = [p.strip() for p in (first_name, last_name) if p is not None]
    name = " ".join(parts).strip()
    return name or None


class SignedAssertionVerifier(Service):
    """Verifies widget-style claims without calling the provider."""

    def __init__(
        self,
        bot_token: SecretStr,
        max_auth_age_seconds: int = DEFAULT_MAX_AUTH_AGE_SECONDS,
        max_clock_skew_seconds: int = 60,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize verifier.

        Args:
            bot_token: Shared secret the provider signs with
            max_auth_age_seconds: Oldest accepted auth_date, in seconds
            max_clock_skew_seconds: How far auth_date may lie in the future
            clock: Returns current unix time in seconds
        """
        self._bot_token = bot_token
        self.max_auth_age_seconds = max_auth_age_seconds
        self.max_clock_skew_seconds = max_clock_skew_seconds
        self.clock = clock

    def verify(self, data: WidgetAuthData) -> VerifiedIdentity:
        """Verify signed claims and normalize them.

        Args:
            data: Claims and hash as received from the client

        Returns:
            Verified identity for the widget provider

        Raises:
            InvalidAssertionError: If id, auth_date or hash is missing,
                or auth_date lies in the future beyond the allowed skew
            InvalidSignatureError: If the hash does not match the claims
            StaleAssertionError: If auth_date is too old
        """
        with logfire.span("assertion_verifier.verify", provider_id=data.id):
            supplied = (data.hash or "").strip().lower()
            if data.id is None or data.auth_date is None or not supplied:
                logfire.warn("Incomplete widget assertion", provider_id=data.id)
                raise InvalidAssertionError("Widget login data is incomplete")

            data_check_string = build_data_check_string(data)
            expected = compute_signature(
                data_check_string, self._bot_token.get_secret_value()
            )
            if not hmac.compare_digest(
                expected.encode("ascii"), supplied.encode("utf-8")
            ):
                logfire.warn("Widget hash verification failed", provider_id=data.id)
                raise InvalidSignatureError("Widget hash verification failed")

            now = int(self.clock())
            age = now - data.auth_date
            if age > self.max_auth_age_seconds:
                logfire.warn(
                    "Widget assertion is stale", provider_id=data.id, age_seconds=age
                )
                raise StaleAssertionError("Widget auth data is too old")
            if -age > self.max_clock_skew_seconds:
                logfire.warn(
                    "Widget assertion dated in the future",
                    provider_id=data.id,
                    skew_seconds=-age,
                )
                raise InvalidAssertionError("Widget auth date lies in the future")

            logfire.info(
                "Widget assertion verified",
                provider_id=data.id,
                username=data.username,
            )

            return VerifiedIdentity(
                provider=AuthProvider.WIDGET,
                provider_id=str(data.id),
                email=None,  # The widget never provides an email
                name=build_full_name(data.first_name, data.last_name),
                username=data.username,
                avatar_url=data.photo_url,
                raw_payload=data.model_dump_json(exclude_none=True),
            )
