"""Local account identifier allocation.

Identifiers are derived from the verified identity, then made unique by
appending a counter. Everything here is a plain function so it can be
exercised without a store.
"""

import re
import secrets
import time
from collections.abc import Awaitable, Callable

from sociallink.domain.value import AuthProvider, VerifiedIdentity

MAX_SUFFIX = 999

_DISALLOWED = re.compile(r"[^a-z0-9]")


def normalize_identifier(value: str) -> str:
    """Lowercase and drop everything outside [a-z0-9]."""
    return _DISALLOWED.sub("", value.lower())


def identifier_base(identity: VerifiedIdentity) -> str:
    """Pick the identifier base for a verified identity.

    - OAuth2: local part of the email
    - Widget: provider username
    - otherwise (or if nothing usable remains): ``{provider}_{provider_id}``

    Args:
        identity: Verified identity of the user being created

    Returns:
        Base identifier, not yet checked for uniqueness
    """
    candidate = None
    if identity.provider == AuthProvider.OAUTH2 and identity.email:
        candidate = identity.email.split("@")[0]
    elif identity.provider == AuthProvider.WIDGET and identity.username:
        candidate = identity.username

    if candidate:
        base = normalize_identifier(candidate)
        if base:
            return base

    return f"{identity.provider.value}_{identity.provider_id}"


async def allocate_identifier(
    base: str,
    exists: Callable[[str], Awaitable[bool]],
    clock: Callable[[], float] = time.time,
) -> str:
    """Find a free identifier for a base.

    Tries ``base``, then ``base1`` up to ``base999``. If all are taken,
    falls back to ``base`` plus the current epoch millis mod 10000, and
    if even that is taken, to ``base`` plus a random hex token.

    Args:
        base: Identifier base from identifier_base
        exists: Async predicate telling whether an identifier is taken
        clock: Returns current unix time in seconds

    Returns:
        Identifier that was free when checked
    """
    if not await exists(base):
        return base

    for counter in range(1, MAX_SUFFIX + 1):
        candidate = f"{base}{counter}"
        if not await exists(candidate):
            return candidate

    candidate = f"{base}{int(clock() * 1000) % 10000}"
    if not await exists(candidate):
        return candidate

    return f"{base}{secrets.token_hex(4)}"
