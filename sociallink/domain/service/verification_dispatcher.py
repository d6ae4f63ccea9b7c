"""Routes a login request to the verifier of its provider."""

from abc import ABC, abstractmethod

import httpx
import logfire
from pydantic import BaseModel

from sociallink.domain.error import (
    ExchangeFailedError,
    MissingProviderDataError,
    UnsupportedProviderError,
)
from sociallink.domain.value import AuthProvider, VerifiedIdentity, WidgetAuthData

from .assertion_verifier import SignedAssertionVerifier
from .base import Service
from .profile_resolver import ProviderProfileResolver


class VerificationRequest(BaseModel):
    """Provider-specific login input.

    Widget logins carry signed claims, authorization-code logins
    carry a code (and optionally the redirect URI it was issued for).
    """

    provider: AuthProvider
    widget_data: WidgetAuthData | None = None
    code: str | None = None
    redirect_uri: str | None = None


class IdentityVerifier(ABC):
    """Verification capability of one provider variant."""

    @abstractmethod
    async def verify(self, request: VerificationRequest) -> VerifiedIdentity:
        raise NotImplementedError


class WidgetIdentityVerifier(IdentityVerifier):
    """Widget variant: signed claims checked locally."""

    def __init__(self, assertion_verifier: SignedAssertionVerifier) -> None:
        self.assertion_verifier = assertion_verifier

    async def verify(self, request: VerificationRequest) -> VerifiedIdentity:
        if request.widget_data is None:
            raise MissingProviderDataError("Widget login data is required")
        return self.assertion_verifier.verify(request.widget_data)


class AuthorizationCodeIdentityVerifier(IdentityVerifier):
    """OAuth2 variant: code exchanged through the profile resolver."""

    def __init__(self, profile_resolver: ProviderProfileResolver) -> None:
        self.profile_resolver = profile_resolver

    async def verify(self, request: VerificationRequest) -> VerifiedIdentity:
        if not request.code or not request.code.strip():
            raise MissingProviderDataError("Authorization code is required")
        try:
            return await self.profile_resolver.resolve(
                request.code.strip(), request.redirect_uri
            )
        except httpx.HTTPError as e:
            # Transport errors the resolver did not translate itself
            logfire.error("Authorization code exchange HTTP error", error=str(e))
            raise ExchangeFailedError(f"Authorization code exchange failed: {e}")


class LocalIdentityVerifier(IdentityVerifier):
    """Local variant: password logins never go through social login."""

    async def verify(self, request: VerificationRequest) -> VerifiedIdentity:
        raise UnsupportedProviderError(
            "Local provider is not supported for social login"
        )


class IdentityVerificationDispatcher(Service):
    """Dispatches verification over the closed set of providers."""

    def __init__(
        self,
        assertion_verifier: SignedAssertionVerifier,
        profile_resolver: ProviderProfileResolver,
    ) -> None:
        """Initialize dispatcher.

        Args:
            assertion_verifier: Verifier for widget-style claims
            profile_resolver: Code exchange for the OAuth2 provider
        """
        self.verifiers: dict[AuthProvider, IdentityVerifier] = {
            AuthProvider.WIDGET: WidgetIdentityVerifier(assertion_verifier),
            AuthProvider.OAUTH2: AuthorizationCodeIdentityVerifier(profile_resolver),
            AuthProvider.LOCAL: LocalIdentityVerifier(),
        }

    async def verify(self, request: VerificationRequest) -> VerifiedIdentity:
        """Verify a login request with the verifier of its provider.

        Args:
            request: Provider tag plus provider-specific input

        Returns:
            Verified identity

        Raises:
            SocialLoginError: Any failure of the selected verifier
        """
        with logfire.span(
            "verification_dispatcher.verify", provider=request.provider.value
        ):
            identity = await self.verifiers[request.provider].verify(request)
            logfire.info(
                "Identity verified",
                provider=identity.provider.value,
                provider_id=identity.provider_id,
            )
            return identity
