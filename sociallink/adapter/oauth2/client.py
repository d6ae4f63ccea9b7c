"""OAuth2 authorization-code client.

Exchanges a one-time code for an access token and reads the user's
profile from the provider's userinfo endpoint.
"""

import json
from urllib.parse import urlencode

import httpx
import logfire

from sociallink.domain.error import ExchangeFailedError, ProfileFetchFailedError
from sociallink.domain.service.profile_resolver import ProviderProfileResolver
from sociallink.domain.value import AuthProvider, VerifiedIdentity


class OAuth2ProfileResolver(ProviderProfileResolver):
    """Base class for OAuth2 profile resolvers.

    Provides type distinction for dependency injection.
    """

    pass


class RealOAuth2ProfileResolver(OAuth2ProfileResolver):
    """OAuth2 Authorization Code Flow against a real provider."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        authorize_url: str,
        token_url: str,
        userinfo_url: str,
        scope: str = "openid email profile",
        timeout: float = 30.0,
    ) -> None:
        """Initialize OAuth2 client.

        Args:
            client_id: OAuth2 client ID
            client_secret: OAuth2 client secret
            redirect_uri: Default callback URL registered with the provider
            authorize_url: Provider authorization endpoint
            token_url: Provider token endpoint
            userinfo_url: Provider userinfo endpoint
            scope: Space separated scopes to request
            timeout: Timeout in seconds for each provider call
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.authorize_url = authorize_url
        self.token_url = token_url
        self.userinfo_url = userinfo_url
        self.scope = scope
        self.timeout = timeout

    def authorization_url(self, state: str, redirect_uri: str | None = None) -> str:
        """Build the URL that starts the provider's consent screen.

        Args:
            state: State parameter for CSRF protection
            redirect_uri: Callback URL (defaults to the configured one)

        Returns:
            Authorization URL to redirect the user to
        """
        params = {
            "response_type": "code",
            "client_id": self.client_id,
            "redirect_uri": redirect_uri or self.redirect_uri,
            "scope": self.scope,
            "state": state,
        }
        return f"{self.authorize_url}?{urlencode(params)}"

    async def resolve(self, code: str, redirect_uri: str | None) -> VerifiedIdentity:
        """Exchange the code and fetch the user's profile.

        Args:
            code: Authorization code from the provider callback
            redirect_uri: Redirect URI the code was issued for

        Returns:
            Verified identity of the user

        Raises:
            ExchangeFailedError: If the token exchange fails
            ProfileFetchFailedError: If the userinfo request fails
        """
        access_token = await self._exchange_code_for_token(
            code, redirect_uri or self.redirect_uri
        )
        user_info = await self._get_user_info(access_token)

        email = user_info.get("email")
        name = user_info.get("name")
        if not name:
            parts = [
                p for p in (user_info.get("given_name"), user_info.get("family_name")) if p
            ]
            name = " ".join(parts) or email

        logfire.info("OAuth2 profile resolved", provider_id=str(user_info["id"]))

        return VerifiedIdentity(
            provider=AuthProvider.OAUTH2,
            provider_id=str(user_info["id"]),
            email=email,
            name=name,
            username=email,
            avatar_url=user_info.get("picture"),
            raw_payload=json.dumps(user_info, sort_keys=True),
        )

    async def _exchange_code_for_token(self, code: str, redirect_uri: str) -> str:
        """Exchange authorization code for access token.

        Raises:
            ExchangeFailedError: On transport errors, non-200 responses
                or a response without an access token
        """
        data = {
            "code": code,
            "grant_type": "authorization_code",
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "redirect_uri": redirect_uri,
        }

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.token_url,
                    data=data,
                    headers={"Accept": "application/json"},
                    timeout=self.timeout,
                )
        except httpx.HTTPError as e:
            logfire.error("OAuth2 token exchange HTTP error", error=str(e))
            raise ExchangeFailedError(f"HTTP error during token exchange: {e}")

        if response.status_code != 200:
            logfire.error(
                "OAuth2 token exchange failed",
                status_code=response.status_code,
                error=response.text,
            )
            raise ExchangeFailedError(f"Token exchange failed: {response.status_code}")

        try:
            access_token = response.json().get("access_token")
        except ValueError:
            access_token = None
        if not access_token:
            logfire.error("OAuth2 token response without access token")
            raise ExchangeFailedError("Token response did not contain an access token")
        return access_token

    async def _get_user_info(self, access_token: str) -> dict:
        """Get user information from the userinfo endpoint.

        Raises:
            ProfileFetchFailedError: On transport errors, non-200 responses
                or a profile without an ID
        """
        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(
                    self.userinfo_url,
                    headers={"Authorization": f"Bearer {access_token}"},
                    timeout=self.timeout,
                )
        except httpx.HTTPError as e:
            logfire.error("OAuth2 userinfo HTTP error", error=str(e))
            raise ProfileFetchFailedError(f"HTTP error fetching user info: {e}")

        if response.status_code != 200:
            logfire.error(
                "OAuth2 userinfo request failed",
                status_code=response.status_code,
                error=response.text,
            )
            raise ProfileFetchFailedError(
                f"User info request failed: {response.status_code}"
            )

        try:
            user_info = response.json()
        except ValueError:
            user_info = None
        if not isinstance(user_info, dict) or not user_info.get("id"):
            logfire.error("OAuth2 userinfo response without user ID")
            raise ProfileFetchFailedError("User info did not contain a user ID")
        return user_info


class MockOAuth2ProfileResolver(OAuth2ProfileResolver):
    """Mock OAuth2 resolver for testing.

    Returns deterministic test data without making real API calls.
    """

    def __init__(
        self,
        provider_id: str = "mockoauth123",
        email: str | None = "mock@example.com",
        name: str | None = "Mock OAuth User",
        fail_with: Exception | None = None,
    ) -> None:
        """Initialize mock resolver.

        Args:
            provider_id: ID of the returned identity
            email: Email of the returned identity
            name: Display name of the returned identity
            fail_with: If set, raised by resolve instead of returning
        """
        self.provider_id = provider_id
        self.email = email
        self.name = name
        self.fail_with = fail_with
        self.calls: list[tuple[str, str | None]] = []

    def authorization_url(self, state: str, redirect_uri: str | None = None) -> str:
        return f"https://oauth2.example.com/authorize?state={state}&mock=true"

    async def resolve(self, code: str, redirect_uri: str | None) -> VerifiedIdentity:
        self.calls.append((code, redirect_uri))
        if self.fail_with is not None:
            raise self.fail_with

        return VerifiedIdentity(
            provider=AuthProvider.OAUTH2,
            provider_id=self.provider_id,
            email=self.email,
            name=self.name,
            username=self.email,
            avatar_url="https://example.com/avatar.jpg",
            raw_payload=json.dumps({"id": self.provider_id, "email": self.email}),
        )
