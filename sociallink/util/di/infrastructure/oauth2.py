"""OAuth2 infrastructure providers."""

from dishka import Scope, provide

from sociallink.adapter.oauth2 import OAuth2ProfileResolver, RealOAuth2ProfileResolver
from sociallink.config import SocialAuthSettings
from sociallink.util.di.base import ProviderBase
from sociallink.util.error import ConfigurationError
from sociallink.util.observability import instrument_httpx


class OAuth2Provider(ProviderBase):
    """OAuth2 component base."""

    __mock_component__ = "oauth2"


class ProdOAuth2Provider(OAuth2Provider):
    """Production OAuth2 provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_oauth2_profile_resolver(
        self, social_settings: SocialAuthSettings
    ) -> OAuth2ProfileResolver:
        """Provide OAuth2 profile resolver.

        Returns:
            OAuth2 authorization-code client

        Raises:
            ConfigurationError: If OAuth2 credentials are not configured
        """
        oauth2 = social_settings.oauth2
        if not oauth2.client_id:
            raise ConfigurationError("OAuth2 client ID must be configured")
        if not oauth2.client_secret.get_secret_value():
            raise ConfigurationError("OAuth2 client secret must be configured")

        # Trace token exchanges and profile fetches
        instrument_httpx()

        return RealOAuth2ProfileResolver(
            client_id=oauth2.client_id,
            client_secret=oauth2.client_secret.get_secret_value(),
            redirect_uri=oauth2.redirect_uri,
            authorize_url=oauth2.authorize_url,
            token_url=oauth2.token_url,
            userinfo_url=oauth2.userinfo_url,
            scope=oauth2.scope,
            timeout=oauth2.timeout_seconds,
        )
