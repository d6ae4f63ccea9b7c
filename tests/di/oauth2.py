"""Mock OAuth2 providers for testing."""

from dishka import Scope, provide

from sociallink.adapter.oauth2 import MockOAuth2ProfileResolver, OAuth2ProfileResolver
from sociallink.util.di.infrastructure.oauth2 import OAuth2Provider


class MockOAuth2Provider(OAuth2Provider):
    """Mock OAuth2 provider using mock profile resolver."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_oauth2_profile_resolver(self) -> OAuth2ProfileResolver:
        """Provide mock OAuth2 profile resolver."""
        return MockOAuth2ProfileResolver()
