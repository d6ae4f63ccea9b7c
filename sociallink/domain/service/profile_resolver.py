"""Authorization-code provider contract."""

from abc import ABC, abstractmethod

from sociallink.domain.value import VerifiedIdentity


class ProviderProfileResolver(ABC):
    """Exchanges an authorization code and fetches the provider profile.

    This is the only place the login flow reaches out over the network.
    Implementations live in the adapter layer.
    """

    @abstractmethod
    async def resolve(self, code: str, redirect_uri: str | None) -> VerifiedIdentity:
        """Exchange a code for a token, then fetch the user's profile.

        Args:
            code: One-time authorization code from the provider callback
            redirect_uri: Redirect URI used when the code was issued
                (None means the configured default)

        Returns:
            Verified identity with provider OAUTH2 and username set to email

        Raises:
            ExchangeFailedError: If the code could not be exchanged
            ProfileFetchFailedError: If the profile could not be fetched
        """
        raise NotImplementedError
