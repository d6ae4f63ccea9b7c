"""Production container."""

from dishka import AsyncContainer, make_async_container

from sociallink.util.di import PROVIDERS, get_provider


def create_container() -> AsyncContainer:
    """Build the container with PostgreSQL and the real OAuth2 resolver.

    Settings are read from the environment when first requested.
    """
    return make_async_container(
        *(get_provider(base, use_mock=False)() for base in PROVIDERS)
    )
