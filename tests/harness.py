"""Test harness for unit and integration tests.

Integration tests assume a migrated PostgreSQL is already running.
Settings are loaded from environment variables (configure via .env or export).
"""

import pytest_asyncio

from sociallink.util.di import Component
from tests.di import build_test_container


def create_env_fixture(unmock: set[Component] | None = None):
    """Factory for creating test environment fixtures.

    Creates a pytest fixture that:
    - Builds a test container with specified unmocking
    - Yields request-scoped container for service access
    - Assumes external services already running (no docker management)
    - Settings loaded from environment automatically

    Args:
        unmock: Components to use real implementations for

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        # Unit tests - everything mocked, no database needed
        unit_env = create_env_fixture()

        # Integration tests - real persistence, assumes postgres running
        integration_env = create_env_fixture(unmock={"persistence"})

        @pytest.mark.asyncio
        async def test_login(unit_env):
            use_case = await unit_env.get(SocialLoginUseCase)
            response = await use_case.execute(SocialLoginRequest(...))
            assert response.is_new_user
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        # Build container with specified unmocking
        container = build_test_container(unmock=unmock or set())

        # Open request-scoped context
        async with container() as request_container:
            yield request_container

        await container.close()

    return _test_environment
