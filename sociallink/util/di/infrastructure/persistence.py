"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from sociallink.config import Settings
from sociallink.domain.repository import (
    RoleRepository,
    SocialAccountLinkRepository,
    UserRepository,
)
from sociallink.persistence.database import create_engine, create_session_factory
from sociallink.persistence.repository import (
    PostgresRoleRepository,
    PostgresSocialAccountLinkRepository,
    PostgresUserRepository,
)
from sociallink.util.di.base import ProviderBase
from sociallink.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide the engine, disposing its pool on container close."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide one transaction per request.

        A login or link request either commits all of its user and link
        writes or none of them. Savepoints inside the link repository
        let a lost creation race be retried within the same transaction.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception as e:
                logfire.warn(
                    "Request transaction rolled back",
                    error=str(e),
                    error_type=type(e).__name__,
                )
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, session: AsyncSession) -> UserRepository:
        """Provide User repository."""
        return PostgresUserRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_role_repository(self, session: AsyncSession) -> RoleRepository:
        """Provide Role repository."""
        return PostgresRoleRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_social_account_link_repository(
        self, session: AsyncSession
    ) -> SocialAccountLinkRepository:
        """Provide SocialAccountLink repository."""
        return PostgresSocialAccountLinkRepository(session)
