"""Engine and session factory for the users, roles and links store."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from sociallink.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the asyncpg-backed engine from ``settings.database``."""
    database = settings.database
    return create_async_engine(
        database.url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=database.pool_size,
        max_overflow=database.max_overflow,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the factory for request-scoped sessions.

    Sessions flush explicitly in the repositories and are committed or
    rolled back once per request by the persistence provider. Loaded rows
    stay readable after commit.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
