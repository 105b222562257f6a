"""Async engine and session factory."""

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from investnet.config.settings import settings


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine(database_url: str | None = None, echo: bool | None = None) -> AsyncEngine:
    """Create async engine for the given (or configured) database URL."""
    url = database_url or settings.database_url
    if url.startswith("sqlite"):
        engine = create_async_engine(
            url,
            echo=settings.database_echo if echo is None else echo,
            poolclass=NullPool,
            connect_args={"timeout": 30},
        )
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_async_engine(
        url,
        echo=settings.database_echo if echo is None else echo,
        pool_pre_ping=True,
        pool_recycle=300,
    )


def create_session_maker(engine: AsyncEngine | None = None) -> async_sessionmaker[AsyncSession]:
    """Create session maker bound to engine."""
    if engine is None:
        engine = create_engine()
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


# Ready-to-use instances
engine = create_engine()
async_session_maker = create_session_maker(engine)
