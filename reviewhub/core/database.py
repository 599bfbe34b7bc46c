"""
Database connection and session management
Uses SQLAlchemy async engine (aiosqlite locally, asyncpg for PostgreSQL)
Reference: https://docs.sqlalchemy.org/en/20/orm/extensions/asyncio.html
"""
from pathlib import Path

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase

from reviewhub.core.config import settings


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """
    Create an async engine for the given URL.

    SQLite file databases get their parent directory created first.
    asyncpg connections get a command timeout and an application name.
    """
    url = make_url(database_url)
    connect_args = {}
    if url.get_backend_name() == "sqlite":
        if url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    elif url.get_driver_name() == "asyncpg":
        # Reference: https://magicstack.github.io/asyncpg/current/api/index.html#connection
        connect_args = {
            "command_timeout": 60,
            "server_settings": {
                "application_name": "reviewhub",
            },
        }
    return create_async_engine(database_url, echo=echo, connect_args=connect_args)


def build_session_maker(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Create a session factory bound to an engine
    Reference: https://docs.sqlalchemy.org/en/20/orm/extensions/asyncio.html#session-basics
    """
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False,  # Keep row snapshots usable after commit
        autoflush=False,
    )


engine = build_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
async_session_maker = build_session_maker(engine)


# Base class for all database models
# Reference: https://docs.sqlalchemy.org/en/20/orm/declarative_styles.html
class Base(DeclarativeBase):
    """Base class for SQLAlchemy declarative models"""
    pass


async def init_models(bind: AsyncEngine = engine) -> None:
    """
    Apply the static schema definition.

    Creates any missing tables and indexes; existing tables are left untouched.
    Called once at application startup.
    """
    # Register every model on Base.metadata before create_all
    import reviewhub.models  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# Dependency to get database session
# Reference: https://fastapi.tiangolo.com/tutorial/dependencies/
async def get_db() -> AsyncSession:
    """
    Dependency function that provides a database session

    The session is one unit of work per request:
    - Commits on success
    - Rolls back on error
    - Always closes the session
    """
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
