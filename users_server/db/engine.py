"""Database engine configuration for the users server."""

import logging
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import create_engine, insert, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from .schema import Base, UserDB

logger = logging.getLogger(__name__)

# Relative to the working directory the server is started from
DATABASE_PATH = "./test.db"
DEFAULT_USER_NAME = "John Doe"


class StartupError(RuntimeError):
    """Raised when the database cannot be prepared at startup."""


def build_engines(db_path: str = DATABASE_PATH) -> tuple[Engine, AsyncEngine]:
    """Create the sync and async engines for one SQLite file."""
    sync_engine = create_engine(
        f"sqlite:///{db_path}",
        connect_args={"check_same_thread": False},
        echo=False,
    )
    async_engine = create_async_engine(
        f"sqlite+aiosqlite:///{db_path}",
        echo=False,
    )
    return sync_engine, async_engine


def build_session_maker(async_engine: AsyncEngine) -> async_sessionmaker:
    """Create the request session maker bound to the async engine."""
    return async_sessionmaker(
        class_=AsyncSession,
        autocommit=False,
        autoflush=False,
        bind=async_engine,
    )


def init_models(engine: Engine) -> None:
    """Initialize database tables."""
    Base.metadata.create_all(bind=engine)


def seed_users(engine: Engine, name: str = DEFAULT_USER_NAME) -> int:
    """Insert one user row and return its id.

    The insert runs on every call, so restarting the server against an
    existing file appends another row.
    """
    with engine.begin() as conn:
        result = conn.execute(insert(UserDB).values(name=name))
        return result.inserted_primary_key[0]


def startup_database(engine: Engine) -> int:
    """Create the schema and insert the seed row.

    Any failure is re-raised as :class:`StartupError` naming the step that
    failed; the server is not expected to recover from it.
    """
    db_url = engine.url.render_as_string(hide_password=True)
    try:
        with engine.connect():
            pass
    except SQLAlchemyError as e:
        raise StartupError(f"could not open {db_url}: {e}") from e
    try:
        init_models(engine)
    except SQLAlchemyError as e:
        raise StartupError(f"could not create schema in {db_url}: {e}") from e
    try:
        user_id = seed_users(engine)
    except SQLAlchemyError as e:
        raise StartupError(f"could not insert seed user into {db_url}: {e}") from e
    logger.info("Seeded user %d in %s", user_id, db_url)
    return user_id


async def list_user_names(session: AsyncSession) -> list[str | None]:
    """Return the name of every user in storage order."""
    result = await session.execute(select(UserDB.name))
    return list(result.scalars())


async def get_async_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Get asynchronous database session from the application's engine."""
    async with request.app.state.async_session_local() as session:
        yield session
