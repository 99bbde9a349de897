"""Database package for the users server."""

from .engine import (
    DATABASE_PATH,
    DEFAULT_USER_NAME,
    StartupError,
    build_engines,
    build_session_maker,
    get_async_db_session,
    init_models,
    list_user_names,
    seed_users,
    startup_database,
)
from .schema import UserDB

__all__ = [
    "DATABASE_PATH",
    "DEFAULT_USER_NAME",
    "StartupError",
    "build_engines",
    "build_session_maker",
    "get_async_db_session",
    "init_models",
    "list_user_names",
    "seed_users",
    "startup_database",
    "UserDB",
]
