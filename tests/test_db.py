"""Tests for schema creation and startup seeding."""

import sqlite3

import pytest
from sqlalchemy import delete, select

from users_server.db import (
    DEFAULT_USER_NAME,
    StartupError,
    UserDB,
    build_engines,
    init_models,
    seed_users,
    startup_database,
)


@pytest.fixture
def engines(db_path):
    sync_engine, async_engine = build_engines(db_path)
    yield sync_engine, async_engine
    sync_engine.dispose()


def stored_users(sync_engine):
    with sync_engine.connect() as conn:
        return [tuple(row) for row in conn.execute(select(UserDB.id, UserDB.name))]


def test_startup_creates_file_and_seeds_one_user(engines, db_path, tmp_path):
    assert not (tmp_path / "users.db").exists()

    user_id = startup_database(engines[0])

    assert user_id == 1
    assert (tmp_path / "users.db").exists()
    assert stored_users(engines[0]) == [(1, DEFAULT_USER_NAME)]


def test_repeated_startup_appends_another_user(engines):
    startup_database(engines[0])
    startup_database(engines[0])

    assert stored_users(engines[0]) == [(1, "John Doe"), (2, "John Doe")]


def test_init_models_keeps_existing_rows(engines):
    init_models(engines[0])
    seed_users(engines[0], name="Jane Roe")
    init_models(engines[0])

    assert stored_users(engines[0]) == [(1, "Jane Roe")]


def test_ids_are_not_reused_after_delete(engines):
    sync_engine = engines[0]
    startup_database(sync_engine)
    startup_database(sync_engine)
    with sync_engine.begin() as conn:
        conn.execute(delete(UserDB).where(UserDB.id == 2))

    assert seed_users(sync_engine) == 3


def test_startup_fails_when_file_cannot_be_opened(tmp_path):
    sync_engine, _ = build_engines(str(tmp_path / "missing" / "users.db"))

    with pytest.raises(StartupError, match="could not open"):
        startup_database(sync_engine)
    sync_engine.dispose()


def test_startup_fails_when_seed_insert_is_rejected(engines, db_path):
    conn = sqlite3.connect(db_path)
    conn.execute(
        "CREATE TABLE users (id INTEGER PRIMARY KEY AUTOINCREMENT, name TEXT CHECK (name <> 'John Doe'))"
    )
    conn.commit()
    conn.close()

    with pytest.raises(StartupError, match="could not insert seed user"):
        startup_database(engines[0])
    assert stored_users(engines[0]) == []
