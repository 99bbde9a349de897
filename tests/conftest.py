import pytest


@pytest.fixture
def db_path(tmp_path):
    """Path to a database file that does not exist yet."""
    return str(tmp_path / "users.db")
