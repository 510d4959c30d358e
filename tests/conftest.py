"""Shared test fixtures."""

from pathlib import Path

import pytest

from userimport import create_service

HEADER = "name,surname,email"


@pytest.fixture
def db_service(tmp_path):
    """Provide a fresh, connected SQLite DatabaseService for each test."""
    db_path = tmp_path / "test.db"
    service = create_service(f"sqlite:///{db_path}")
    service.connect()
    yield service
    service.close()


@pytest.fixture
def db_url(tmp_path) -> str:
    """URL of a fresh SQLite file; the importer opens and closes it itself."""
    return f"sqlite:///{tmp_path / 'users.db'}"


@pytest.fixture
def write_users(tmp_path):
    """Write a users file with a header line followed by the given lines."""

    def _write(lines: list[str], name: str = "users.csv") -> Path:
        path = tmp_path / name
        path.write_text("\n".join([HEADER, *lines]) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def fetch_users(db_url):
    """Read back the users table through a fresh connection."""

    def _fetch() -> list[dict]:
        with create_service(db_url) as service:
            with service.transaction():
                return service.execute("SELECT email, name, surname FROM users ORDER BY email")

    return _fetch
