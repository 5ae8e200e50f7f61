import os
from collections.abc import Iterator
from datetime import timedelta

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from abtech.adapters.dev_email import DevEmailAdapter
from abtech.adapters.sqlite.migrator import SQLiteMigrator
from abtech.api.auth_utils import create_session_token
from abtech.api.deps import Settings, get_email_sender, get_settings


@pytest.fixture
def test_data_dir(tmp_path):
    return str(tmp_path)


@pytest.fixture
def db_path(test_data_dir) -> str:
    """Temporary SQLite DB with all migrations applied."""
    path = os.path.join(test_data_dir, "abtech.db")
    SQLiteMigrator(path, "migrations").run_migrations()
    return path


@pytest.fixture
def settings(db_path) -> Settings:
    settings = Settings()
    settings.db_path = db_path
    settings.data_dir = os.path.dirname(db_path)
    settings.turnstile_secret = None
    settings.smtp_host = None
    return settings


@pytest.fixture
def dev_email() -> DevEmailAdapter:
    return DevEmailAdapter()


@pytest.fixture
def app(settings: Settings, dev_email: DevEmailAdapter) -> Iterator[FastAPI]:
    """The real app with repos pointed at the temporary DB."""
    from abtech.api.main import app

    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_email_sender] = lambda: dev_email
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


def bearer(role: str, user_id: str = "user-1", email: str | None = None) -> dict[str, str]:
    """Authorization header for a session with `role`."""
    token = create_session_token(
        user_id,
        role,
        email=email,
        expires_delta=timedelta(hours=1),
        secret_key=get_settings().secret_key,
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return bearer("ADMIN", "admin-1", "admin@abtech.test")


@pytest.fixture
def moderator_headers() -> dict[str, str]:
    return bearer("MODERATOR", "mod-1", "mod@abtech.test")


@pytest.fixture
def user_headers() -> dict[str, str]:
    return bearer("FREE_USER", "reader-1", "reader@abtech.test")


@pytest.fixture
def session_headers():
    """`bearer` as a fixture, for sessions tied to real user rows."""
    return bearer
