"""
Pytest configuration and fixtures.

Every test gets a fresh in-memory SQLite database wired into a new app
instance. Vapi and Google are never reached: tests mock them with respx.
"""

import os

# Must be set before callboard modules read their settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["WEBHOOK_API_KEY"] = "test-webhook-key"
os.environ["VAPI_PRIVATE_KEY"] = ""
os.environ["VAPI_BASE_URL"] = "https://api.vapi.ai"
os.environ["SESSION_SECRET"] = "test-session-secret"
os.environ["GOOGLE_CLIENT_ID"] = ""
os.environ["GOOGLE_CLIENT_SECRET"] = ""
os.environ["ENVIRONMENT"] = "test"

from typing import Callable, Dict, Generator  # noqa: E402

import pytest  # noqa: E402
import respx  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402

from callboard.config import get_settings  # noqa: E402
from callboard.infrastructure.database import Database  # noqa: E402
from callboard.main import create_app  # noqa: E402

WEBHOOK_KEY = "test-webhook-key"
VAPI_BASE_URL = "https://api.vapi.ai"


@pytest.fixture
def settings_env(monkeypatch) -> Generator[Callable[..., None], None, None]:
    """Override environment settings for one test."""
    def apply(**values) -> None:
        for key, value in values.items():
            monkeypatch.setenv(key, str(value))
        get_settings.cache_clear()

    yield apply
    get_settings.cache_clear()


@pytest.fixture
def database() -> Generator[Database, None, None]:
    db = Database("sqlite://")
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def db_session(database: Database) -> Generator[Session, None, None]:
    with database.session() as session:
        yield session


@pytest.fixture
def client(database: Database) -> Generator[TestClient, None, None]:
    app = create_app(database=database)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def signup(client: TestClient) -> Callable[..., Dict]:
    """Create a local account through the API and return the response body."""
    def _signup(username: str = "alice", password: str = "s3cret-pass") -> Dict:
        response = client.post("/api/auth/signup", json={"username": username, "password": password})
        assert response.status_code == 201, response.text
        return response.json()

    return _signup


@pytest.fixture
def auth_headers(signup) -> Dict[str, str]:
    token = signup()["token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def vapi_mock() -> Generator[respx.MockRouter, None, None]:
    with respx.mock(base_url=VAPI_BASE_URL, assert_all_called=False) as mock:
        yield mock
