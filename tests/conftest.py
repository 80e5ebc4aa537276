# tests/conftest.py
import os

# Must be set before the app (and its cached settings) is imported.
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DB_URL", "sqlite+aiosqlite:///./test_attendance_recap.db")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.main import create_app  # noqa: E402


@pytest.fixture(scope="session")
def client() -> TestClient:
    """
    Shared TestClient fixture for all tests.

    Uses the application factory so startup hooks (schema creation) run.
    """
    app = create_app()
    with TestClient(app) as test_client:
        yield test_client
