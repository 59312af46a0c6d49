"""
Pytest configuration and shared fixtures.
"""

import sys
from pathlib import Path

import pytest
from faker import Faker

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from core.credentials import Credentials, get_credentials  # noqa: E402
from core.database import get_connection, init_schema  # noqa: E402

TEST_USERS = {"anisa": "geheim", "ben": "passwort"}


@pytest.fixture
def db_path(tmp_path, monkeypatch):
    """Point every connection at a throwaway database."""
    path = tmp_path / "db" / "timelog-test.db"
    monkeypatch.setattr("core.database.DB_PATH", path)
    return path


@pytest.fixture
def conn(db_path):
    """Connection to an initialized test database."""
    connection = get_connection()
    init_schema(connection)
    yield connection
    connection.close()


@pytest.fixture
def fake():
    Faker.seed(1234)
    return Faker("de_DE")


@pytest.fixture
def sample_job(fake):
    """Form fields of one submitted job."""
    return {
        "date": "2024-01-05",
        "house_number": fake.building_number(),
        "intervals": "8-12;13:00-17:30",
        "extras": fake.sentence(),
        "overtime": "",
        "travel_time": "",
    }


@pytest.fixture
def client(db_path):
    """Test client with known users and a fresh database."""
    from fastapi.testclient import TestClient

    from api.main import app

    app.dependency_overrides[get_credentials] = lambda: Credentials(TEST_USERS)
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def logged_in_client(client):
    """Test client with an active session for 'anisa'."""
    response = client.post(
        "/login",
        data={"username": "anisa", "password": "geheim"},
        follow_redirects=False,
    )
    assert response.status_code == 303
    return client
