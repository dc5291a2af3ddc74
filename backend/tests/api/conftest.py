"""
HTTP-layer fixtures: the FastAPI app wired to the test database and a
recording event publisher.
"""
import pytest
from fastapi.testclient import TestClient

from app.database import get_db
from app.main import app
from app.services.events import get_event_publisher


@pytest.fixture
def api_app(db_session):
    def _get_db():
        yield db_session

    app.dependency_overrides[get_db] = _get_db
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(api_app, publisher):
    api_app.dependency_overrides[get_event_publisher] = lambda: publisher
    with TestClient(api_app) as test_client:
        yield test_client
