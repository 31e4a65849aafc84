"""Fixtures for API contract tests."""

import pytest
from fastapi.testclient import TestClient

from coopdues.main import app
from coopdues.services import get_db


@pytest.fixture
def client(db_session):
    """Provide a FastAPI test client bound to the test database session."""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass  # Don't close, let db_session fixture handle cleanup

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
