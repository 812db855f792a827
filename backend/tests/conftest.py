"""
Pytest configuration for all tests.
Points the app at an in-memory SQLite store and provides a logged-in client.
"""

import os

# Must be set before config is imported anywhere
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["ENV"] = "testing"
os.environ["DEBUG"] = "false"
os.environ["SLA_THRESHOLD_MINUTES"] = "30"

import pytest
from fastapi.testclient import TestClient

from database import Base, SessionLocal, engine
from main import app
from models import User  # noqa: F401
from services.auth_service import auth_service

TEST_USERNAME = "teller"
TEST_PASSWORD = "s3cret-pass"


@pytest.fixture(autouse=True)
def reset_store():
    """Fresh tables for every test"""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def test_user(db_session):
    return auth_service.upsert_user(db_session, TEST_USERNAME, TEST_PASSWORD, "OPERATOR")


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def auth_headers(client, test_user):
    response = client.post(
        "/api/v1/auth/login",
        json={"username": TEST_USERNAME, "password": TEST_PASSWORD},
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}
