"""Pytest configuration and fixtures."""

import os

# Tables for the test database are created below, not by the app's lifespan
os.environ["CREATE_TABLES_ON_STARTUP"] = "false"
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from src import models  # noqa: E402, F401
from src.database import Base, get_db  # noqa: E402
from src.main import app  # noqa: E402


class AuthHeaders(dict):
    """Dict subclass that also stores the registered user's id and email."""

    def __init__(self, *args, user_id: str | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


SQLALCHEMY_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite:///./test.db")

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def register(client, email: str, name: str = "Test User", password: str = "testpass123"):
    """Register a user and return auth headers for it."""
    response = client.post(
        "/auth/register",
        json={"email": email, "password": password, "name": name},
    )
    assert response.status_code == 201
    data = response.json()
    return AuthHeaders(
        {"Authorization": f"Bearer {data['token']}"},
        user_id=data["user"]["id"],
        email=data["user"]["email"],
    )


@pytest.fixture
def auth_headers(client):
    """Create a user and return auth headers with user info."""
    return register(client, "test@example.com")


@pytest.fixture
def other_auth_headers(client):
    """A second, unrelated user."""
    return register(client, "other@example.com", name="Other User")


@pytest.fixture
def soup():
    """Request body for a minimal valid item."""
    return {
        "name": "Soup",
        "summary": "s",
        "description": "d",
        "category": "Starter",
        "price": 5,
    }
