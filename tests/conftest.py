"""
Shared test fixtures: throwaway SQLite database, test client, owner headers.
"""

import os
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Point the app at the test database before importing app modules
os.environ["DATABASE_URL"] = "sqlite:///./test_stonecalc.db"

from stonecalc.database import Base, get_db
from stonecalc.main import app


TEST_DATABASE_URL = "sqlite:///./test_stonecalc.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_database():
    """Create all tables before each test, drop after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app)


@pytest.fixture
def db():
    """Direct database session for test setup/assertions."""
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def owner_headers():
    """Identify the caller as a known owner."""
    return {"X-User-Mobile": "01711000000", "X-User-Name": "Rahim"}


@pytest.fixture
def other_owner_headers():
    return {"X-User-Mobile": "01822000000", "X-User-Name": "Karim"}
