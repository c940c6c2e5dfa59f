"""
Shared fixtures for the API tests.

Every API test runs against its own SQLite file with foreign keys enabled.
Tables are created when a client is opened and dropped when it closes.
"""

from contextlib import contextmanager

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from api_workbench.main import app
from api_workbench.database import Base, get_db
from api_workbench.dependencies import get_transport


# Test database setup
TEST_DATABASE_URL = "sqlite:///./test_api_workbench.db"
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False}
)


@event.listens_for(test_engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    """Enable foreign key constraints for SQLite connections."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


def override_get_db():
    """Override database dependency for testing."""
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def get_test_client(handler=None):
    """
    Create a test client with a fresh database.

    When ``handler`` is given, outgoing requests go to an httpx.MockTransport
    built from it instead of the network.
    """
    Base.metadata.create_all(bind=test_engine)
    app.dependency_overrides[get_db] = override_get_db
    if handler is not None:
        app.dependency_overrides[get_transport] = lambda: httpx.MockTransport(handler)

    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        Base.metadata.drop_all(bind=test_engine)
        app.dependency_overrides.clear()


# Session scoped so hypothesis tests can open a fresh client per example
@pytest.fixture(scope="session")
def api_client():
    return get_test_client


@pytest.fixture(scope="session")
def session_factory():
    return TestSessionLocal
