"""
Fixtures shared by the service and API suites.

Everything runs against a private in-memory SQLite database.
The schema is rebuilt around every test, so each one sees an
empty chart of accounts and an empty ledger.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from erp_accounting.main import app
from erp_accounting.models import Base
from erp_accounting.models.base import get_db


# One shared connection, so the TestClient thread sees the same
# in-memory database as the test itself.
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture(autouse=True)
def schema():
    """Fresh tables for every test."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    """A session for calling services directly."""
    session = TestSessionLocal()
    yield session
    session.rollback()
    session.close()


@pytest.fixture
def client(db_session):
    """
    HTTP client bound to the test session.

    Routes receive db_session through the get_db override, so
    data written by a test is visible to the API and the other
    way round.
    """
    def use_test_session():
        yield db_session

    app.dependency_overrides[get_db] = use_test_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def actor_headers():
    """Headers identifying the acting user, as the auth layer sets them."""
    return {"X-User-Id": "user-1"}
