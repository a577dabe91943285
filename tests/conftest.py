"""
Pytest fixtures shared by the service and API suites.

Each test runs against a fresh SQLite file: the schema is built
before the test and torn down after it.
"""

import pytest
from fastapi.testclient import TestClient

from bookkeeping.main import app
from bookkeeping.models.base import (
    Base,
    build_engine,
    build_session_factory,
    get_db,
    init_db,
)

TEST_DATABASE_URL = "sqlite:///./test_bookkeeping.db"

test_engine = build_engine(TEST_DATABASE_URL)
TestSession = build_session_factory(test_engine)


@pytest.fixture(autouse=True)
def fresh_schema():
    init_db(bind=test_engine)
    yield
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def db_session():
    session = TestSession()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def client(db_session):
    """
    HTTP client whose requests all run on the test session.

    The client is not used as a context manager, so the app's
    startup hook never touches the configured database.
    """
    app.dependency_overrides[get_db] = lambda: db_session
    yield TestClient(app)
    app.dependency_overrides.clear()
