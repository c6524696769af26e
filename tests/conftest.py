"""
Pytest configuration and fixtures for answerboard tests.

Every test gets its own in-memory SQLite database, so commits and rollbacks
made by the services are real and nothing leaks between tests.
"""
import os
import pathlib
import sys

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("ENV", "test")
os.environ.setdefault("REPUTATION_BACKEND", "sql")

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")


@pytest.fixture(scope="function")
def engine():
    from answerboard.db import Base
    from answerboard import models  # noqa: F401  registers tables

    test_engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False} if "sqlite" in TEST_DATABASE_URL else {},
        poolclass=StaticPool,
        echo=False,  # Set to True for SQL debugging
    )
    Base.metadata.create_all(bind=test_engine)
    try:
        yield test_engine
    finally:
        Base.metadata.drop_all(bind=test_engine)
        test_engine.dispose()


@pytest.fixture(scope="function")
def db(engine):
    """
    Database session for one test.

    Usage:
        def test_something(db: Session):
            user = make_user(db, "alice")
            ...
    """
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def ledger(db):
    from answerboard.services.reputation_ledger import SqlReputationLedger
    return SqlReputationLedger(db)


def override_get_db(db_session):
    def _override():
        yield db_session
    return _override


@pytest.fixture(scope="function")
def client(db, ledger):
    """
    FastAPI TestClient wired to the test session and SQL ledger.

    The lifespan is not entered, so no engine is created from DATABASE_URL.
    """
    from fastapi.testclient import TestClient
    from answerboard.main import app
    from answerboard.db import get_db
    from answerboard.dependencies import get_reputation_ledger

    app.dependency_overrides[get_db] = override_get_db(db)
    app.dependency_overrides[get_reputation_ledger] = lambda: ledger
    try:
        yield TestClient(app, raise_server_exceptions=False)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def author(db):
    from tests.helpers.qa_helpers import make_user
    return make_user(db, "author")


@pytest.fixture
def category(db, author):
    from tests.helpers.qa_helpers import make_category
    return make_category(db, author, "fitness")


@pytest.fixture
def question(db, author, category):
    from tests.helpers.qa_helpers import make_question
    return make_question(db, author, category)
