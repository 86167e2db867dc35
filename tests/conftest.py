"""
Pytest configuration and fixtures for PlagiarismLens tests.
"""
import os

os.environ.setdefault("DB_URL", "sqlite://")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from app.database.session import get_session
from app.main import app
from app.models.plagiarism import SubmissionSnapshot
from app.models.submission import Submission
from app.services.config_service import config_service


@pytest.fixture(scope="session")
def test_engine():
    """Create an in-memory test database engine."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    return engine


@pytest.fixture(scope="session")
def test_session_factory(test_engine):
    """Create a test session factory."""
    return sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture
def test_db_session(test_engine, test_session_factory):
    """Create a test database session with fresh tables."""
    SQLModel.metadata.create_all(bind=test_engine)

    session = test_session_factory()
    try:
        yield session
        session.rollback()
    finally:
        session.close()
        SQLModel.metadata.drop_all(bind=test_engine)


@pytest.fixture
def client(test_db_session):
    """Create a test client with database dependency override."""

    def override_get_session():
        try:
            yield test_db_session
        finally:
            pass

    app.dependency_overrides[get_session] = override_get_session

    from fastapi.testclient import TestClient

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def reset_config():
    """Drop setting overrides between tests."""
    config_service.clear_cache()
    yield
    config_service.clear_cache()


@pytest.fixture
def make_snapshot():
    """Factory for engine submission snapshots."""
    counter = {"value": 0}

    def _make(text_content, student_id=None, student_name=None, assignment_id="a1", plagiarism_score=0):
        counter["value"] += 1
        number = counter["value"]
        return SubmissionSnapshot(
            id=f"sub{number}",
            assignment_id=assignment_id,
            student_id=student_id or f"s{number}",
            student_name=student_name or f"Student {number}",
            roll_number=f"R{number:03d}",
            text_content=text_content,
            plagiarism_score=plagiarism_score,
        )

    return _make


@pytest.fixture
def sample_submission(test_db_session):
    """Create a sample stored submission."""
    submission = Submission(
        assignment_id="a1",
        student_id="s1",
        student_name="Alice Smith",
        roll_number="CS001",
        file_url="uploads/alice.txt",
        file_content="the quick brown fox jumps over the lazy dog",
    )
    test_db_session.add(submission)
    test_db_session.commit()
    test_db_session.refresh(submission)
    return submission
