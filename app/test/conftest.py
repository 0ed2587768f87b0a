"""
Shared fixtures for the evaluation service tests.

The environment is configured before any application module is imported:
the database module builds its engine at import time and the evaluation
settings read the polling interval once.

Dependencies:
- pytest: For fixtures
- sqlalchemy: For the in-memory SQLite database
"""

import os
import uuid

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("ENV", "test")
os.environ["EVALUATION_POLL_INTERVAL_SECONDS"] = "0"

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.constants.evaluation_schemas import JOB_SPECIFIC_SKILL_COUNT
from app.models.interview_models import Base, MockInterview, PMInterviewQuestion
from app.test.evaluation_fakes import TRANSCRIPT, USER_ID, make_evaluation


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=True)


@pytest.fixture
def session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def make_interview(session):
    """Insert a mock interview and return its id as a string."""

    def _make(**overrides) -> str:
        values = {
            "user_id": USER_ID,
            "interview_mode": "full",
            "transcript": TRANSCRIPT,
        }
        values.update(overrides)
        interview_id = uuid.uuid4()
        session.add(MockInterview(id=interview_id, **values))
        session.commit()
        return str(interview_id)

    return _make


@pytest.fixture
def bank_question(session):
    question = PMInterviewQuestion(
        category="Product Sense",
        question="How would you improve Google Maps for cyclists?",
        guidance="Start with the user segment.",
    )
    session.add(question)
    session.commit()
    return question


@pytest.fixture
def job_context():
    return {"companyName": "Acme", "jobTitle": "PM", "descriptionSnippet": "Own the payments roadmap."}


@pytest.fixture
def generated_questions():
    return [
        {"question": "Why Acme?", "category": "company"},
        {"question": "Tell me about a product you launched.", "category": "role"},
    ]


@pytest.fixture
def full_evaluation():
    return make_evaluation()


@pytest.fixture
def job_specific_evaluation():
    return make_evaluation(skill_count=JOB_SPECIFIC_SKILL_COUNT, improvements=2, company_fit="Strong fit for Acme.")
