"""
Pytest configuration and fixtures.

Provides an in-memory SQLite database with the full schema and small
factories for recruiters, jobs and candidates.
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database.models import Base, Candidate, EmailPersonalization, Job, Recruiter


def make_session_factory():
    """Fresh in-memory database shared by every session of the returned factory."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def session_factory():
    return make_session_factory()


SALARY_QUESTION = {
    "id": "q-salary",
    "question": "What is your salary expectation?",
    "type": "short_text",
    "is_eliminatory": True,
    "eliminatory_criteria": {"range_max": 8000, "tolerance_percent": 15},
}

RELOCATE_QUESTION = {
    "id": "q-relocate",
    "question": "Can you relocate?",
    "type": "yes_no",
    "options": ["Yes", "No"],
    "is_eliminatory": True,
    "eliminatory_criteria": {"expected_answer": "Yes"},
}


def create_job(session_factory, **overrides):
    """Create a recruiter (with personalization) and an active job. Returns the job id."""
    session = session_factory()
    try:
        recruiter = Recruiter(name="Rita Recruiter", email="rita@acme.test")
        recruiter.email_personalization = EmailPersonalization(
            email_sender_name=overrides.pop("sender_name", None),
            email_signature=overrides.pop("signature", None),
        )
        data = {
            "title": "Backend Engineer",
            "description": "Build APIs in Python.",
            "status": "active",
            "resume_weight": 5,
            "answers_weight": 5,
            "application_questions": [SALARY_QUESTION, RELOCATE_QUESTION],
        }
        data.update(overrides)
        job = Job(recruiter=recruiter, **data)
        session.add(job)
        session.commit()
        return job.id
    finally:
        session.close()


def create_candidate(session_factory, job_id, **overrides):
    """Create a pending candidate. Returns the candidate id."""
    session = session_factory()
    try:
        data = {
            "id": uuid.uuid4(),
            "job_id": job_id,
            "name": "Ada Lovelace",
            "email": "ada@example.com",
            "resume_url": "https://files.example.com/resumes/ada.pdf",
            "application_answers": [
                {"question_id": "q-salary", "answer": "7500"},
                {"question_id": "q-relocate", "answer": "Yes"},
            ],
            "status": "new",
            "needs_scoring": True,
            "disqualification_flags": [],
        }
        data.update(overrides)
        candidate = Candidate(**data)
        session.add(candidate)
        session.commit()
        return candidate.id
    finally:
        session.close()


def load_candidate(session_factory, candidate_id):
    session = session_factory()
    try:
        candidate = session.get(Candidate, candidate_id)
        session.expunge_all()
        return candidate
    finally:
        session.close()


def minutes_ago(minutes: int) -> datetime:
    return datetime.now(timezone.utc) - timedelta(minutes=minutes)
