import uuid

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, Text, Uuid
from sqlalchemy.orm import relationship

from .base import Base, JsonType, utcnow


class CandidateStatus:
    NEW = 'new'
    REVIEWING = 'reviewing'
    SHORTLISTED = 'shortlisted'
    SCHEDULE_INTERVIEW = 'schedule_interview'
    HIRED = 'hired'
    REJECTED = 'rejected'
    FLAGGED = 'flagged'


class Candidate(Base):
    """
    A single application to a job.

    ``needs_scoring`` is the processing queue marker: True while the candidate
    waits for its one pass through the worker, False afterwards (or from the
    start, for candidates eliminated at submission).
    """
    __tablename__ = 'candidate'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    job_id = Column(Uuid, ForeignKey('job.id', ondelete='CASCADE'), nullable=False, index=True)

    # Identity
    name = Column(Text, nullable=False)
    email = Column(Text, nullable=False)
    phone_number = Column(Text)
    linkedin_url = Column(Text)
    resume_url = Column(Text, nullable=False)
    application_answers = Column(JsonType, nullable=False, default=list)

    status = Column(Text, nullable=False, default=CandidateStatus.NEW)
    needs_scoring = Column(Boolean, nullable=False, default=True)

    # Scoring output
    fit_score = Column(Integer)
    resume_rating = Column(Integer)
    answer_quality_rating = Column(Integer)
    resume_summary = Column(Text)
    experience_level = Column(Text)

    # Eligibility
    disqualification_flags = Column(JsonType, nullable=False, default=list)
    flagged_reason = Column(Text)

    schedule_interview_email_sent_at = Column(DateTime(timezone=True))

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime(timezone=True))

    job = relationship("Job", back_populates="candidates")

    __table_args__ = (
        # Poll query: pending, not deleted, oldest first
        Index('idx_candidate_pending', 'needs_scoring', 'created_at'),
        Index('idx_candidate_job_email', 'job_id', 'email'),
    )
