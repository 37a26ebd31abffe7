import uuid

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Text, Uuid
from sqlalchemy.orm import relationship

from .base import Base, JsonType, utcnow


class Job(Base):
    __tablename__ = 'job'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    recruiter_id = Column(Uuid, ForeignKey('recruiter.id', ondelete='SET NULL'), nullable=True, index=True)

    title = Column(Text, nullable=False)
    description = Column(Text, nullable=False, default='')
    location = Column(Text)
    employment_type = Column(Text)
    status = Column(Text, nullable=False, default='active')  # draft|active|closed|on_hold

    # Scoring configuration
    resume_weight = Column(Integer, nullable=False, default=5)
    answers_weight = Column(Integer, nullable=False, default=5)
    scoring_instructions = Column(Text)

    calendly_link = Column(Text)
    application_questions = Column(JsonType, nullable=False, default=list)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime(timezone=True))

    recruiter = relationship("Recruiter", back_populates="jobs")
    candidates = relationship("Candidate", back_populates="job")
