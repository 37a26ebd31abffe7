import uuid

from sqlalchemy import Column, DateTime, ForeignKey, Text, Uuid
from sqlalchemy.orm import relationship

from .base import Base, utcnow


class Recruiter(Base):
    __tablename__ = 'recruiter'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(Text)
    email = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    email_personalization = relationship(
        "EmailPersonalization", back_populates="recruiter", uselist=False
    )
    jobs = relationship("Job", back_populates="recruiter")


class EmailPersonalization(Base):
    """
    Per-recruiter overrides for candidate-facing emails.

    Empty subject/body fields fall back to the built-in templates.
    """
    __tablename__ = 'email_personalization'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    recruiter_id = Column(Uuid, ForeignKey('recruiter.id', ondelete='CASCADE'), nullable=False, unique=True)

    email_sender_name = Column(Text)
    reply_to_email = Column(Text)
    email_signature = Column(Text)

    application_received_subject = Column(Text)
    application_received_body_html = Column(Text)
    schedule_interview_subject = Column(Text)
    schedule_interview_body_html = Column(Text)
    rejection_subject = Column(Text)
    rejection_body_html = Column(Text)

    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    recruiter = relationship("Recruiter", back_populates="email_personalization")
