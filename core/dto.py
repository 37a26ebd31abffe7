"""Data Transfer Objects for the candidate pipeline.

ORM rows are copied into these snapshots inside the Unit of Work, so the
slow steps (résumé fetch, AI scoring, email) run after the session closes.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional

from core.eligibility.models import (
    ApplicationAnswer,
    ApplicationQuestion,
    DisqualificationFlag,
    parse_answers,
    parse_flags,
    parse_questions,
)


@dataclass
class EmailPersonalizationDTO:
    """Recruiter overrides for candidate-facing emails. All fields optional."""
    email_sender_name: Optional[str] = None
    reply_to_email: Optional[str] = None
    email_signature: Optional[str] = None
    application_received_subject: Optional[str] = None
    application_received_body_html: Optional[str] = None
    schedule_interview_subject: Optional[str] = None
    schedule_interview_body_html: Optional[str] = None
    rejection_subject: Optional[str] = None
    rejection_body_html: Optional[str] = None

    @classmethod
    def from_orm(cls, row: Any) -> Optional["EmailPersonalizationDTO"]:
        if row is None:
            return None
        return cls(**{name: getattr(row, name) for name in cls.__dataclass_fields__})


@dataclass
class JobDTO:
    id: Any
    title: str
    description: str = ""
    resume_weight: int = 5
    answers_weight: int = 5
    scoring_instructions: Optional[str] = None
    calendly_link: Optional[str] = None
    questions: List[ApplicationQuestion] = field(default_factory=list)
    recruiter_email: Optional[str] = None
    personalization: Optional[EmailPersonalizationDTO] = None

    @classmethod
    def from_orm(cls, job: Any) -> "JobDTO":
        recruiter = job.recruiter
        return cls(
            id=job.id,
            title=job.title,
            description=job.description or "",
            resume_weight=job.resume_weight if job.resume_weight is not None else 5,
            answers_weight=job.answers_weight if job.answers_weight is not None else 5,
            scoring_instructions=job.scoring_instructions,
            calendly_link=job.calendly_link,
            questions=parse_questions(job.application_questions),
            recruiter_email=recruiter.email if recruiter else None,
            personalization=EmailPersonalizationDTO.from_orm(
                recruiter.email_personalization if recruiter else None
            ),
        )


@dataclass
class CandidateDTO:
    id: Any
    name: str
    email: str
    resume_url: str
    job: JobDTO
    answers: List[ApplicationAnswer] = field(default_factory=list)
    flags: List[DisqualificationFlag] = field(default_factory=list)
    status: str = "new"

    @classmethod
    def from_orm(cls, candidate: Any) -> "CandidateDTO":
        return cls(
            id=candidate.id,
            name=candidate.name,
            email=candidate.email,
            resume_url=candidate.resume_url,
            job=JobDTO.from_orm(candidate.job),
            answers=parse_answers(candidate.application_answers),
            flags=parse_flags(candidate.disqualification_flags),
            status=candidate.status,
        )
