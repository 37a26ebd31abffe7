"""Application submission gate.

Runs the eligibility engine once, at submission time, and decides whether
the candidate enters the processing queue:

- any ``eliminated`` flag: status ``rejected``, ``needs_scoring`` False
- otherwise: status ``new``, ``needs_scoring`` True, and the worker is
  poked to process it right away
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

from core.eligibility import (
    DisqualificationFlag,
    evaluate_eliminatory_questions,
    has_elimination,
)
from core.eligibility.models import ApplicationAnswer, parse_questions
from database.models import CandidateStatus
from database.uow import candidate_uow

logger = logging.getLogger(__name__)


class SubmissionError(Exception):
    pass


class JobNotFoundError(SubmissionError):
    def __init__(self, job_id: Any):
        self.job_id = job_id
        super().__init__(f"Job {job_id} not found or not accepting applications")


class DuplicateApplicationError(SubmissionError):
    def __init__(self, job_id: Any, email: str):
        self.job_id = job_id
        super().__init__(f"An application with this email already exists for job {job_id}")


@dataclass
class NewApplication:
    job_id: Any
    name: str
    email: str
    resume_url: str
    answers: List[ApplicationAnswer] = field(default_factory=list)
    phone_number: Optional[str] = None
    linkedin_url: Optional[str] = None


@dataclass
class SubmissionResult:
    candidate_id: Any
    status: str
    needs_scoring: bool
    flags: List[DisqualificationFlag] = field(default_factory=list)
    triggered: bool = False


def submit_application(
    application: NewApplication,
    session_factory=None,
    trigger: Optional[Callable[[Any], bool]] = None,
) -> SubmissionResult:
    """Create the candidate row and gate it on the job's eliminatory questions.

    Args:
        application: Submitted form data
        session_factory: Optional sessionmaker (defaults to the app's)
        trigger: Called with the new candidate id when it enters the queue,
                 e.g. ``WorkerTriggerClient.trigger_process``

    Raises:
        JobNotFoundError: Job missing, deleted or not active
        DuplicateApplicationError: Email already applied to this job
    """
    with candidate_uow(session_factory) as uow:
        job = uow.jobs.get_open_by_id(application.job_id)
        if job is None:
            raise JobNotFoundError(application.job_id)

        if uow.candidates.find_duplicate(job.id, application.email):
            raise DuplicateApplicationError(job.id, application.email)

        questions = parse_questions(job.application_questions)
        flags = evaluate_eliminatory_questions(questions, application.answers)
        eliminated = has_elimination(flags)

        status = CandidateStatus.REJECTED if eliminated else CandidateStatus.NEW
        candidate = uow.candidates.create({
            'job_id': job.id,
            'name': application.name.strip(),
            'email': application.email.strip(),
            'phone_number': application.phone_number,
            'linkedin_url': application.linkedin_url,
            'resume_url': application.resume_url,
            'application_answers': [a.model_dump() for a in application.answers],
            'disqualification_flags': [f.model_dump(mode='json') for f in flags],
            'status': status,
            'needs_scoring': not eliminated,
        })
        candidate_id = candidate.id

    result = SubmissionResult(
        candidate_id=candidate_id,
        status=status,
        needs_scoring=not eliminated,
        flags=flags,
    )

    if eliminated:
        logger.info(f"Candidate {candidate_id} eliminated at submission ({len(flags)} flag(s))")
    elif trigger is not None:
        # The poll loop is the fallback if this fails
        result.triggered = bool(trigger(candidate_id))

    return result
