import contextlib
import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from database.database import SessionLocal
from database.repositories import CandidateRepository, JobRepository

logger = logging.getLogger(__name__)


@dataclass
class CandidateUnitOfWork:
    session: Session
    candidates: CandidateRepository
    jobs: JobRepository


@contextlib.contextmanager
def candidate_uow(session_factory=None):
    """Per-unit-of-work transaction scope.

    Yields candidate and job repositories bound to one fresh Session.
    Commits on success, rolls back on exception, always closes.

    Usage:
        with candidate_uow() as uow:
            candidate = uow.candidates.get_pending_by_id(candidate_id)
            # perform operations...
        # commit happens automatically on successful exit
    """
    session = (session_factory or SessionLocal)()
    try:
        yield CandidateUnitOfWork(
            session=session,
            candidates=CandidateRepository(session),
            jobs=JobRepository(session),
        )
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
