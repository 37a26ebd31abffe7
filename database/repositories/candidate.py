from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import joinedload

from database.models import Candidate, Job, Recruiter
from database.repositories.base import BaseRepository


class CandidateRepository(BaseRepository):
    model = Candidate

    def _with_job(self):
        return select(Candidate).options(
            joinedload(Candidate.job)
            .joinedload(Job.recruiter)
            .joinedload(Recruiter.email_personalization)
        )

    def get_active_by_id(self, candidate_id: Any) -> Optional[Candidate]:
        stmt = self._with_job().where(
            Candidate.id == candidate_id,
            Candidate.deleted_at.is_(None),
        )
        return self.db.execute(stmt).unique().scalar_one_or_none()

    def get_pending_by_id(self, candidate_id: Any) -> Optional[Candidate]:
        """Return the candidate only while it still waits for processing."""
        stmt = self._with_job().where(
            Candidate.id == candidate_id,
            Candidate.deleted_at.is_(None),
            Candidate.needs_scoring.is_(True),
        )
        return self.db.execute(stmt).unique().scalar_one_or_none()

    def get_pending_ids(self, limit: int) -> List[Any]:
        """Pending candidate ids, oldest submission first."""
        stmt = (
            select(Candidate.id)
            .where(
                Candidate.needs_scoring.is_(True),
                Candidate.deleted_at.is_(None),
            )
            .order_by(Candidate.created_at.asc())
            .limit(limit)
        )
        return list(self.db.execute(stmt).scalars().all())

    def find_duplicate(self, job_id: Any, email: str) -> Optional[Candidate]:
        stmt = select(Candidate).where(
            Candidate.job_id == job_id,
            func.lower(Candidate.email) == email.strip().lower(),
            Candidate.deleted_at.is_(None),
        )
        return self.db.execute(stmt).scalars().first()

    def create(self, data: Dict[str, Any]) -> Candidate:
        candidate = Candidate(**data)
        self.db.add(candidate)
        self.db.flush()
        return candidate

    def save_scores(
        self,
        candidate_id: Any,
        scores: Dict[str, Any],
        status: Optional[str] = None,
        flagged_reason: Optional[str] = None,
    ) -> int:
        """Persist scoring output and mark the candidate as processed.

        Clearing ``needs_scoring`` in the same statement is what completes the
        candidate's pass through the worker.
        """
        values = dict(scores)
        values['needs_scoring'] = False
        if status is not None:
            values['status'] = status
        if flagged_reason is not None:
            values['flagged_reason'] = flagged_reason
        return self._update_by_id(candidate_id, **values)

    def force_processed(self, candidate_id: Any) -> int:
        """Clear the pending marker without touching scores."""
        return self._update_by_id(candidate_id, needs_scoring=False)

    def mark_for_rescoring(self, candidate_id: Any) -> int:
        return self._update_by_id(candidate_id, Candidate.deleted_at.is_(None), needs_scoring=True)

    def stamp_schedule_interview_sent(self, candidate_id: Any) -> int:
        now = datetime.now(timezone.utc)
        return self._update_by_id(candidate_id, schedule_interview_email_sent_at=now, updated_at=now)
