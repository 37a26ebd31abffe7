"""Single-candidate processing.

Shared by the poll loop and the HTTP trigger. One pass is:

    load pending candidate -> extract résumé -> score -> persist -> email

The persist step clears ``needs_scoring`` whatever the scoring outcome, and
any exception along the way still clears it, so no candidate can loop in
the queue. There is no row lock: a poll cycle and a trigger for the same
candidate can both get past the load step and score it twice.
"""

import logging
import time
from typing import Any, Optional

from core.dto import CandidateDTO
from core.eligibility import elimination_reasons, has_elimination
from core.scorer import CandidateScoringService
from database.models import CandidateStatus
from database.uow import candidate_uow
from etl.resume import ResumeTextExtractor
from notification.service import NotificationService
from pipeline.results import ProcessResult

logger = logging.getLogger(__name__)

NOT_PENDING_ERROR = "Candidate not found or already processed"


class CandidateProcessor:
    def __init__(
        self,
        extractor: ResumeTextExtractor,
        scoring_service: CandidateScoringService,
        notification_service: Optional[NotificationService] = None,
        session_factory=None,
    ):
        self.extractor = extractor
        self.scoring_service = scoring_service
        self.notification_service = notification_service
        self.session_factory = session_factory

    def process_candidate(self, candidate_id: Any, skip_emails: bool = False) -> ProcessResult:
        """Run one candidate through the pipeline.

        Returns a failed result (without touching the row) when the
        candidate is missing, deleted or no longer pending.
        """
        start = time.time()
        try:
            snapshot = self._load_pending(candidate_id)
        except Exception as e:
            logger.error(f"Failed to load candidate {candidate_id}: {e}", exc_info=True)
            self.force_processed(candidate_id)
            return ProcessResult.failure(candidate_id, str(e))

        if snapshot is None:
            logger.info(f"Candidate {candidate_id} not pending (missing, deleted or already processed). Skipping.")
            return ProcessResult.failure(candidate_id, NOT_PENDING_ERROR)

        logger.info(f"Processing candidate {candidate_id} for job '{snapshot.job.title}'")

        try:
            resume_text = self.extractor.extract(snapshot.resume_url)
            scores = self.scoring_service.score(snapshot, snapshot.job, resume_text)

            status = None
            reason = None
            if has_elimination(snapshot.flags):
                status = CandidateStatus.FLAGGED
                reason = elimination_reasons(snapshot.flags)

            with candidate_uow(self.session_factory) as uow:
                uow.candidates.save_scores(
                    candidate_id, scores.to_dict(), status=status, flagged_reason=reason
                )
        except Exception as e:
            logger.error(f"Error processing candidate {candidate_id}: {e}", exc_info=True)
            self.force_processed(candidate_id)
            return ProcessResult.failure(candidate_id, str(e))

        emails_sent = False
        if skip_emails:
            logger.info(f"Emails suppressed for candidate {candidate_id}")
        elif self.notification_service is not None:
            try:
                emails_sent = self.notification_service.send_application_emails(snapshot, snapshot.job)
            except Exception as e:
                logger.error(f"Error sending emails for candidate {candidate_id}: {e}")

        elapsed = time.time() - start
        logger.info(
            f"Candidate {candidate_id} scored {scores.fit_score}/100 "
            f"(resume {scores.resume_rating}/5, answers {scores.answer_quality_rating}/5) in {elapsed:.2f}s"
        )
        return ProcessResult(
            ok=True,
            candidate_id=candidate_id,
            fit_score=scores.fit_score,
            status=status or snapshot.status,
            emails_sent=emails_sent,
        )

    def force_processed(self, candidate_id: Any) -> None:
        """Clear ``needs_scoring`` after a failure. Logs if even that fails."""
        try:
            with candidate_uow(self.session_factory) as uow:
                uow.candidates.force_processed(candidate_id)
            logger.warning(f"Candidate {candidate_id} marked processed after failure")
        except Exception as e:
            logger.error(f"Could not mark candidate {candidate_id} as processed: {e}")

    def _load_pending(self, candidate_id: Any) -> Optional[CandidateDTO]:
        with candidate_uow(self.session_factory) as uow:
            candidate = uow.candidates.get_pending_by_id(candidate_id)
            if candidate is None:
                return None
            return CandidateDTO.from_orm(candidate)
