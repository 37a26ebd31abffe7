"""
Worker Trigger Client - how the application layer pokes the worker.

Fire-and-forget: every call logs and swallows transport errors and returns
a bool, so a slow or unavailable worker never fails the user's request.
The batch loop picks up anything a failed trigger missed.
"""
import logging
from typing import Optional

import requests

logger = logging.getLogger(__name__)


class WorkerTriggerClient:
    def __init__(
        self,
        base_url: Optional[str],
        secret: Optional[str],
        timeout: float = 12.0,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or "").rstrip("/")
        self.secret = secret
        self.timeout = timeout
        # None: one-off requests per call, safe across the poll thread and API threadpool
        self.session = session

    @property
    def configured(self) -> bool:
        return bool(self.base_url and self.secret)

    def trigger_process(self, candidate_id, skip_emails: bool = False) -> bool:
        """Ask the worker to process one candidate now."""
        return self._post("/process", {"candidateId": str(candidate_id), "skipEmails": skip_emails})

    def trigger_status_email(self, candidate_id, status: str) -> bool:
        """Ask the worker to send the email for a status change (schedule_interview / rejected)."""
        return self._post("/notify-status", {"candidateId": str(candidate_id), "status": status})

    def _post(self, path: str, payload: dict) -> bool:
        if not self.configured:
            logger.warning(f"Worker URL or secret not configured. Skipping trigger {path}.")
            return False

        try:
            response = (self.session or requests).post(
                f"{self.base_url}{path}",
                json=payload,
                headers={"Authorization": f"Bearer {self.secret}"},
                timeout=self.timeout,
            )
        except requests.Timeout:
            logger.warning(f"Worker trigger {path} timed out after {self.timeout}s; work continues server-side.")
            return False
        except requests.RequestException as e:
            logger.error(f"Worker trigger {path} failed: {e}")
            return False

        if not response.ok:
            logger.warning(f"Worker trigger {path} returned {response.status_code}: {response.text[:200]}")
            return False
        return True
