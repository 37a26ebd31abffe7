#!/usr/bin/env python3
"""
Status-change emails for human review actions.

The review UI moves a candidate to ``schedule_interview`` or ``rejected``;
the worker only reacts by sending the matching one-shot email.
"""

import logging
from typing import Any

from core.dto import CandidateDTO
from database.uow import candidate_uow
from notification.message_builder import TemplateKind
from notification.service import NotificationService
from ..exceptions import CandidateNotFoundException

logger = logging.getLogger(__name__)

STATUS_TEMPLATES = {
    "schedule_interview": TemplateKind.SCHEDULE_INTERVIEW,
    "rejected": TemplateKind.REJECTION,
}


class StatusEmailService:
    def __init__(self, notification_service: NotificationService, session_factory=None):
        self.notification_service = notification_service
        self.session_factory = session_factory

    def send_status_email(self, candidate_id: Any, status: str) -> bool:
        """
        Send the email for ``status``.

        Returns:
            True if the email was sent.

        Raises:
            CandidateNotFoundException: Candidate missing or deleted.
            ValueError: Status has no email.
        """
        kind = STATUS_TEMPLATES.get(status)
        if kind is None:
            raise ValueError(f"No email for status '{status}'")

        with candidate_uow(self.session_factory) as uow:
            candidate = uow.candidates.get_active_by_id(candidate_id)
            if candidate is None:
                raise CandidateNotFoundException(f"Candidate {candidate_id} not found")
            snapshot = CandidateDTO.from_orm(candidate)

        sent = self.notification_service.send(kind, snapshot, snapshot.job, snapshot.job.personalization)

        if sent and kind == TemplateKind.SCHEDULE_INTERVIEW:
            with candidate_uow(self.session_factory) as uow:
                uow.candidates.stamp_schedule_interview_sent(candidate_id)

        logger.info(f"{status} email for candidate {candidate_id}: {'sent' if sent else 'not sent'}")
        return sent
