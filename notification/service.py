#!/usr/bin/env python3
"""
Notification Service - transactional candidate emails.

Fire-and-forget from the caller's point of view: every public method logs
failures and returns a bool, and never raises. Each provider call first
passes through the injected rate limiter, which delays rather than drops.

Usage:
    from notification.service import NotificationService

    service = NotificationService(channel, rate_limiter, from_email, app_url)
    service.send(TemplateKind.REJECTION, candidate, job, personalization)
"""

import logging
from typing import Optional

from core.dto import CandidateDTO, EmailPersonalizationDTO, JobDTO
from notification.channels import NotificationChannel, RateLimitException, _mask_email
from notification.message_builder import CandidateMessageBuilder, EmailMessage, TemplateKind
from notification.rate_limiter import RateLimiter, SlidingWindowRateLimiter

logger = logging.getLogger(__name__)


class NotificationService:
    """
    Candidate email dispatcher.

    Args:
        channel: Delivery channel, or None when email is not configured
        rate_limiter: Shared send budget (defaults to 2 sends/second)
        from_email: Sender address
        app_url: Base URL used for links in recruiter emails
    """

    def __init__(
        self,
        channel: Optional[NotificationChannel],
        rate_limiter: Optional[RateLimiter] = None,
        from_email: str = "noreply@hunter.ai",
        app_url: str = "http://localhost:3000",
    ):
        self.channel = channel
        self.rate_limiter = rate_limiter or SlidingWindowRateLimiter()
        self.builder = CandidateMessageBuilder(from_email, app_url)

        if not self.enabled:
            logger.warning("Email provider not configured. Email sending is disabled.")

    @property
    def enabled(self) -> bool:
        return self.channel is not None and self.channel.validate_config()

    def send(
        self,
        kind: TemplateKind,
        candidate: CandidateDTO,
        job: JobDTO,
        personalization: Optional[EmailPersonalizationDTO] = None,
    ) -> bool:
        if not self.enabled:
            logger.info(f"Email disabled. Skipping {kind.value} email for candidate {candidate.id}.")
            return False
        try:
            message = self.builder.build(kind, candidate, job, personalization)
        except Exception as e:
            logger.error(f"Failed to build {kind.value} email for candidate {candidate.id}: {e}")
            return False
        return self._deliver(message, kind.value)

    def send_recruiter_notification(
        self,
        candidate: CandidateDTO,
        job: JobDTO,
        personalization: Optional[EmailPersonalizationDTO] = None,
    ) -> bool:
        if not self.enabled:
            return False
        message = self.builder.build_recruiter_notification(candidate, job, personalization)
        if message is None:
            logger.debug(f"Job {job.id} has no recruiter email. Skipping recruiter notification.")
            return False
        return self._deliver(message, "recruiter_notification")

    def send_application_emails(self, candidate: CandidateDTO, job: JobDTO) -> bool:
        """Confirmation to the candidate plus the recruiter notice.

        Returns True only if the candidate confirmation went out.
        """
        logger.info(f"Sending application emails for candidate {candidate.id}, job: {job.title}")
        sent = self.send(TemplateKind.APPLICATION_RECEIVED, candidate, job, job.personalization)
        self.send_recruiter_notification(candidate, job, job.personalization)
        return sent

    def _deliver(self, message: EmailMessage, label: str) -> bool:
        try:
            self.rate_limiter.acquire()
            ok = self.channel.send(message.to, message.subject, message.html, message.metadata())
        except RateLimitException as e:
            logger.warning(f"Rate limited sending {label} email to {_mask_email(message.to)}: {e}")
            return False
        except Exception as e:
            logger.error(f"FAILED to send {label} email to {_mask_email(message.to)}: {e}")
            return False

        if ok:
            logger.info(f"{label} email sent to {_mask_email(message.to)}")
        else:
            logger.error(f"FAILED to send {label} email to {_mask_email(message.to)}")
        return ok
