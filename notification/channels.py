#!/usr/bin/env python3
"""
Notification Channels

Transactional email delivery behind the NotificationChannel interface, so
the dispatcher never depends on a specific provider.

Usage:
    from notification.channels import ResendEmailChannel

    channel = ResendEmailChannel(api_key="re_...")
    channel.send(recipient, subject, html_body, {"from": "Team <noreply@example.com>"})
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional
import logging

import requests

logger = logging.getLogger(__name__)

RESEND_API_URL = "https://api.resend.com/emails"


class RateLimitException(Exception):
    """Raised when the provider answers 429 Too Many Requests."""

    def __init__(self, channel_type: str, retry_after: Optional[float] = None):
        self.channel_type = channel_type
        self.retry_after = retry_after
        msg = f"{channel_type} rate limit hit"
        if retry_after is not None:
            msg += f" (retry after {retry_after}s)"
        super().__init__(msg)


def _mask_email(email: str) -> str:
    """
    Mask email address for safe logging (PII protection).

    Shows only domain, e.g., "***@example.com"
    """
    if not email or '@' not in email:
        return "***"
    local, domain = email.rsplit('@', 1)
    return f"***@{domain}"


class NotificationChannel(ABC):
    """
    Abstract base class for all notification channels.

    All notification channels must implement this interface.
    """

    @property
    @abstractmethod
    def channel_type(self) -> str:
        """Return the channel type identifier."""
        pass

    @abstractmethod
    def send(self, recipient: str, subject: str, body: str, metadata: Dict[str, Any]) -> bool:
        """
        Send a notification through this channel.

        Args:
            recipient: Target recipient (format depends on channel)
            subject: Notification subject/title
            body: Notification body
            metadata: Additional channel-specific metadata

        Returns:
            True if sent successfully, False otherwise

        Raises:
            RateLimitException: If the provider rejected the call for rate reasons
        """
        pass

    def validate_config(self) -> bool:
        """
        Validate that the channel is properly configured.

        Returns:
            True if configured correctly, False otherwise
        """
        return True


class ResendEmailChannel(NotificationChannel):
    """HTML email via the Resend HTTP API.

    Recognized metadata keys: ``from`` (sender, required), ``reply_to``.
    """

    def __init__(self, api_key: Optional[str], timeout: float = 30.0,
                 session: Optional[requests.Session] = None):
        self.api_key = api_key
        self.timeout = timeout
        # None: one-off requests per call, safe across the poll thread and API threadpool
        self.session = session

    @property
    def channel_type(self) -> str:
        return 'email'

    def validate_config(self) -> bool:
        return bool(self.api_key)

    def send(self, recipient: str, subject: str, body: str, metadata: Dict[str, Any]) -> bool:
        if not self.validate_config():
            logger.error("Email not configured - RESEND_API_KEY not set")
            return False

        payload = {
            'from': metadata['from'],
            'to': [recipient],
            'subject': subject,
            'html': body,
        }
        if metadata.get('reply_to'):
            payload['reply_to'] = metadata['reply_to']

        try:
            response = (self.session or requests).post(
                RESEND_API_URL,
                json=payload,
                headers={'Authorization': f"Bearer {self.api_key}"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Failed to send email to {_mask_email(recipient)}: {e}")
            return False

        if response.status_code == 429:
            retry_after = response.headers.get('retry-after')
            try:
                retry_after = float(retry_after) if retry_after else None
            except ValueError:
                retry_after = None
            raise RateLimitException(self.channel_type, retry_after)

        if response.status_code >= 400:
            logger.error(
                f"Email provider rejected message to {_mask_email(recipient)}: "
                f"{response.status_code} {response.text[:200]}"
            )
            return False

        logger.info(f"Email sent to {_mask_email(recipient)}")
        return True
