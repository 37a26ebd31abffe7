"""Business logic services."""

from .status_email_service import StatusEmailService
