"""
Notification Module

Transactional candidate emails with rate-limited delivery.

Usage:
    from notification import NotificationService, ResendEmailChannel, TemplateKind

    service = NotificationService(ResendEmailChannel(api_key))
    service.send(TemplateKind.REJECTION, candidate, job, personalization)
"""

from notification.channels import (
    NotificationChannel,
    ResendEmailChannel,
    RateLimitException,
)

from notification.rate_limiter import (
    RateLimiter,
    SlidingWindowRateLimiter,
    RedisSlidingWindowRateLimiter,
)

from notification.message_builder import (
    CandidateMessageBuilder,
    EmailMessage,
    TemplateKind,
)

from notification.service import NotificationService

__all__ = [
    # Channels
    'NotificationChannel',
    'ResendEmailChannel',
    'RateLimitException',
    # Rate limiting
    'RateLimiter',
    'SlidingWindowRateLimiter',
    'RedisSlidingWindowRateLimiter',
    # Messages
    'CandidateMessageBuilder',
    'EmailMessage',
    'TemplateKind',
    # Service
    'NotificationService',
]
