from dataclasses import dataclass
from typing import Optional

from core.config_loader import AppConfig, EmailConfig, LlmConfig, WebConfig
from core.llm.openai_service import OpenAIService
from core.scorer import CandidateScoringService
from core.worker_client import WorkerTriggerClient
from etl.resume import ResumeTextExtractor
from notification.channels import ResendEmailChannel
from notification.rate_limiter import (
    RateLimiter,
    RedisSlidingWindowRateLimiter,
    SlidingWindowRateLimiter,
)
from notification.service import NotificationService


@dataclass
class AppContext:
    """Application context container that holds all wired dependencies.

    This eliminates duplicate wiring code and provides a single source
    of truth for service instantiation. DB access should be obtained
    via candidate_uow() inside each processing step.
    """
    config: AppConfig
    extractor: ResumeTextExtractor
    scoring_service: CandidateScoringService
    notification_service: NotificationService
    worker_client: Optional[WorkerTriggerClient] = None
    ai_service: Optional[OpenAIService] = None

    @classmethod
    def build(cls, config: AppConfig) -> "AppContext":
        """Build an AppContext from config.

        Args:
            config: Loaded application configuration

        Returns:
            Fully wired AppContext instance (no DB session attached)
        """
        ai_service = cls._build_ai_service(config.llm)

        return cls(
            config=config,
            extractor=ResumeTextExtractor(timeout=config.worker.resume_fetch_timeout_seconds),
            scoring_service=CandidateScoringService(ai_service, config.llm),
            notification_service=cls._build_notification_service(config.email),
            worker_client=cls._build_worker_client(config.web),
            ai_service=ai_service,
        )

    @staticmethod
    def _build_ai_service(llm_config: LlmConfig) -> Optional[OpenAIService]:
        """Build OpenAI service, or None when no API key is configured."""
        if not llm_config.api_key:
            return None

        model_config = {
            'model': llm_config.model,
            'temperature': llm_config.temperature,
            'max_tokens': llm_config.max_tokens,
        }

        return OpenAIService(
            api_key=llm_config.api_key,
            base_url=llm_config.base_url,
            model_config=model_config,
        )

    @staticmethod
    def _build_rate_limiter(email_config: EmailConfig) -> RateLimiter:
        if email_config.rate_limit_redis_url:
            return RedisSlidingWindowRateLimiter(
                redis_url=email_config.rate_limit_redis_url,
                max_requests=email_config.rate_limit_per_second,
                window_seconds=1.0,
            )
        return SlidingWindowRateLimiter(
            max_requests=email_config.rate_limit_per_second,
            window_seconds=1.0,
        )

    @classmethod
    def _build_notification_service(cls, email_config: EmailConfig) -> NotificationService:
        """Build the email dispatcher. Without an API key it is built disabled."""
        channel = ResendEmailChannel(email_config.api_key) if email_config.api_key else None
        return NotificationService(
            channel=channel,
            rate_limiter=cls._build_rate_limiter(email_config),
            from_email=email_config.from_email,
            app_url=email_config.app_url,
        )

    @staticmethod
    def _build_worker_client(web_config: WebConfig) -> WorkerTriggerClient:
        """Client the application side uses to trigger this worker. Logs and no-ops when unconfigured."""
        return WorkerTriggerClient(
            base_url=web_config.worker_url,
            secret=web_config.worker_secret,
            timeout=web_config.trigger_timeout_seconds,
        )
