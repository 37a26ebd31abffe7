from unittest.mock import patch

from core.app_context import AppContext
from core.config_loader import AppConfig, EmailConfig, LlmConfig, WebConfig
from notification.rate_limiter import RedisSlidingWindowRateLimiter, SlidingWindowRateLimiter


def test_without_keys_scoring_and_email_are_disabled():
    ctx = AppContext.build(AppConfig())

    assert ctx.ai_service is None
    assert ctx.scoring_service.llm is None
    assert ctx.notification_service.enabled is False
    assert isinstance(ctx.notification_service.rate_limiter, SlidingWindowRateLimiter)
    assert ctx.notification_service.rate_limiter.max_requests == 2


@patch("core.llm.openai_service.OpenAI")
def test_with_keys_everything_is_wired(openai_cls):
    config = AppConfig(
        llm=LlmConfig(api_key="sk-test", model="gpt-4o", max_tokens=300),
        email=EmailConfig(api_key="re_test", rate_limit_per_second=5),
    )

    ctx = AppContext.build(config)

    assert ctx.scoring_service.llm is ctx.ai_service
    assert ctx.ai_service.model == "gpt-4o"
    assert ctx.ai_service.max_tokens == 300
    assert ctx.notification_service.enabled is True
    assert ctx.notification_service.rate_limiter.max_requests == 5


@patch("notification.rate_limiter.Redis")
def test_redis_url_selects_shared_limiter(redis_cls):
    config = AppConfig(email=EmailConfig(rate_limit_redis_url="redis://cache:6379/1"))
    ctx = AppContext.build(config)
    assert isinstance(ctx.notification_service.rate_limiter, RedisSlidingWindowRateLimiter)
    redis_cls.from_url.assert_called_once_with("redis://cache:6379/1")


def test_worker_client_is_built_from_web_config():
    config = AppConfig(web=WebConfig(
        worker_url="http://worker:3001", worker_secret="s3cret", trigger_timeout_seconds=5,
    ))

    client = AppContext.build(config).worker_client

    assert client.configured is True
    assert client.base_url == "http://worker:3001"
    assert client.secret == "s3cret"
    assert client.timeout == 5


def test_worker_client_unconfigured_by_default():
    assert AppContext.build(AppConfig()).worker_client.configured is False
