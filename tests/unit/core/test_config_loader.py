import pytest
from pydantic import ValidationError

from core.config_loader import AppConfig, WorkerConfig, load_config


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (
        "DATABASE_URL", "POLL_INTERVAL_MS", "BATCH_SIZE", "OPENAI_API_KEY",
        "RESEND_API_KEY", "WORKER_SECRET", "PORT", "REDIS_URL",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    config = AppConfig()
    assert config.worker.poll_interval_ms == 30000
    assert config.worker.batch_size == 5
    assert config.llm.model == "gpt-4o-mini"
    assert config.llm.api_key is None
    assert config.email.rate_limit_per_second == 2
    assert config.web.port == 3001


def test_loads_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "worker:\n"
        "  batch_size: 10\n"
        "llm:\n"
        "  model: gpt-4o\n"
        "  temperature: 0.1\n"
    )
    config = load_config(str(path))
    assert config.worker.batch_size == 10
    assert config.worker.poll_interval_ms == 30000
    assert config.llm.model == "gpt-4o"
    assert config.llm.temperature == 0.1


def test_empty_yaml_gives_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("")
    assert load_config(str(path)).worker.batch_size == 5


def test_env_overrides_yaml(tmp_path, monkeypatch):
    path = tmp_path / "config.yaml"
    path.write_text("worker:\n  batch_size: 10\nweb:\n  port: 8000\n")
    monkeypatch.setenv("BATCH_SIZE", "3")
    monkeypatch.setenv("POLL_INTERVAL_MS", "1000")
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("WORKER_SECRET", "s3cret")

    config = load_config(str(path))

    assert config.worker.batch_size == 3
    assert config.worker.poll_interval_ms == 1000
    assert config.llm.api_key == "sk-test"
    assert config.web.worker_secret == "s3cret"
    assert config.web.port == 8000


def test_empty_env_value_is_ignored(tmp_path, monkeypatch):
    path = tmp_path / "config.yaml"
    path.write_text("llm:\n  api_key: from-yaml\n")
    monkeypatch.setenv("OPENAI_API_KEY", "")
    assert load_config(str(path)).llm.api_key == "from-yaml"


def test_batch_size_must_be_positive():
    with pytest.raises(ValidationError):
        WorkerConfig(batch_size=0)
