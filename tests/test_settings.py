import pytest
from pydantic import ValidationError

from retrykit.config import RetrySettings, get_settings
from retrykit.core.classifier import is_retryable


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in ("MAX_ATTEMPTS", "MIN_DELAY", "MAX_DELAY", "LOG_LEVEL", "LOG_FORMAT"):
        monkeypatch.delenv(f"RETRY_{name}", raising=False)
    monkeypatch.chdir(tmp_path)


def test_defaults():
    settings = get_settings()
    assert settings.max_attempts == 3
    assert settings.min_delay == 0.1
    assert settings.max_delay == 5.0
    assert settings.log_format == "json"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("RETRY_MAX_ATTEMPTS", "7")
    monkeypatch.setenv("RETRY_MIN_DELAY", "0.5")
    monkeypatch.setenv("RETRY_MAX_DELAY", "12")
    monkeypatch.setenv("RETRY_LOG_FORMAT", "CONSOLE")

    settings = get_settings()
    assert settings.max_attempts == 7
    assert settings.min_delay == 0.5
    assert settings.max_delay == 12.0
    assert settings.log_format == "console"


def test_env_file_is_read(tmp_path):
    (tmp_path / ".env").write_text("RETRY_MAX_ATTEMPTS=4\n", encoding="utf-8")
    assert get_settings().max_attempts == 4


@pytest.mark.parametrize(
    "kwargs",
    [
        {"max_attempts": 0},
        {"min_delay": 0},
        {"min_delay": 2.0, "max_delay": 1.0},
        {"log_format": "xml"},
    ],
)
def test_invalid_values_rejected(kwargs):
    with pytest.raises(ValidationError):
        RetrySettings(**kwargs)


def test_to_policy():
    sink = object()
    policy = RetrySettings(max_attempts=5, min_delay=0.2, max_delay=3.0).to_policy(logger=sink)

    assert policy.max_attempts == 5
    assert policy.min_delay == 0.2
    assert policy.max_delay == 3.0
    assert policy.logger is sink
    assert policy.with_defaults().should_retry is is_retryable


def test_log_level_is_normalised(monkeypatch):
    monkeypatch.setenv("RETRY_LOG_LEVEL", "debug")
    assert get_settings().log_level == "DEBUG"


def test_unknown_log_level_rejected():
    with pytest.raises(ValidationError):
        RetrySettings(log_level="LOUD")
