import json

import pytest
import structlog

from retrykit.config import RetrySettings
from retrykit.monitoring import configure_from_settings, configure_logging, get_logger


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


def test_json_output(capsys):
    configure_logging(level="INFO", fmt="json")
    get_logger("retrykit.test").info("retry_succeeded", operation="sync", attempt=2)

    line = capsys.readouterr().out.strip()
    record = json.loads(line)
    assert record["event"] == "retry_succeeded"
    assert record["operation"] == "sync"
    assert record["attempt"] == 2
    assert record["level"] == "info"
    assert "timestamp" in record


def test_level_filters_events(capsys):
    configure_logging(level="WARNING", fmt="json")
    log = get_logger()
    log.info("retry_succeeded", operation="sync", attempt=2)
    log.warning("retry_aborted_non_retriable", operation="sync", attempt=1)

    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 1
    assert json.loads(lines[0])["event"] == "retry_aborted_non_retriable"


def test_console_output(capsys):
    configure_from_settings(RetrySettings(log_format="console"))
    get_logger().error("retry_will_retry", operation="push", attempt=1)

    assert "retry_will_retry" in capsys.readouterr().out
