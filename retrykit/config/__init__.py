"""Settings for the retry executor."""

from __future__ import annotations

from .settings import RetrySettings


def get_settings() -> RetrySettings:
    """Return settings read from the current environment."""

    return RetrySettings()


__all__ = ["RetrySettings", "get_settings"]
