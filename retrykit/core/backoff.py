"""Exponential delay calculation between retry attempts."""

from __future__ import annotations

from types import SimpleNamespace

from tenacity import wait_exponential


def exponential_wait(min_delay: float, max_delay: float) -> wait_exponential:
    """Return the tenacity wait strategy doubling from ``min_delay`` up to ``max_delay``."""
    return wait_exponential(multiplier=min_delay, min=min_delay, max=max_delay)


def exponential_backoff(attempt: int, min_delay: float, max_delay: float) -> float:
    """Return the delay in seconds to wait after ``attempt`` failed.

    The delay is ``min_delay * 2 ** (attempt - 1)`` capped at ``max_delay``.
    A ceiling below the floor collapses to ``min_delay``.
    """
    # wait strategies only read attempt_number from the retry state
    return exponential_wait(min_delay, max_delay)(SimpleNamespace(attempt_number=max(1, attempt)))
