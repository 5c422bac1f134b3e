"""Retry loop, error classification and backoff."""

from .backoff import exponential_backoff, exponential_wait
from .classifier import as_http_error, is_retryable, iter_causes
from .retry import (
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_MAX_DELAY,
    DEFAULT_MIN_DELAY,
    RetryPolicy,
    retry,
    with_retry,
)

__all__ = [
    "DEFAULT_MAX_ATTEMPTS",
    "DEFAULT_MAX_DELAY",
    "DEFAULT_MIN_DELAY",
    "RetryPolicy",
    "as_http_error",
    "exponential_backoff",
    "exponential_wait",
    "is_retryable",
    "iter_causes",
    "retry",
    "with_retry",
]
