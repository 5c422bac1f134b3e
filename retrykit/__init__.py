"""Async retries with exponential backoff and transient-error classification."""

from .core import (
    RetryPolicy,
    exponential_backoff,
    is_retryable,
    retry,
    with_retry,
)
from .exceptions import HTTPError, HTTPLikeError, RetryFailure

__version__ = "0.1.0"

__all__ = [
    "HTTPError",
    "HTTPLikeError",
    "RetryFailure",
    "RetryPolicy",
    "exponential_backoff",
    "is_retryable",
    "retry",
    "with_retry",
]
