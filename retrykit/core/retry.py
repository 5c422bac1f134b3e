"""Async retry loop built on tenacity."""

from __future__ import annotations

import asyncio
import dataclasses
import functools
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    RetryError,
    retry_if_exception,
    stop_after_attempt,
)

from retrykit.core.backoff import exponential_backoff
from retrykit.core.classifier import is_retryable
from retrykit.exceptions import RetryFailure

T = TypeVar("T")

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_MIN_DELAY = 0.1
DEFAULT_MAX_DELAY = 5.0


@dataclass(frozen=True)
class RetryPolicy:
    """Parameters for a single :func:`with_retry` invocation.

    Zero or unset fields fall back to the module defaults when the policy is
    used. ``logger`` receives the retry events; leave it ``None`` to stay
    silent. Delays are in seconds.
    """

    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    min_delay: float = DEFAULT_MIN_DELAY
    max_delay: float = DEFAULT_MAX_DELAY
    should_retry: Optional[Callable[[BaseException], bool]] = None
    logger: Optional[Any] = None
    backoff: Optional[Callable[[int, float, float], float]] = None

    def __post_init__(self) -> None:
        if self.max_attempts is not None and self.max_attempts < 0:
            raise ValueError("max_attempts must not be negative")

    def with_defaults(self) -> "RetryPolicy":
        return dataclasses.replace(
            self,
            max_attempts=self.max_attempts or DEFAULT_MAX_ATTEMPTS,
            min_delay=self.min_delay if self.min_delay and self.min_delay > 0 else DEFAULT_MIN_DELAY,
            max_delay=self.max_delay if self.max_delay and self.max_delay > 0 else DEFAULT_MAX_DELAY,
            should_retry=self.should_retry or is_retryable,
            backoff=self.backoff or exponential_backoff,
        )


async def with_retry(
    policy: Optional[RetryPolicy],
    operation_name: str,
    operation: Callable[[], Awaitable[T]],
) -> T:
    """Await ``operation`` until it succeeds or retrying stops making sense.

    ``operation`` is called again after each retryable failure, so it must be
    idempotent; nothing is rolled back between attempts.

    Raises :class:`RetryFailure` (chained to the last error) when attempts
    run out or ``policy.should_retry`` rejects an error. Cancelling the
    awaiting task, including while it waits between attempts, raises
    :class:`asyncio.CancelledError` unwrapped and stops retrying.
    """
    policy = (policy or RetryPolicy()).with_defaults()
    log = policy.logger
    attempts_made = 0

    async def attempt() -> T:
        nonlocal attempts_made
        attempts_made += 1
        return await operation()

    def should_retry(exc: BaseException) -> bool:
        # BaseException-only outcomes (cancellation, interpreter exit) are re-raised as is
        return isinstance(exc, Exception) and policy.should_retry(exc)

    def wait(retry_state: RetryCallState) -> float:
        return policy.backoff(retry_state.attempt_number, policy.min_delay, policy.max_delay)

    def will_retry(retry_state: RetryCallState) -> None:
        if log is None:
            return
        error = retry_state.outcome.exception()
        log.error(
            "retry_will_retry",
            operation=operation_name,
            attempt=retry_state.attempt_number,
            max_attempts=policy.max_attempts,
            error=str(error),
            error_type=type(error).__name__,
        )

    retrying = AsyncRetrying(
        stop=stop_after_attempt(policy.max_attempts),
        wait=wait,
        retry=retry_if_exception(should_retry),
        after=will_retry,
        sleep=asyncio.sleep,
    )

    try:
        result = await retrying(attempt)
    except RetryError as e:
        last_error = e.last_attempt.exception()
    except Exception as e:
        last_error = e
        if log is not None:
            log.warning(
                "retry_aborted_non_retriable",
                operation=operation_name,
                attempt=attempts_made,
                error=str(e),
                error_type=type(e).__name__,
            )
    else:
        if attempts_made > 1 and log is not None:
            log.info("retry_succeeded", operation=operation_name, attempt=attempts_made)
        return result

    raise RetryFailure(operation_name, attempts_made, last_error) from last_error


def retry(
    operation_name: Optional[str] = None,
    policy: Optional[RetryPolicy] = None,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """Decorate an ``async def`` so each call runs through :func:`with_retry`."""

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        name = operation_name or func.__qualname__

        @functools.wraps(func)
        async def wrapper(*args, **kwargs) -> T:
            return await with_retry(policy, name, lambda: func(*args, **kwargs))

        return wrapper

    return decorator
