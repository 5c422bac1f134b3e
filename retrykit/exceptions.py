"""Exceptions raised by or understood by the retry executor."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class HTTPLikeError(Protocol):
    """Anything exposing a status code and the two transient-status predicates."""

    status_code: int

    def is_timeout(self) -> bool: ...

    def is_temporary(self) -> bool: ...


class HTTPError(Exception):
    """HTTP status failure reported by a remote service."""

    def __init__(self, status_code: int, message: str = "") -> None:
        super().__init__(status_code, message)
        self.status_code = int(status_code)
        self.message = message

    def __str__(self) -> str:
        return f"HTTP {self.status_code}: {self.message}"

    def is_timeout(self) -> bool:
        # 408 Request Timeout
        return self.status_code == 408

    def is_temporary(self) -> bool:
        return self.status_code >= 500 or self.status_code == 429


class RetryFailure(Exception):
    """Raised once every attempt is spent or a retry was refused.

    ``last_error`` is also chained as ``__cause__`` so tracebacks and
    cause-walking code reach the original failure.
    """

    def __init__(self, operation_name: str, attempts_made: int, last_error: BaseException) -> None:
        super().__init__(operation_name, attempts_made, last_error)
        self.operation_name = operation_name
        self.attempts_made = attempts_made
        self.last_error = last_error

    def __str__(self) -> str:
        return (
            f"operation '{self.operation_name}' failed after "
            f"{self.attempts_made} attempts: {self.last_error}"
        )

    def unwrap(self) -> BaseException:
        return self.last_error
