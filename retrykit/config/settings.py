"""Environment-driven retry settings."""

from __future__ import annotations

from typing import Any, Callable, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings

from retrykit.core.retry import (
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_MAX_DELAY,
    DEFAULT_MIN_DELAY,
    RetryPolicy,
)


class RetrySettings(BaseSettings):
    """Retry defaults loaded from ``RETRY_*`` environment variables."""

    max_attempts: int = Field(DEFAULT_MAX_ATTEMPTS, ge=1)
    min_delay: float = Field(DEFAULT_MIN_DELAY, gt=0)
    max_delay: float = Field(DEFAULT_MAX_DELAY, gt=0)
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, v: str) -> str:
        v = v.upper()
        if v not in ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"):
            raise ValueError("log_level must be a standard logging level name")
        return v

    @field_validator("log_format")
    @classmethod
    def _validate_log_format(cls, v: str) -> str:
        v = v.lower()
        if v not in ("json", "console"):
            raise ValueError("log_format must be 'json' or 'console'")
        return v

    @model_validator(mode="after")
    def _validate_delays(self) -> "RetrySettings":
        if self.max_delay < self.min_delay:
            raise ValueError("max_delay must be greater than or equal to min_delay")
        return self

    def to_policy(
        self,
        logger: Optional[Any] = None,
        should_retry: Optional[Callable[[BaseException], bool]] = None,
    ) -> RetryPolicy:
        return RetryPolicy(
            max_attempts=self.max_attempts,
            min_delay=self.min_delay,
            max_delay=self.max_delay,
            should_retry=should_retry,
            logger=logger,
        )

    class Config:
        env_prefix = "RETRY_"
        env_file = ".env"
        case_sensitive = False
