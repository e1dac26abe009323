"""Retry policy for gateway requests.

The policy is a pure decision function: given the attempt number, the
configuration and the error of the failed attempt it answers whether to
re-issue the request and after how long. It owns no clock and adds no jitter;
the request layer performs the wait.

Rules
-----
- Only idempotent requests are eligible. A chat completion may already have
  produced billed provider-side work, so POSTs are never retried unless the
  caller opts in per call.
- Cancellations (timeout or caller token) are surfaced immediately.
- Transport failures (no status code) are retried under the attempt ceiling.
- API errors are retried only when their status is in the allow-list.
- Backoff for attempt ``n`` (0-indexed) is
  ``min(max_delay_ms, initial_delay_ms * backoff_multiplier ** n)``; a 429 with
  ``Retry-After`` uses that value instead.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..errors import APIError, ConnectionError, RateLimitError

DEFAULT_RETRYABLE_STATUS_CODES: tuple[int, ...] = (408, 429, 500, 502, 503, 504)


@dataclass(frozen=True)
class RetryConfig:
    max_retries: int = 0
    initial_delay_ms: int = 1000
    max_delay_ms: int = 10000
    backoff_multiplier: float = 2.0
    retryable_status_codes: tuple[int, ...] = DEFAULT_RETRYABLE_STATUS_CODES

    @classmethod
    def from_mapping(cls, values: Optional[Mapping[str, Any]]) -> "RetryConfig":
        """Build a config from loosely-typed settings (config file or env).

        Unknown keys are ignored; missing keys keep their defaults.
        """
        if not values:
            return cls()
        kwargs: dict[str, Any] = {}
        for name, cast in (
            ("max_retries", int),
            ("initial_delay_ms", int),
            ("max_delay_ms", int),
            ("backoff_multiplier", float),
        ):
            if values.get(name) is not None:
                kwargs[name] = cast(values[name])
        codes = values.get("retryable_status_codes")
        if codes is not None:
            kwargs["retryable_status_codes"] = tuple(int(c) for c in codes)
        return cls(**kwargs)


DEFAULT_RETRY_CONFIG = RetryConfig()


@dataclass(frozen=True)
class RetryDecision:
    retry: bool
    delay_ms: Optional[int] = None


NO_RETRY = RetryDecision(retry=False)


@dataclass
class RetryState:
    """Progress of one logical call across its attempts."""

    attempt: int = 0
    elapsed_delay_ms: int = 0
    last_error: Optional[BaseException] = None

    def record(self, error: BaseException, delay_ms: int) -> None:
        self.last_error = error
        self.elapsed_delay_ms += delay_ms
        self.attempt += 1


def compute_backoff_ms(attempt: int, config: RetryConfig) -> int:
    """Exponential backoff for 0-indexed ``attempt``, capped at ``max_delay_ms``."""
    raw = config.initial_delay_ms * (config.backoff_multiplier ** attempt)
    return int(min(config.max_delay_ms, raw))


def should_retry(
    attempt: int,
    config: RetryConfig,
    error: BaseException,
    *,
    idempotent: bool,
) -> RetryDecision:
    """Decide whether the failed ``attempt`` (0-indexed) should be re-issued."""
    if not idempotent or attempt >= config.max_retries:
        return NO_RETRY
    if isinstance(error, ConnectionError):
        if error.cancelled:
            return NO_RETRY
        return RetryDecision(retry=True, delay_ms=compute_backoff_ms(attempt, config))
    if isinstance(error, APIError):
        if error.status_code not in config.retryable_status_codes:
            return NO_RETRY
        if isinstance(error, RateLimitError) and error.retry_after is not None:
            return RetryDecision(retry=True, delay_ms=error.retry_after * 1000)
        return RetryDecision(retry=True, delay_ms=compute_backoff_ms(attempt, config))
    return NO_RETRY


__all__ = [
    "RetryConfig",
    "RetryDecision",
    "RetryState",
    "DEFAULT_RETRY_CONFIG",
    "DEFAULT_RETRYABLE_STATUS_CODES",
    "compute_backoff_ms",
    "should_retry",
]
