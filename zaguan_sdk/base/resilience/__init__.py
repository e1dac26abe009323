"""Resilience policies (retry/backoff) for the request layer."""

from .retry import (
    DEFAULT_RETRY_CONFIG,
    RetryConfig,
    RetryDecision,
    RetryState,
    compute_backoff_ms,
    should_retry,
)

__all__ = [
    "DEFAULT_RETRY_CONFIG",
    "RetryConfig",
    "RetryDecision",
    "RetryState",
    "compute_backoff_ms",
    "should_retry",
]
