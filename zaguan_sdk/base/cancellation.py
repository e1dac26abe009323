"""Cooperative cancellation primitives (public API facade).

Purpose
-------
Expose stable cancellation constructs via the canonical
``zaguan_sdk.base.cancellation`` import path while the concrete
implementations live under ``cancellation_parts`` for organization.

Notes
-----
- ``CancellationToken`` is what callers pass per request to abort it.
- ``derive_signal`` merges a call's timeout and token into one
  ``EffectiveSignal``; the request layer is its only consumer.
- ``CancelledError`` is the low-level error raised by ``raise_if_cancelled``.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken, first_signal_wins
from .cancellation_parts.effective_signal import (
    CAUSE_CANCELLED,
    CAUSE_TIMEOUT,
    EffectiveSignal,
    derive_signal,
)

__all__ = [
    "CancellationToken",
    "CancelledError",
    "EffectiveSignal",
    "derive_signal",
    "first_signal_wins",
    "CAUSE_CANCELLED",
    "CAUSE_TIMEOUT",
]
