"""Cancellation error type.

Defines the low-level ``CancelledError`` raised by
``CancellationToken.raise_if_cancelled``. The request layer converts it into a
``ConnectionError`` with ``cancelled=True`` before it reaches callers.
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when an operation observes a fired cancellation token."""


__all__ = ["CancelledError"]
