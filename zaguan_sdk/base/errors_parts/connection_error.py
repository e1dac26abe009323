"""
Connection-level error type.

Raised when no usable HTTP response exists: DNS/connect/reset failures,
mid-stream network failures, per-call timeouts and caller cancellation. The
``cancelled`` flag separates the last two from genuine network failures and
``reason`` tells a timeout apart from an explicit cancel.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from .error_code import ErrorCode
from .zaguan_error import ZaguanError


@dataclass(eq=False, kw_only=True)
class ConnectionError(ZaguanError):  # noqa: A001 - deliberate public name
    """Transport failure, timeout or cancellation.

    Attributes:
        cancelled: ``True`` when a timeout or the caller's token aborted the call.
        reason: ``"timeout"`` or ``"cancelled"`` for cancellations, else ``None``.
    """

    code: ClassVar[ErrorCode] = ErrorCode.CONNECTION

    cancelled: bool = False
    reason: Optional[str] = None


__all__ = ["ConnectionError"]
