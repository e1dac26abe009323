"""
Root SDK exception type.

Every error raised by the SDK derives from `ZaguanError`, so callers can catch
one type and still branch on the concrete kind (or on ``code``) without
parsing message text.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Optional

from .error_code import ErrorCode


@dataclass(eq=False)
class ZaguanError(Exception):
    """Base error for the SDK; raised directly for client-side misuse.

    Attributes:
        message: Human-readable error message suitable for logging.
        correlation_id: ``X-Request-Id`` of the request, when known.
    """

    code: ClassVar[ErrorCode] = ErrorCode.CLIENT

    message: str
    correlation_id: Optional[str] = field(default=None, kw_only=True)

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:  # pragma: no cover - trivial
        if self.correlation_id:
            return f"{self.code.value}: {self.message} (request_id={self.correlation_id})"
        return f"{self.code.value}: {self.message}"


__all__ = ["ZaguanError"]
