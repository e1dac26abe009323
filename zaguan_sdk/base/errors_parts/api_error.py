"""
Status-bearing error types produced by response classification.

`APIError` is the common base carrying ``status_code``; each subclass maps to
one server-reported failure mode and adds the fields the gateway sends for it.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional, Union

from .error_code import ErrorCode
from .zaguan_error import ZaguanError


@dataclass(eq=False, kw_only=True)
class APIError(ZaguanError):
    """Any non-2xx response from the gateway."""

    code: ClassVar[ErrorCode] = ErrorCode.API

    status_code: int

    def __str__(self) -> str:  # pragma: no cover - trivial
        base = f"{self.code.value} [{self.status_code}]: {self.message}"
        return f"{base} (request_id={self.correlation_id})" if self.correlation_id else base


@dataclass(eq=False, kw_only=True)
class GenericAPIError(APIError):
    """Non-2xx response with no more specific classification."""


@dataclass(eq=False, kw_only=True)
class AuthenticationError(APIError):
    """401: missing, invalid or revoked API key."""

    code: ClassVar[ErrorCode] = ErrorCode.AUTHENTICATION


@dataclass(eq=False, kw_only=True)
class InsufficientCreditsError(APIError):
    """402: the account cannot pay for the request."""

    code: ClassVar[ErrorCode] = ErrorCode.INSUFFICIENT_CREDITS

    credits_required: Optional[Union[int, float]] = None
    credits_remaining: Optional[Union[int, float]] = None
    reset_date: Optional[str] = None


@dataclass(eq=False, kw_only=True)
class RateLimitError(APIError):
    """429: too many requests; ``retry_after`` is in seconds when provided."""

    code: ClassVar[ErrorCode] = ErrorCode.RATE_LIMIT

    retry_after: Optional[int] = None


@dataclass(eq=False, kw_only=True)
class BandAccessDeniedError(APIError):
    """403 with ``error.type == "band_access_denied"``: model band above the plan."""

    code: ClassVar[ErrorCode] = ErrorCode.BAND_ACCESS_DENIED

    band: Optional[str] = None
    required_tier: Optional[str] = None
    current_tier: Optional[str] = None


__all__ = [
    "APIError",
    "GenericAPIError",
    "AuthenticationError",
    "InsufficientCreditsError",
    "RateLimitError",
    "BandAccessDeniedError",
]
