"""
Error classification: turn a failed HTTP exchange into one SDK error value.

Two entry points cover the two ways a call can fail:

- :func:`classify` for a non-2xx response (status, headers, body text).
- :func:`classify_transport_failure` for an exception raised before any
  response existed (DNS, connect refused, connection reset).

Both are pure functions with no I/O or retained state and never raise.
"""
from __future__ import annotations

import math
from http import HTTPStatus
from typing import Any, Mapping, Optional

from .api_error import (
    APIError,
    AuthenticationError,
    BandAccessDeniedError,
    GenericAPIError,
    InsufficientCreditsError,
    RateLimitError,
)
from .connection_error import ConnectionError
from .error_body import ErrorBody, parse_error_body

REQUEST_ID_HEADER = "X-Request-Id"
RETRY_AFTER_HEADER = "Retry-After"
BAND_ACCESS_DENIED_TYPE = "band_access_denied"


def _header(headers: Any, name: str) -> Optional[str]:
    """Case-insensitive header lookup over ``httpx.Headers`` or a plain mapping."""
    if headers is None:
        return None
    value = headers.get(name)
    if value is None and isinstance(headers, Mapping):
        lowered = name.lower()
        for key, candidate in headers.items():
            if str(key).lower() == lowered:
                return candidate
    return value


def parse_retry_after(value: Optional[str]) -> Optional[int]:
    """Return ``Retry-After`` as whole seconds.

    Decimal values are truncated (``"5.9"`` -> 5). HTTP-dates, negative and
    non-finite values yield ``None``.
    """
    if value is None:
        return None
    try:
        seconds = float(str(value).strip())
    except ValueError:
        return None
    if not math.isfinite(seconds) or seconds < 0:
        return None
    return int(seconds)


def _generic_message(status_code: int, status_text: Optional[str]) -> str:
    if not status_text:
        try:
            status_text = HTTPStatus(status_code).phrase
        except ValueError:
            status_text = ""
    return f"HTTP {status_code}: {status_text}".rstrip()


def classify(
    status_code: int,
    headers: Any,
    body_text: Optional[str] = None,
    *,
    status_text: Optional[str] = None,
) -> APIError:
    """Classify a non-2xx response into an :class:`APIError` subclass.

    Precedence for the message: ``error.message`` from the body, else
    ``"HTTP <status>: <status text>"``. The 403 branch checks the band marker
    first and only then falls back to a generic error.
    """
    body = parse_error_body(body_text) or ErrorBody()
    detail = body.error
    message = body.message or _generic_message(status_code, status_text)
    correlation_id = _header(headers, REQUEST_ID_HEADER)

    if status_code == 401:
        return AuthenticationError(message, status_code=status_code, correlation_id=correlation_id)
    if status_code == 402:
        return InsufficientCreditsError(
            message,
            status_code=status_code,
            correlation_id=correlation_id,
            credits_required=detail.credits_required if detail else None,
            credits_remaining=detail.credits_remaining if detail else None,
            reset_date=detail.reset_date if detail else None,
        )
    if status_code == 403:
        if body.error_type == BAND_ACCESS_DENIED_TYPE:
            return BandAccessDeniedError(
                message,
                status_code=status_code,
                correlation_id=correlation_id,
                band=detail.band if detail else None,
                required_tier=detail.required_tier if detail else None,
                current_tier=detail.current_tier if detail else None,
            )
        return GenericAPIError(message, status_code=status_code, correlation_id=correlation_id)
    if status_code == 429:
        return RateLimitError(
            message,
            status_code=status_code,
            correlation_id=correlation_id,
            retry_after=parse_retry_after(_header(headers, RETRY_AFTER_HEADER)),
        )
    return GenericAPIError(message, status_code=status_code, correlation_id=correlation_id)


def classify_transport_failure(exc: BaseException, correlation_id: Optional[str] = None) -> ConnectionError:
    """Wrap an exception raised before any response existed.

    Already-classified ``ConnectionError`` values pass through unchanged.
    """
    if isinstance(exc, ConnectionError):
        return exc
    detail = str(exc) or type(exc).__name__
    return ConnectionError(f"Network error: {detail}", correlation_id=correlation_id)


__all__ = [
    "classify",
    "classify_transport_failure",
    "parse_retry_after",
    "REQUEST_ID_HEADER",
    "RETRY_AFTER_HEADER",
    "BAND_ACCESS_DENIED_TYPE",
]
