"""Unified SDK error taxonomy public surface.

This module re-exports the implementations under
``zaguan_sdk.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts import (
    APIError,
    AuthenticationError,
    BandAccessDeniedError,
    ConnectionError,
    ErrorBody,
    ErrorCode,
    ErrorDetail,
    GenericAPIError,
    InsufficientCreditsError,
    RateLimitError,
    ZaguanError,
    classify,
    classify_transport_failure,
    parse_error_body,
    parse_retry_after,
)

__all__ = [
    "ErrorCode",
    "ZaguanError",
    "ConnectionError",
    "APIError",
    "GenericAPIError",
    "AuthenticationError",
    "InsufficientCreditsError",
    "RateLimitError",
    "BandAccessDeniedError",
    "ErrorBody",
    "ErrorDetail",
    "parse_error_body",
    "classify",
    "classify_transport_failure",
    "parse_retry_after",
]
