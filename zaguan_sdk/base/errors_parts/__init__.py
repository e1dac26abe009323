"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `zaguan_sdk.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .zaguan_error import ZaguanError
from .connection_error import ConnectionError
from .api_error import (
    APIError,
    AuthenticationError,
    BandAccessDeniedError,
    GenericAPIError,
    InsufficientCreditsError,
    RateLimitError,
)
from .error_body import ErrorBody, ErrorDetail, parse_error_body
from .classification import classify, classify_transport_failure, parse_retry_after

__all__ = [
    "ErrorCode",
    "ZaguanError",
    "ConnectionError",
    "APIError",
    "AuthenticationError",
    "BandAccessDeniedError",
    "GenericAPIError",
    "InsufficientCreditsError",
    "RateLimitError",
    "ErrorBody",
    "ErrorDetail",
    "parse_error_body",
    "classify",
    "classify_transport_failure",
    "parse_retry_after",
]
