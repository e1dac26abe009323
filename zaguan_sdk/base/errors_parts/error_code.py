"""
Normalized SDK error codes (taxonomy).

Defines the `ErrorCode` enumeration naming each error kind the SDK can raise.
Values are lowercase snake_case and are considered a stable public contract for
logging and analytics.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated error kinds, one per exception class."""

    CONNECTION = "connection"
    AUTHENTICATION = "authentication"
    INSUFFICIENT_CREDITS = "insufficient_credits"
    RATE_LIMIT = "rate_limit"
    BAND_ACCESS_DENIED = "band_access_denied"
    API = "api"
    CLIENT = "client"


__all__ = ["ErrorCode"]
