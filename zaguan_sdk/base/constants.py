"""Base shared constants for the SDK.

Central location to avoid scattering magic strings and default numbers.

Security
--------
This module contains only generic defaults. There are no credentials or
tokens embedded.
"""
from __future__ import annotations

# Pool-level httpx timeout (seconds); ``None`` leaves pooled clients unbounded.
# Every request passes its own timeout derived from the call settings.
DEFAULT_HTTP_TIMEOUT = None

# Path prefix of every gateway endpoint.
API_PREFIX = "/v1"

USER_AGENT = "zaguan-sdk-python"

__all__ = [
    "DEFAULT_HTTP_TIMEOUT",
    "API_PREFIX",
    "USER_AGENT",
]
