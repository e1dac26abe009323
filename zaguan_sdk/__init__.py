"""zaguan_sdk package

Python client for Zaguán, an OpenAI-compatible AI gateway.

Public API (re-exported):
    - Client: :class:`ZaguanClient`
    - Per-call options: :class:`RequestOptions`, :class:`CancellationToken`
    - Retry settings: :class:`RetryConfig`
    - Exceptions: :class:`ZaguanError` and its subclasses, :class:`ErrorCode`

Example::

    from zaguan_sdk import ZaguanClient

    with ZaguanClient("https://gateway.example.net", api_key) as client:
        for chunk in client.chat_stream({"model": "openai/gpt-4o", "messages": msgs}):
            ...
"""

from .base.cancellation import CancellationToken
from .base.errors import (
    APIError,
    AuthenticationError,
    BandAccessDeniedError,
    ConnectionError,
    ErrorCode,
    GenericAPIError,
    InsufficientCreditsError,
    RateLimitError,
    ZaguanError,
)
from .base.request import RequestOptions
from .base.resilience import RetryConfig
from .client import ZaguanClient

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ZaguanClient",
    "RequestOptions",
    "CancellationToken",
    "RetryConfig",
    "ErrorCode",
    "ZaguanError",
    "ConnectionError",
    "APIError",
    "GenericAPIError",
    "AuthenticationError",
    "InsufficientCreditsError",
    "RateLimitError",
    "BandAccessDeniedError",
]
