"""
SDK Base Package

Transport-independent building blocks of the request layer:
- Cancellation: caller tokens and the merged per-attempt signal
- Errors: taxonomy and the two classification seams
- Resilience: retry configuration and policy
- Streaming: incremental ``data:`` line decoding
- Orchestrator: composes the above around an injected transport

The httpx-backed transport lives in ``base.http`` and is not imported here.
"""

from .cancellation import CancellationToken, CancelledError, EffectiveSignal, derive_signal
from .clock import Clock, SystemClock
from .errors import (
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
from .interfaces import RawResponse, Transport
from .orchestrator import RequestOrchestrator
from .request import Multipart, RequestDescriptor, RequestOptions
from .resilience import RetryConfig
from .streaming import StreamDecoder, reconstruct_message_from_chunks

__all__ = [
    "CancellationToken",
    "CancelledError",
    "EffectiveSignal",
    "derive_signal",
    "Clock",
    "SystemClock",
    "ErrorCode",
    "ZaguanError",
    "ConnectionError",
    "APIError",
    "GenericAPIError",
    "AuthenticationError",
    "InsufficientCreditsError",
    "RateLimitError",
    "BandAccessDeniedError",
    "RawResponse",
    "Transport",
    "RequestOrchestrator",
    "Multipart",
    "RequestDescriptor",
    "RequestOptions",
    "RetryConfig",
    "StreamDecoder",
    "reconstruct_message_from_chunks",
]
