"""Request construction primitives.

A :class:`RequestDescriptor` is the immutable description of one outbound
call: everything the transport needs plus the per-call cancellation and retry
settings. It is built once per logical call and reused, unchanged, for every
retry attempt, so all attempts share one correlation id.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from .cancellation import CancellationToken
from .resilience.retry import RetryConfig

REQUEST_ID_HEADER = "X-Request-Id"
IDEMPOTENT_METHODS = frozenset({"GET"})


@dataclass(frozen=True)
class RequestOptions:
    """Per-call options accepted by every client method.

    Attributes:
        request_id: Correlation id to send as ``X-Request-Id``; generated if omitted.
        timeout_ms: Overrides the client default timeout for this call.
        headers: Extra headers, applied last.
        cancellation_token: Fires to abort the call at any point.
        idempotent: Declares the call safe to retry. ``None`` means GET-only.
        retry: Overrides the client retry configuration for this call.
    """

    request_id: Optional[str] = None
    timeout_ms: Optional[int] = None
    headers: Optional[Mapping[str, str]] = None
    cancellation_token: Optional[CancellationToken] = None
    idempotent: Optional[bool] = None
    retry: Optional[RetryConfig] = None


@dataclass(frozen=True)
class Multipart:
    """Form upload body; the transport chooses the boundary and content type.

    ``files`` follows the httpx convention: ``{"file": (name, bytes_or_fileobj, mime)}``.
    """

    files: Mapping[str, Any] = field(default_factory=dict)
    data: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class RequestDescriptor:
    method: str
    url: str
    headers: Mapping[str, str]
    correlation_id: str
    content: Optional[bytes] = None
    multipart: Optional[Multipart] = None
    timeout_ms: Optional[int] = None
    cancellation_token: Optional[CancellationToken] = None
    idempotent: Optional[bool] = None

    @property
    def is_idempotent(self) -> bool:
        if self.idempotent is not None:
            return self.idempotent
        return self.method.upper() in IDEMPOTENT_METHODS


def new_correlation_id() -> str:
    return str(uuid.uuid4())


def build_headers(
    api_key: str,
    correlation_id: str,
    extra: Optional[Mapping[str, str]] = None,
    *,
    multipart: bool = False,
) -> Dict[str, str]:
    """Build the standard header set; caller extras win over defaults."""
    headers = {"Authorization": f"Bearer {api_key}"}
    if not multipart:
        headers["Content-Type"] = "application/json"
    headers[REQUEST_ID_HEADER] = correlation_id
    if extra:
        headers.update(extra)
    return headers


__all__ = [
    "RequestOptions",
    "Multipart",
    "RequestDescriptor",
    "new_correlation_id",
    "build_headers",
    "REQUEST_ID_HEADER",
]
