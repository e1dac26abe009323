"""
Transport-agnostic interfaces (Protocols) used by the request layer.

The orchestrator depends only on these Protocols; concrete transports live in
``zaguan_sdk.base.http`` and test fakes satisfy them structurally.

Contract
--------
``Transport.send(descriptor, token, *, stream, timeout)`` performs one HTTP
exchange and returns once the status line and headers are available. The body
is left unread: callers either materialize it (``text()`` / ``content()``) or
pull it chunk by chunk (``iter_bytes()``), and must call ``release()`` exactly
once when done. ``release()`` may be called from another thread to unblock a
pending read.
"""

from __future__ import annotations

from typing import Any, Iterator, Optional, Protocol

from .cancellation import CancellationToken
from .request import RequestDescriptor


class RawResponse(Protocol):  # pragma: no cover - structural protocol
    status_code: int
    reason_phrase: str
    headers: Any

    def text(self) -> str: ...

    def content(self) -> bytes: ...

    def iter_bytes(self) -> Iterator[bytes]: ...

    def release(self) -> None: ...


class Transport(Protocol):  # pragma: no cover - structural protocol
    def send(
        self,
        descriptor: RequestDescriptor,
        token: CancellationToken,
        *,
        stream: bool,
        timeout: Optional[float] = None,
    ) -> RawResponse: ...

    def close(self) -> None: ...


__all__ = ["RawResponse", "Transport"]
