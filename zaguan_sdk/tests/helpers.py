"""Deterministic fakes for request-layer tests.

Defines a manual clock, a scripted transport and a raw response that counts
``release()`` calls, so tests can drive timeouts, retries and cancellation
without threads or sockets.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from zaguan_sdk.base.cancellation import CancellationToken
from zaguan_sdk.base.request import RequestDescriptor


class FakeTimer:
    def __init__(self, due: float, callback: Callable[[], None]) -> None:
        self.due = due
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeClock:
    """Manual clock: time only moves on ``advance`` (or an uninterrupted ``sleep``).

    ``on_sleep`` runs at the start of every sleep, which is how tests cancel a
    call in the middle of a backoff wait.
    """

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: List[float] = []
        self.timers: List[FakeTimer] = []
        self.on_sleep: Optional[Callable[[float], None]] = None

    def monotonic(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds
        for timer in list(self.timers):
            if not timer.cancelled and not timer.fired and timer.due <= self.now:
                timer.fired = True
                timer.callback()

    def sleep(self, seconds: float, token: Optional[CancellationToken] = None) -> bool:
        self.sleeps.append(seconds)
        if self.on_sleep is not None:
            self.on_sleep(seconds)
        if token is not None and token.cancelled:
            return False
        self.advance(seconds)
        return True

    def call_later(self, seconds: float, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(self.now + seconds, callback)
        self.timers.append(timer)
        return timer

    @property
    def armed(self) -> List[FakeTimer]:
        return [t for t in self.timers if not t.cancelled and not t.fired]


class FakeResponse:
    """Scripted raw response.

    ``chunks`` items are bytes (yielded), exceptions (raised on read) or
    zero-argument callables (run between reads, e.g. to advance the clock).
    Reading after ``release()`` raises, like a closed socket.
    """

    def __init__(
        self,
        status_code: int = 200,
        body: bytes | str = b"",
        *,
        chunks: Optional[List[Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        reason_phrase: str = "",
    ) -> None:
        if isinstance(body, str):
            body = body.encode("utf-8")
        self.status_code = status_code
        self.reason_phrase = reason_phrase
        self.headers = dict(headers or {})
        self._chunks = list(chunks) if chunks is not None else [body]
        self.release_count = 0
        self.reads = 0

    @classmethod
    def json(cls, payload: Any, status_code: int = 200, **kwargs: Any) -> "FakeResponse":
        return cls(status_code, json.dumps(payload), **kwargs)

    def _payload(self) -> bytes:
        return b"".join(c for c in self._chunks if isinstance(c, bytes))

    def text(self) -> str:
        return self._payload().decode("utf-8")

    def content(self) -> bytes:
        return self._payload()

    def iter_bytes(self):
        for item in self._chunks:
            if self.release_count:
                raise RuntimeError("stream closed")
            if callable(item):
                item()
                continue
            if isinstance(item, BaseException):
                raise item
            self.reads += 1
            yield item

    def release(self) -> None:
        self.release_count += 1


@dataclass
class SentRequest:
    descriptor: RequestDescriptor
    token: CancellationToken
    stream: bool
    timeout: Optional[float]


class FakeTransport:
    """Transport returning queued responses in order.

    Queue items are responses, exceptions (raised from ``send``) or callables
    ``(descriptor, token) -> response`` for per-call behavior.
    """

    def __init__(self, *responses: Any) -> None:
        self._queue = list(responses)
        self.calls: List[SentRequest] = []
        self.closed = False

    def send(self, descriptor, token, *, stream, timeout=None):
        self.calls.append(SentRequest(descriptor, token, stream, timeout))
        if not self._queue:
            raise AssertionError("unexpected extra request")
        item = self._queue.pop(0)
        if callable(item) and not isinstance(item, FakeResponse):
            item = item(descriptor, token)
        if isinstance(item, BaseException):
            raise item
        return item

    def close(self) -> None:
        self.closed = True


def sse(*payloads: Any, done: bool = True) -> bytes:
    """Render ``data:`` lines for each payload, optionally ending with ``[DONE]``."""
    lines = [f"data: {json.dumps(p)}\n\n" for p in payloads]
    if done:
        lines.append("data: [DONE]\n\n")
    return "".join(lines).encode("utf-8")


def logged_events(records) -> List[Dict[str, Any]]:
    """Decode the JSON payloads written by ``log_event``."""
    out = []
    for record in records:
        try:
            payload = json.loads(record.getMessage())
        except ValueError:
            continue
        if isinstance(payload, dict):
            out.append(payload)
    return out


__all__ = ["FakeClock", "FakeTimer", "FakeResponse", "FakeTransport", "SentRequest", "sse", "logged_events"]
