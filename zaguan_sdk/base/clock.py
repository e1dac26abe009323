"""Clock and timer abstraction used by the request layer.

All waiting done by the SDK (per-call timeout timers and retry backoff) goes
through a :class:`Clock` so tests can substitute a deterministic fake instead
of real wall-clock delays.

Key Components
--------------
Clock
    Structural protocol: ``monotonic()``, ``sleep(seconds, token)`` and
    ``call_later(seconds, callback)``.

SystemClock
    Production implementation built on ``time.monotonic`` and
    ``threading.Timer``. ``sleep`` waits on the cancellation token's event so a
    backoff delay is interrupted as soon as the caller cancels.

Failure Modes
-------------
None raised here. ``sleep`` reports an interrupted wait by returning ``False``;
callers translate that into a cancellation error.
"""
from __future__ import annotations

import threading
import time
from typing import Callable, Optional, Protocol

from .cancellation_parts.cancellation_token import CancellationToken


class TimerHandle(Protocol):  # pragma: no cover - structural protocol
    def cancel(self) -> None: ...


class Clock(Protocol):  # pragma: no cover - structural protocol
    def monotonic(self) -> float: ...

    def sleep(self, seconds: float, token: Optional[CancellationToken] = None) -> bool: ...

    def call_later(self, seconds: float, callback: Callable[[], None]) -> TimerHandle: ...


class SystemClock:
    """Wall-clock implementation of :class:`Clock`."""

    def monotonic(self) -> float:
        return time.monotonic()

    def sleep(self, seconds: float, token: Optional[CancellationToken] = None) -> bool:
        """Sleep ``seconds``; return ``False`` if ``token`` fired first."""
        if seconds <= 0:
            return not (token is not None and token.cancelled)
        if token is None:
            time.sleep(seconds)
            return True
        return not token.wait(seconds)

    def call_later(self, seconds: float, callback: Callable[[], None]) -> TimerHandle:
        timer = threading.Timer(max(seconds, 0.0), callback)
        timer.daemon = True
        timer.start()
        return timer


__all__ = ["Clock", "TimerHandle", "SystemClock"]
