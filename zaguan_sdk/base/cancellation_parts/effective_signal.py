"""Merged per-call cancellation signal.

An :class:`EffectiveSignal` combines the sources that may abort one request
attempt into a single token handed to the transport:

* a timer armed with the per-call timeout (or the client default),
* the caller-supplied :class:`CancellationToken`,
* the read loop's own ``check()`` calls around every blocking read.

The first source to fire wins and records the cause. The signal never
un-fires, and firing from several threads at once runs downstream callbacks
only once. ``close()`` disarms the timer and detaches from the caller token;
it is safe to call repeatedly and is invoked from ``__exit__``.
"""

from __future__ import annotations

from threading import Lock
from typing import Optional

from ..clock import Clock, SystemClock, TimerHandle
from ..errors_parts.connection_error import ConnectionError
from .cancellation_token import CancellationToken

CAUSE_TIMEOUT = "timeout"
CAUSE_CANCELLED = "cancelled"


class EffectiveSignal:
    """First-signal-wins merge of timeout and caller cancellation."""

    def __init__(
        self,
        *,
        timeout_ms: Optional[int],
        call_token: Optional[CancellationToken],
        clock: Clock,
    ) -> None:
        self._clock = clock
        self._lock = Lock()
        self._cause: Optional[str] = None
        self._closed = False
        self._timeout_ms = timeout_ms
        self._deadline: Optional[float] = None
        self._timer: Optional[TimerHandle] = None
        self._call_token = call_token
        self.token = CancellationToken()
        if call_token is not None:
            call_token.add_callback(self._on_call_cancelled)
        if timeout_ms is not None and not self.token.cancelled:
            self._deadline = clock.monotonic() + timeout_ms / 1000.0
            self._timer = clock.call_later(timeout_ms / 1000.0, self._on_timeout)

    # Sources ----------------------------------------------------------------
    def _on_timeout(self) -> None:
        self._fire(CAUSE_TIMEOUT)

    def _on_call_cancelled(self) -> None:
        self._fire(CAUSE_CANCELLED)

    def expire(self) -> None:
        """Fire as a timeout; used when the transport's own deadline elapsed first."""
        self._fire(CAUSE_TIMEOUT)

    def _fire(self, cause: str) -> None:
        with self._lock:
            if self._cause is not None:
                return
            self._cause = cause
        self.token.cancel(cause)

    # State ------------------------------------------------------------------
    @property
    def cancelled(self) -> bool:  # noqa: D401 - short property
        """Whether any source has fired."""
        return self._cause is not None

    @property
    def cause(self) -> Optional[str]:  # noqa: D401 - short property
        """``"timeout"`` or ``"cancelled"`` once fired, else ``None``."""
        return self._cause

    def remaining_seconds(self) -> Optional[float]:
        """Seconds left before the timer fires; ``None`` when no timer is armed."""
        if self._deadline is None:
            return None
        return max(self._deadline - self._clock.monotonic(), 0.0)

    def error(self, correlation_id: Optional[str] = None) -> ConnectionError:
        """Build the cancellation error for the recorded cause."""
        if self._cause == CAUSE_TIMEOUT:
            message = f"Request timed out after {self._timeout_ms}ms"
        else:
            message = "Request aborted"
        return ConnectionError(
            message,
            correlation_id=correlation_id,
            cancelled=True,
            reason=self._cause or CAUSE_CANCELLED,
        )

    def check(self, correlation_id: Optional[str] = None) -> None:
        """Raise the cancellation error if the signal has fired."""
        if self._cause is not None:
            raise self.error(correlation_id)

    # Lifecycle --------------------------------------------------------------
    def close(self) -> None:
        """Disarm the timer and detach from the caller token (idempotent)."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            timer, self._timer = self._timer, None
        if timer is not None:
            timer.cancel()
        if self._call_token is not None:
            self._call_token.remove_callback(self._on_call_cancelled)

    def __enter__(self) -> "EffectiveSignal":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def derive_signal(
    call_timeout_ms: Optional[int] = None,
    call_token: Optional[CancellationToken] = None,
    client_default_timeout_ms: Optional[int] = None,
    *,
    clock: Optional[Clock] = None,
) -> EffectiveSignal:
    """Combine the per-call timeout, caller token and client default timeout.

    The timer uses ``call_timeout_ms`` when given, else the client default; no
    timer is armed when both are ``None``. Use as a context manager so the timer
    is released on every exit path.
    """
    timeout_ms = call_timeout_ms if call_timeout_ms is not None else client_default_timeout_ms
    return EffectiveSignal(timeout_ms=timeout_ms, call_token=call_token, clock=clock or SystemClock())


__all__ = ["EffectiveSignal", "derive_signal", "CAUSE_TIMEOUT", "CAUSE_CANCELLED"]
