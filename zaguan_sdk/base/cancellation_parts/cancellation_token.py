"""Cooperative cancellation token implementation.

Exposes the ``CancellationToken`` class used by the request layer to abort
in-flight calls. Tokens can be polled (``cancelled`` / ``raise_if_cancelled``),
waited on (``wait``) or observed through callbacks, which is how a blocked
stream read gets released from another thread.
"""

from __future__ import annotations

import threading
from threading import Lock
from typing import Callable, List

from .state import State
from .cancelled_error import CancelledError


class CancellationToken:
    """A cooperative cancellation token with optional cascading semantics.

    Thread-safe. Firing is idempotent: only the first ``cancel`` call records a
    reason and runs the registered callbacks. Child tokens inherit cancellation
    when the parent is cancelled.
    """

    def __init__(self, *, parent: "CancellationToken | None" = None) -> None:
        self._state = State()
        self._lock = Lock()
        self._event = threading.Event()
        self._children: List[CancellationToken] = []
        if parent is not None:
            parent.link_child(self)

    @property
    def cancelled(self) -> bool:  # noqa: D401 - short form
        """Whether cancellation has been requested."""
        return self._state.cancelled

    @property
    def reason(self) -> str | None:  # noqa: D401 - short form
        """Reason string supplied at cancel time (if any)."""
        return self._state.reason

    def cancel(self, reason: str | None = None) -> bool:
        """Request cancellation, run callbacks and cascade to children.

        Returns ``True`` only for the call that actually fired the token.
        """
        with self._lock:
            if self._state.cancelled:
                return False
            self._state.cancelled = True
            self._state.reason = reason
            callbacks = list(self._state.callbacks)
            self._state.callbacks.clear()
            children = list(self._children)
        self._event.set()
        for callback in callbacks:
            callback()
        for child in children:
            child.cancel(reason)
        return True

    def add_callback(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Register ``callback`` to run once on cancellation (returns it).

        If the token already fired the callback runs immediately.
        """
        with self._lock:
            if not self._state.cancelled:
                self._state.callbacks.append(callback)
                return callback
        callback()
        return callback

    def remove_callback(self, callback: Callable[[], None]) -> None:
        """Detach a previously registered callback; unknown callbacks are ignored."""
        with self._lock:
            if callback in self._state.callbacks:
                self._state.callbacks.remove(callback)

    def link_child(self, token: "CancellationToken") -> "CancellationToken":
        """Link a child token so parent cancellation cascades (returns child)."""
        with self._lock:
            self._children.append(token)
            should_cancel = self._state.cancelled
            reason = self._state.reason
        if should_cancel:
            token.cancel(reason)
        return token

    def wait(self, timeout: float | None = None) -> bool:
        """Block up to ``timeout`` seconds; return ``True`` if cancelled."""
        return self._event.wait(timeout)

    def raise_if_cancelled(self) -> None:
        """Raise ``CancelledError`` if token is cancelled."""
        if self._state.cancelled:
            raise CancelledError(self._state.reason or "operation cancelled")

    def child(self) -> "CancellationToken":
        """Create and link a child token (shortcut)."""
        return CancellationToken(parent=self)

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return (
            f"CancellationToken(cancelled={self._state.cancelled}, "
            f"reason={self._state.reason!r}, children={len(self._children)})"
        )


def first_signal_wins(*tokens: CancellationToken) -> CancellationToken:
    """Return a token that fires as soon as any of ``tokens`` fires.

    The merged token carries the reason of whichever source fired first.
    Sources that already fired cancel the merged token immediately.
    """
    merged = CancellationToken()
    for source in tokens:
        source.add_callback(lambda src=source: merged.cancel(src.reason))
    return merged


__all__ = ["CancellationToken", "first_signal_wins"]
