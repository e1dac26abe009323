"""Shared HTTP client pool.

Purpose:
    Provide a centralized, thread-safe pool of reusable ``httpx.Client``
    instances to avoid per-call allocations and reduce connection overhead.

External dependencies:
    - ``httpx`` for the underlying synchronous HTTP client.

Timeout strategy:
    - Pooled clients are built with :data:`DEFAULT_HTTP_TIMEOUT` (unbounded).
      Each request passes its own timeout derived from the call's
      cancellation signal; no timeout is applied when none is configured.

Lifecycle & cleanup:
    - Clients are cached by ``(base_url, purpose)``. Each transport uses its
      own purpose and releases only its entry with :func:`close_client`.
    - All clients are closed at interpreter exit via ``atexit``.
"""

from __future__ import annotations

import atexit
import contextlib
import threading
from typing import Dict, Optional, Tuple

import httpx

from ..constants import DEFAULT_HTTP_TIMEOUT, USER_AGENT

_CLIENTS: Dict[Tuple[Optional[str], str], httpx.Client] = {}
_LOCK = threading.RLock()


def get_httpx_client(base_url: Optional[str], purpose: str) -> httpx.Client:
    """Return a pooled ``httpx.Client`` for the given base URL and purpose.

    Parameters:
        base_url: Optional API base URL set on the client so relative paths
            work. ``None`` groups clients under a shared key.
        purpose: Short string discriminating separate pools. Keep stable to
            maximize reuse.

    Thread-safety:
        Safe for concurrent use; per-key creation is guarded by a re-entrant lock.
    """
    key = (base_url, purpose)
    client = _CLIENTS.get(key)
    if client is not None and not client.is_closed:
        return client

    with _LOCK:
        client = _CLIENTS.get(key)
        if client is not None and not client.is_closed:
            return client
        kwargs = {"timeout": httpx.Timeout(DEFAULT_HTTP_TIMEOUT), "headers": {"User-Agent": USER_AGENT}}
        client = httpx.Client(base_url=base_url, **kwargs) if base_url else httpx.Client(**kwargs)
        _CLIENTS[key] = client
        return client


def close_client(base_url: Optional[str], purpose: str) -> None:
    """Close and forget the pooled client for one key, if present."""
    with _LOCK:
        client = _CLIENTS.pop((base_url, purpose), None)
    if client is not None:
        with contextlib.suppress(Exception):
            client.close()


def close_all_clients() -> None:
    """Close and clear all pooled HTTP clients."""
    with _LOCK:
        for c in _CLIENTS.values():
            # Best-effort shutdown; pool teardown failures are not actionable.
            with contextlib.suppress(Exception):
                c.close()
        _CLIENTS.clear()


atexit.register(close_all_clients)

__all__ = ["get_httpx_client", "close_client", "close_all_clients"]
