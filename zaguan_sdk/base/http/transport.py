"""Transport boundary between the request layer and the network.

:class:`HttpxTransport` implements the :class:`~zaguan_sdk.base.interfaces.Transport`
protocol over pooled httpx clients; it is the default for :class:`ZaguanClient`.
Tests and alternative stacks provide their own transports.

Cancellation
------------
``client.send`` runs on a worker thread while the caller waits on either the
worker or the token. A token that fires while the status line is pending
returns control to the caller at once; a response that arrives afterwards is
closed by the worker.

Failure modes
-------------
- Exceptions raised before a response exists propagate unchanged; the request
  layer classifies them as connection failures.
- :class:`HttpxTransport` reports an elapsed httpx timeout as the builtin
  ``TimeoutError`` so callers need no knowledge of httpx exception types.
- ``timeout=None`` means unbounded: no connect or read deadline is applied.
"""
from __future__ import annotations

import contextlib
import itertools
import threading
from typing import Iterator, Optional

import httpx

from ..cancellation import CancellationToken, CancelledError
from ..interfaces import RawResponse, Transport
from ..request import RequestDescriptor
from .client import close_client, get_httpx_client

_INSTANCE_IDS = itertools.count(1)


class HttpxRawResponse:
    """Adapter exposing an ``httpx.Response`` opened with ``stream=True``."""

    def __init__(self, response: httpx.Response) -> None:
        self._response = response
        self.status_code = response.status_code
        self.reason_phrase = response.reason_phrase
        self.headers = response.headers

    def text(self) -> str:
        self._read()
        return self._response.text

    def content(self) -> bytes:
        self._read()
        return self._response.content

    def iter_bytes(self) -> Iterator[bytes]:
        try:
            yield from self._response.iter_bytes()
        except httpx.TimeoutException as e:
            raise TimeoutError(str(e) or "read timed out") from e

    def release(self) -> None:
        self._response.close()

    def _read(self) -> None:
        try:
            self._response.read()
        except httpx.TimeoutException as e:
            raise TimeoutError(str(e) or "read timed out") from e


class _PendingSend:
    """One ``client.send`` running on a worker thread.

    :meth:`wait` returns the response, raises the worker's exception, or
    returns ``None`` once :meth:`abandon` was called first.
    """

    def __init__(self, client: httpx.Client, request: httpx.Request) -> None:
        self._lock = threading.Lock()
        self._done = threading.Event()
        self._response: Optional[httpx.Response] = None
        self._error: Optional[Exception] = None
        self._abandoned = False
        worker = threading.Thread(target=self._run, args=(client, request), name="zaguan-send", daemon=True)
        worker.start()

    def _run(self, client: httpx.Client, request: httpx.Request) -> None:
        response: Optional[httpx.Response] = None
        try:
            response = client.send(request, stream=True)
        except Exception as e:  # handed to the waiting caller
            with self._lock:
                self._error = e
        finally:
            with self._lock:
                late = self._abandoned
                if not late:
                    self._response = response
            self._done.set()
        if late and response is not None:
            # Nobody will read it; free the connection.
            with contextlib.suppress(Exception):
                response.close()

    def abandon(self) -> None:
        with self._lock:
            self._abandoned = True
        self._done.set()

    def wait(self) -> Optional[httpx.Response]:
        self._done.wait()
        with self._lock:
            if self._error is not None:
                raise self._error
            if self._response is None:
                self._abandoned = True
            return self._response


class HttpxTransport:
    """Default transport over pooled ``httpx.Client`` instances.

    Each transport owns its own pool entry, so :meth:`close` never touches
    connections of another client. The whole body is always opened as a
    stream; ``stream`` only tells the transport whether the caller intends to
    read it incrementally.
    """

    def __init__(self, *, purpose: str = "zaguan") -> None:
        self._purpose = f"{purpose}#{next(_INSTANCE_IDS)}"

    def _client(self) -> httpx.Client:
        return get_httpx_client(None, purpose=self._purpose)

    def send(
        self,
        descriptor: RequestDescriptor,
        token: CancellationToken,
        *,
        stream: bool,
        timeout: Optional[float] = None,
    ) -> HttpxRawResponse:
        token.raise_if_cancelled()
        client = self._client()
        multipart = descriptor.multipart
        request = client.build_request(
            descriptor.method,
            descriptor.url,
            headers=dict(descriptor.headers),
            content=descriptor.content,
            files=dict(multipart.files) if multipart else None,
            data=dict(multipart.data) if multipart else None,
            timeout=httpx.Timeout(timeout),
        )
        pending = _PendingSend(client, request)
        token.add_callback(pending.abandon)
        try:
            response = pending.wait()
        except httpx.TimeoutException as e:
            raise TimeoutError(str(e) or "request timed out") from e
        finally:
            token.remove_callback(pending.abandon)
        if response is None:
            raise CancelledError(token.reason or "operation cancelled")
        return HttpxRawResponse(response)

    def close(self) -> None:
        """Close this transport's pooled client; other transports are unaffected."""
        close_client(None, purpose=self._purpose)


__all__ = ["RawResponse", "Transport", "HttpxRawResponse", "HttpxTransport"]
