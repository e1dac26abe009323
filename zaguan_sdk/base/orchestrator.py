"""Request orchestrator: the one place where transport, cancellation,
classification, retry and stream decoding meet.

Summary:
- ``request()`` performs a buffered call and returns the parsed JSON (or raw
  bytes) body.
- ``stream()`` is a generator yielding decoded ``data:`` events one at a time;
  nothing is read from the network ahead of what the caller has consumed.

Per attempt:
- a fresh :class:`EffectiveSignal` merges the call timeout and caller token;
- the transport's exception or non-2xx response is classified;
- :func:`should_retry` decides; the backoff wait is interrupted by the caller
  token and then surfaces as a cancellation.

Resource discipline:
- every :class:`RawResponse` is released exactly once on every exit path;
- cancelling the signal releases the response from the firing thread, which
  unblocks a read that is waiting on the network;
- the signal's timer is disarmed on every exit path.

Observability:
- ``request.start`` / ``request.end`` / ``request.error`` / ``request.retry``
  log events, mirrored to the optional ``on_log`` hook.
"""

from __future__ import annotations

import contextlib
import json
import logging
import threading
import time
from typing import Any, Callable, Dict, Iterator, Mapping, Optional, Tuple
from urllib.parse import urlencode

from .cancellation import CAUSE_CANCELLED, EffectiveSignal, derive_signal
from .clock import Clock, SystemClock
from .errors import ConnectionError, ZaguanError, classify, classify_transport_failure
from .interfaces import RawResponse, Transport
from .logging import LogContext, get_logger, normalized_log_event
from .request import (
    Multipart,
    RequestDescriptor,
    RequestOptions,
    build_headers,
    new_correlation_id,
)
from .resilience.retry import DEFAULT_RETRY_CONFIG, RetryConfig, RetryState, should_retry
from .streaming.decoder import StreamDecoder, StreamEvent

LogHook = Callable[[Dict[str, Any]], None]

_HOOK_TYPES = {"request.retry": "retry_attempt"}


class _ReleaseOnce:
    """Idempotent, thread-safe ``release()`` for one raw response."""

    def __init__(self, raw: RawResponse) -> None:
        self._raw = raw
        self._lock = threading.Lock()
        self._done = False

    def __call__(self) -> None:
        with self._lock:
            if self._done:
                return
            self._done = True
        # Release must never mask the error that is already propagating.
        with contextlib.suppress(Exception):
            self._raw.release()


class RequestOrchestrator:
    """Compose transport, cancellation, classification and retry per call."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        transport: Transport,
        clock: Optional[Clock] = None,
        default_timeout_ms: Optional[int] = None,
        retry_config: Optional[RetryConfig] = None,
        logger: Optional[logging.Logger] = None,
        on_log: Optional[LogHook] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._transport = transport
        self._clock = clock or SystemClock()
        self._default_timeout_ms = default_timeout_ms
        self._retry_config = retry_config or DEFAULT_RETRY_CONFIG
        self._logger = logger or get_logger("zaguan.request")
        self._on_log = on_log

    @property
    def retry_config(self) -> RetryConfig:
        return self._retry_config

    # ---- Request construction ----
    def build_descriptor(
        self,
        method: str,
        path: str,
        *,
        json_body: Any = None,
        params: Optional[Mapping[str, Any]] = None,
        multipart: Optional[Multipart] = None,
        options: Optional[RequestOptions] = None,
    ) -> RequestDescriptor:
        options = options or RequestOptions()
        correlation_id = options.request_id or new_correlation_id()
        headers = build_headers(
            self._api_key,
            correlation_id,
            options.headers,
            multipart=multipart is not None,
        )
        content = json.dumps(json_body).encode("utf-8") if json_body is not None else None
        return RequestDescriptor(
            method=method.upper(),
            url=self._url(path, params),
            headers=headers,
            correlation_id=correlation_id,
            content=content,
            multipart=multipart,
            timeout_ms=options.timeout_ms,
            cancellation_token=options.cancellation_token,
            idempotent=options.idempotent,
        )

    def _url(self, path: str, params: Optional[Mapping[str, Any]]) -> str:
        url = f"{self._base_url}/{path.lstrip('/')}"
        if not params:
            return url
        query = {
            k: (str(v).lower() if isinstance(v, bool) else v)
            for k, v in params.items()
            if v is not None
        }
        return f"{url}?{urlencode(query)}" if query else url

    # ---- Public primitives ----
    def request(
        self,
        method: str,
        path: str,
        *,
        json_body: Any = None,
        params: Optional[Mapping[str, Any]] = None,
        multipart: Optional[Multipart] = None,
        options: Optional[RequestOptions] = None,
        expect: str = "json",
    ) -> Any:
        """Perform a buffered call; return parsed JSON (``{}`` when empty) or bytes.

        Raises:
            APIError: classified non-2xx response after retries.
            ConnectionError: transport failure, timeout or cancellation.
        """
        descriptor = self.build_descriptor(
            method, path, json_body=json_body, params=params, multipart=multipart, options=options
        )
        body, signal = self._execute(descriptor, self._config_for(options), stream=False, expect=expect)
        signal.close()
        if expect == "bytes":
            return body
        return self._parse_json(body, descriptor)

    def stream(
        self,
        method: str,
        path: str,
        *,
        json_body: Any = None,
        params: Optional[Mapping[str, Any]] = None,
        options: Optional[RequestOptions] = None,
    ) -> Iterator[StreamEvent]:
        """Open a streaming call and lazily yield decoded events in arrival order.

        The connection is opened on first iteration. Closing the generator
        early releases the stream.
        """
        descriptor = self.build_descriptor(method, path, json_body=json_body, params=params, options=options)
        raw, signal = self._execute(descriptor, self._config_for(options), stream=True)
        yield from self._read_events(raw, signal, descriptor)

    # ---- Attempt loop ----
    def _config_for(self, options: Optional[RequestOptions]) -> RetryConfig:
        if options is not None and options.retry is not None:
            return options.retry
        return self._retry_config

    def _execute(
        self,
        descriptor: RequestDescriptor,
        config: RetryConfig,
        *,
        stream: bool,
        expect: str = "json",
    ) -> Tuple[Any, EffectiveSignal]:
        """Run attempts until one succeeds or the policy gives up.

        Returns the open response (streaming) or the materialized body, plus
        the attempt's signal; the caller owns closing both.
        """
        state = RetryState()
        ctx = LogContext(method=descriptor.method, url=descriptor.url, request_id=descriptor.correlation_id)
        caller_token = descriptor.cancellation_token
        while True:
            signal = derive_signal(
                descriptor.timeout_ms,
                caller_token,
                self._default_timeout_ms,
                clock=self._clock,
            )
            started = self._clock.monotonic()
            self._emit("request.start", ctx, phase="start", attempt=state.attempt)
            try:
                raw = self._attempt(descriptor, signal, stream=stream)
                result = raw if stream else self._read_body(raw, signal, descriptor, expect)
            except ZaguanError as error:
                signal.close()
                self._emit(
                    "request.error",
                    ctx,
                    phase="finalize",
                    attempt=state.attempt,
                    error_code=error.code.value,
                    level=logging.WARNING,
                    status_code=getattr(error, "status_code", None),
                    latency_ms=self._elapsed_ms(started),
                    error=error.message,
                )
                decision = should_retry(state.attempt, config, error, idempotent=descriptor.is_idempotent)
                if not decision.retry:
                    raise
                delay_ms = decision.delay_ms or 0
                self._emit(
                    "request.retry",
                    ctx,
                    phase="retry",
                    attempt=state.attempt + 1,
                    max_retries=config.max_retries,
                    delay_ms=delay_ms,
                )
                if not self._clock.sleep(delay_ms / 1000.0, caller_token):
                    raise ConnectionError(
                        "Request aborted",
                        correlation_id=descriptor.correlation_id,
                        cancelled=True,
                        reason=CAUSE_CANCELLED,
                    ) from error
                state.record(error, delay_ms)
                continue
            except BaseException:
                signal.close()
                raise
            self._emit(
                "request.end",
                ctx,
                phase="finalize" if not stream else "stream",
                attempt=state.attempt,
                status_code=raw.status_code,
                latency_ms=self._elapsed_ms(started),
            )
            return result, signal

    def _attempt(self, descriptor: RequestDescriptor, signal: EffectiveSignal, *, stream: bool) -> RawResponse:
        """One exchange; return a 2xx response with its body unread, or raise."""
        cid = descriptor.correlation_id
        signal.check(cid)
        try:
            raw = self._transport.send(
                descriptor,
                signal.token,
                stream=stream,
                timeout=signal.remaining_seconds(),
            )
        except ZaguanError:
            raise
        except Exception as exc:
            raise self._transport_error(exc, signal, cid) from exc
        if signal.cancelled:
            _ReleaseOnce(raw)()
            raise signal.error(cid)
        if 200 <= raw.status_code < 300:
            return raw
        release = _ReleaseOnce(raw)
        try:
            body = raw.text()
        except Exception as exc:  # unreadable error body degrades to the generic message
            normalized_log_event(
                self._logger,
                "request.error_body_unreadable",
                LogContext(request_id=cid),
                phase="classify",
                level=logging.DEBUG,
                error=str(exc),
            )
            body = None
        finally:
            release()
        error = classify(raw.status_code, raw.headers, body, status_text=raw.reason_phrase)
        if error.correlation_id is None:
            error.correlation_id = cid
        raise error

    def _read_body(self, raw: RawResponse, signal: EffectiveSignal, descriptor: RequestDescriptor, expect: str):
        release = _ReleaseOnce(raw)
        signal.token.add_callback(release)
        try:
            return raw.content() if expect == "bytes" else raw.text()
        except Exception as exc:
            raise self._transport_error(exc, signal, descriptor.correlation_id) from exc
        finally:
            signal.token.remove_callback(release)
            release()

    @staticmethod
    def _transport_error(exc: Exception, signal: EffectiveSignal, correlation_id: str) -> ConnectionError:
        if isinstance(exc, TimeoutError):
            signal.expire()
        if signal.cancelled:
            return signal.error(correlation_id)
        return classify_transport_failure(exc, correlation_id)

    # ---- Streaming read loop ----
    def _read_events(
        self,
        raw: RawResponse,
        signal: EffectiveSignal,
        descriptor: RequestDescriptor,
    ) -> Iterator[StreamEvent]:
        cid = descriptor.correlation_id
        ctx = LogContext(method=descriptor.method, url=descriptor.url, request_id=cid)
        decoder = StreamDecoder()
        release = _ReleaseOnce(raw)
        signal.token.add_callback(release)
        emitted = 0
        try:
            chunks = iter(raw.iter_bytes())
            while not decoder.terminated:
                signal.check(cid)
                try:
                    data = next(chunks, None)
                except Exception as exc:
                    raise self._transport_error(exc, signal, cid) from exc
                signal.check(cid)
                events = decoder.finish() if data is None else decoder.feed(data)
                for event in events:
                    if not decoder.terminated:
                        signal.check(cid)
                    emitted += 1
                    yield event
            self._emit("stream.end", ctx, phase="finalize", emitted=emitted, skipped=decoder.skipped)
        except ZaguanError as error:
            self._emit(
                "stream.error",
                ctx,
                phase="stream",
                error_code=error.code.value,
                level=logging.WARNING,
                emitted=emitted,
                error=error.message,
            )
            raise
        finally:
            signal.token.remove_callback(release)
            release()
            signal.close()

    # ---- Helpers ----
    def _parse_json(self, text: str, descriptor: RequestDescriptor) -> Any:
        if not text:
            return {}
        try:
            return json.loads(text)
        except ValueError:
            normalized_log_event(
                self._logger,
                "request.decode_error",
                LogContext(method=descriptor.method, url=descriptor.url, request_id=descriptor.correlation_id),
                phase="finalize",
                level=logging.WARNING,
            )
            return {}

    def _elapsed_ms(self, started: float) -> float:
        return round((self._clock.monotonic() - started) * 1000.0, 3)

    def _emit(
        self,
        event: str,
        ctx: LogContext,
        *,
        phase: str,
        attempt: Optional[int] = None,
        error_code: Optional[str] = None,
        level: int = logging.INFO,
        **fields: Any,
    ) -> None:
        normalized_log_event(
            self._logger, event, ctx, phase=phase, attempt=attempt, error_code=error_code, level=level, **fields
        )
        if self._on_log is None:
            return
        payload: Dict[str, Any] = {
            "type": _HOOK_TYPES.get(event, event.replace(".", "_")),
            "timestamp": time.time(),
            "attempt": attempt,
        }
        payload |= ctx.to_dict()
        if error_code is not None:
            payload["error_code"] = error_code
        payload.update({k: v for k, v in fields.items() if v is not None})
        try:
            self._on_log(payload)
        except Exception:
            self._logger.exception("on_log hook failed for %s", event)


__all__ = ["RequestOrchestrator", "LogHook"]
