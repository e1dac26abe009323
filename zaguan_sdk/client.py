"""Zaguán gateway client (OpenAI-compatible HTTP API).

Summary:
- Every endpoint is a thin wrapper in ``client_parts``; all calls go through
  one :class:`RequestOrchestrator` owning timeouts, cancellation, retry,
  error classification and stream decoding.
- Missing constructor arguments are resolved from :func:`get_client_config`
  (defaults, config file, environment).

Errors & Observability:
- Invalid construction arguments raise ``ZaguanError`` immediately.
- Request events are logged under ``zaguan.request`` and mirrored to the
  optional ``on_log`` hook.

This module wires dependencies only; request behavior lives in ``base``.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Union
from urllib.parse import urlparse

from .base.clock import Clock
from .base.errors import ZaguanError
from .base.http import HttpxTransport
from .base.interfaces import Transport
from .base.logging import get_logger
from .base.orchestrator import LogHook, RequestOrchestrator
from .base.resilience.retry import RetryConfig
from .client_parts import (
    ZaguanAccountMixin,
    ZaguanAssistantMixin,
    ZaguanChatMixin,
    ZaguanJobMixin,
    ZaguanMediaMixin,
)
from .config import get_client_config

_RETRY_FIELDS = ("max_retries", "initial_delay_ms", "max_delay_ms", "backoff_multiplier")


def _validate_base_url(base_url: Any) -> str:
    if not isinstance(base_url, str) or not base_url.strip():
        raise ZaguanError("baseUrl is required and must be a non-empty string")
    parsed = urlparse(base_url.strip())
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ZaguanError("baseUrl must be a valid URL")
    return base_url.strip().rstrip("/")


def _validate_api_key(api_key: Any) -> str:
    if not isinstance(api_key, str) or not api_key.strip():
        raise ZaguanError("apiKey is required and must be a non-empty string")
    return api_key


def _validate_timeout(timeout_ms: Any) -> Optional[int]:
    if timeout_ms is None:
        return None
    if isinstance(timeout_ms, bool) or not isinstance(timeout_ms, (int, float)) or timeout_ms <= 0:
        raise ZaguanError("timeoutMs must be a positive number")
    return int(timeout_ms)


def _resolve_retry(retry: Union[RetryConfig, Mapping[str, Any], None], cfg: Mapping[str, Any]) -> RetryConfig:
    if isinstance(retry, RetryConfig):
        return retry
    merged = {k: cfg[k] for k in _RETRY_FIELDS if cfg.get(k) is not None}
    if retry:
        merged |= dict(retry)
    return RetryConfig.from_mapping(merged)


class ZaguanClient(
    ZaguanChatMixin,
    ZaguanAccountMixin,
    ZaguanMediaMixin,
    ZaguanAssistantMixin,
    ZaguanJobMixin,
):
    """Synchronous client for a Zaguán gateway.

    Parameters:
        base_url: Gateway URL (``http``/``https``); a trailing slash is
            stripped. Falls back to ``ZAGUAN_BASE_URL`` / config file.
        api_key: Bearer token. Falls back to ``ZAGUAN_API_KEY`` / config file.
        timeout_ms: Default per-call timeout; ``None`` means no client timeout.
        retry: ``RetryConfig`` or a mapping of its fields. Retries are off
            unless ``max_retries`` > 0.
        transport: Alternative :class:`Transport`; defaults to
            :class:`HttpxTransport`.
        clock: Alternative :class:`Clock` (tests inject a fake one).
        on_log: Callable receiving one dict per request event.

    Raises:
        ZaguanError: missing/invalid base URL or API key, or non-positive
            timeout.

    The client is safe to share between threads. Use it as a context manager
    or call :meth:`close` to release pooled connections.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        *,
        timeout_ms: Optional[int] = None,
        retry: Union[RetryConfig, Mapping[str, Any], None] = None,
        transport: Optional[Transport] = None,
        clock: Optional[Clock] = None,
        on_log: Optional[LogHook] = None,
    ) -> None:
        cfg = get_client_config({"base_url": base_url, "api_key": api_key, "timeout_ms": timeout_ms})
        self._base_url = _validate_base_url(cfg.get("base_url"))
        self._api_key = _validate_api_key(cfg.get("api_key"))
        self._timeout_ms = _validate_timeout(cfg.get("timeout_ms"))
        self._retry = _resolve_retry(retry, cfg)
        self._transport = transport or HttpxTransport()
        self._logger = get_logger("zaguan.request")
        self._orchestrator = RequestOrchestrator(
            self._base_url,
            self._api_key,
            transport=self._transport,
            clock=clock,
            default_timeout_ms=self._timeout_ms,
            retry_config=self._retry,
            logger=self._logger,
            on_log=on_log,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def timeout_ms(self) -> Optional[int]:
        return self._timeout_ms

    @property
    def retry_config(self) -> RetryConfig:
        return self._retry

    def close(self) -> None:
        """Close pooled transport connections."""
        self._transport.close()

    def __enter__(self) -> "ZaguanClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"ZaguanClient(base_url={self._base_url!r})"


__all__ = ["ZaguanClient"]
