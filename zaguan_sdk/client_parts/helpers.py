"""Common helpers shared by the endpoint mixins.

Notes:
    These helpers assume the consumer is an instance that provides the
    attribute ``_orchestrator`` (:class:`RequestOrchestrator`). Every endpoint
    method is a thin wrapper over :meth:`_get` / :meth:`_post` /
    :meth:`_delete` / :meth:`_upload`; none of them touches the transport.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from ..base.constants import API_PREFIX
from ..base.orchestrator import RequestOrchestrator
from ..base.request import Multipart, RequestOptions


def api_path(*segments: str) -> str:
    """Join ``segments`` under the API prefix: ``api_path("batches", "b1")``."""
    return "/".join([API_PREFIX, *(s.strip("/") for s in segments)])


def form_value(value: Any) -> str:
    """Render a scalar form field the way the server parses it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    return str(value)


def file_part(value: Any, default_name: str) -> Any:
    """Normalize an upload to the ``(filename, content[, mime])`` form.

    Tuples pass through; bytes and file objects get ``default_name`` (or the
    file object's own basename when it has one).
    """
    if isinstance(value, tuple):
        return value
    name = getattr(value, "name", None)
    if isinstance(name, str) and name:
        return (name.replace("\\", "/").rsplit("/", 1)[-1], value)
    return (default_name, value)


class ZaguanCommonMixin:
    """Mixin offering the HTTP verb helpers used by every endpoint."""

    _orchestrator: RequestOrchestrator

    def _get(
        self,
        *segments: str,
        params: Optional[Mapping[str, Any]] = None,
        options: Optional[RequestOptions] = None,
    ) -> Any:
        return self._orchestrator.request("GET", api_path(*segments), params=params, options=options)

    def _post(
        self,
        *segments: str,
        body: Any = None,
        options: Optional[RequestOptions] = None,
        expect: str = "json",
    ) -> Any:
        return self._orchestrator.request(
            "POST", api_path(*segments), json_body=body if body is not None else {}, options=options, expect=expect
        )

    def _delete(self, *segments: str, options: Optional[RequestOptions] = None) -> Any:
        return self._orchestrator.request("DELETE", api_path(*segments), options=options)

    def _upload(
        self,
        *segments: str,
        files: Dict[str, Any],
        fields: Mapping[str, Any],
        options: Optional[RequestOptions] = None,
    ) -> Any:
        """POST a multipart form; ``None`` fields are omitted."""
        data = {k: form_value(v) for k, v in fields.items() if v is not None}
        return self._orchestrator.request(
            "POST",
            api_path(*segments),
            multipart=Multipart(files=files, data=data),
            options=options,
        )


__all__ = ["ZaguanCommonMixin", "api_path", "form_value", "file_part"]
