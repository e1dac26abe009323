"""Assistants, threads and runs endpoints."""

from __future__ import annotations

from typing import Any, Dict, Optional

from ..base.request import RequestOptions
from .helpers import ZaguanCommonMixin


class ZaguanAssistantMixin(ZaguanCommonMixin):
    # ---- Assistants ----
    def create_assistant(self, request: Dict[str, Any], options: Optional[RequestOptions] = None) -> Dict[str, Any]:
        return self._post("assistants", body=request, options=options)

    def retrieve_assistant(self, assistant_id: str, options: Optional[RequestOptions] = None) -> Dict[str, Any]:
        return self._get("assistants", assistant_id, options=options)

    def update_assistant(
        self, assistant_id: str, request: Dict[str, Any], options: Optional[RequestOptions] = None
    ) -> Dict[str, Any]:
        return self._post("assistants", assistant_id, body=request, options=options)

    def delete_assistant(self, assistant_id: str, options: Optional[RequestOptions] = None) -> Dict[str, Any]:
        return self._delete("assistants", assistant_id, options=options)

    # ---- Threads ----
    def create_thread(
        self, request: Optional[Dict[str, Any]] = None, options: Optional[RequestOptions] = None
    ) -> Dict[str, Any]:
        return self._post("threads", body=request or {}, options=options)

    def retrieve_thread(self, thread_id: str, options: Optional[RequestOptions] = None) -> Dict[str, Any]:
        return self._get("threads", thread_id, options=options)

    def delete_thread(self, thread_id: str, options: Optional[RequestOptions] = None) -> Dict[str, Any]:
        return self._delete("threads", thread_id, options=options)

    # ---- Runs ----
    def create_run(
        self, thread_id: str, request: Dict[str, Any], options: Optional[RequestOptions] = None
    ) -> Dict[str, Any]:
        return self._post("threads", thread_id, "runs", body=request, options=options)

    def retrieve_run(self, thread_id: str, run_id: str, options: Optional[RequestOptions] = None) -> Dict[str, Any]:
        return self._get("threads", thread_id, "runs", run_id, options=options)

    def cancel_run(self, thread_id: str, run_id: str, options: Optional[RequestOptions] = None) -> Dict[str, Any]:
        return self._post("threads", thread_id, "runs", run_id, "cancel", options=options)


__all__ = ["ZaguanAssistantMixin"]
