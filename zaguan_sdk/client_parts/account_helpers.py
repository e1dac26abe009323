"""Model catalogue and credit endpoints."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..base.request import RequestOptions
from .helpers import ZaguanCommonMixin


class ZaguanAccountMixin(ZaguanCommonMixin):
    def list_models(self, options: Optional[RequestOptions] = None) -> List[Dict[str, Any]]:
        """Return the ``data`` list of ``GET /v1/models``."""
        return self._get("models", options=options).get("data", [])

    def get_capabilities(
        self,
        *,
        provider: Optional[str] = None,
        supports_vision: Optional[bool] = None,
        supports_tools: Optional[bool] = None,
        supports_reasoning: Optional[bool] = None,
        options: Optional[RequestOptions] = None,
    ) -> List[Dict[str, Any]]:
        """Return model capabilities, optionally filtered server-side."""
        params = {
            "provider": provider,
            "supports_vision": supports_vision,
            "supports_tools": supports_tools,
            "supports_reasoning": supports_reasoning,
        }
        return self._get("capabilities", params=params, options=options)

    def get_credits_balance(self, options: Optional[RequestOptions] = None) -> Dict[str, Any]:
        return self._get("credits", "balance", options=options)

    def get_credits_history(
        self,
        *,
        page: Optional[int] = None,
        page_size: Optional[int] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        model: Optional[str] = None,
        provider: Optional[str] = None,
        options: Optional[RequestOptions] = None,
    ) -> Dict[str, Any]:
        params = {
            "page": page,
            "page_size": page_size,
            "start_date": start_date,
            "end_date": end_date,
            "model": model,
            "provider": provider,
        }
        return self._get("credits", "history", params=params, options=options)

    def get_credits_stats(
        self,
        *,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        group_by: Optional[str] = None,
        model: Optional[str] = None,
        provider: Optional[str] = None,
        band: Optional[str] = None,
        options: Optional[RequestOptions] = None,
    ) -> Dict[str, Any]:
        params = {
            "start_date": start_date,
            "end_date": end_date,
            "group_by": group_by,
            "model": model,
            "provider": provider,
            "band": band,
        }
        return self._get("credits", "stats", params=params, options=options)


__all__ = ["ZaguanAccountMixin"]
