"""Batch and fine-tuning job endpoints."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..base.request import RequestOptions
from .helpers import ZaguanCommonMixin


class ZaguanJobMixin(ZaguanCommonMixin):
    # ---- Batches ----
    def create_batch(self, request: Dict[str, Any], options: Optional[RequestOptions] = None) -> Dict[str, Any]:
        return self._post("batches", body=request, options=options)

    def retrieve_batch(self, batch_id: str, options: Optional[RequestOptions] = None) -> Dict[str, Any]:
        return self._get("batches", batch_id, options=options)

    def cancel_batch(self, batch_id: str, options: Optional[RequestOptions] = None) -> Dict[str, Any]:
        return self._post("batches", batch_id, "cancel", options=options)

    def list_batches(self, options: Optional[RequestOptions] = None) -> Dict[str, Any]:
        return self._get("batches", options=options)

    # ---- Fine-tuning ----
    def create_fine_tuning_job(
        self, request: Dict[str, Any], options: Optional[RequestOptions] = None
    ) -> Dict[str, Any]:
        return self._post("fine_tuning", "jobs", body=request, options=options)

    def list_fine_tuning_jobs(self, options: Optional[RequestOptions] = None) -> Dict[str, Any]:
        return self._get("fine_tuning", "jobs", options=options)

    def retrieve_fine_tuning_job(self, job_id: str, options: Optional[RequestOptions] = None) -> Dict[str, Any]:
        return self._get("fine_tuning", "jobs", job_id, options=options)

    def cancel_fine_tuning_job(self, job_id: str, options: Optional[RequestOptions] = None) -> Dict[str, Any]:
        return self._post("fine_tuning", "jobs", job_id, "cancel", options=options)

    def list_fine_tuning_events(self, job_id: str, options: Optional[RequestOptions] = None) -> List[Dict[str, Any]]:
        """Return the ``data`` list of the job's event feed."""
        return self._get("fine_tuning", "jobs", job_id, "events", options=options).get("data", [])


__all__ = ["ZaguanJobMixin"]
