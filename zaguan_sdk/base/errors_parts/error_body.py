"""
Pydantic model of the gateway's error response body.

Shape consumed::

    {"error": {"message": "...", "type": "...", "code": "...",
               "credits_required": 10, "credits_remaining": 2, "reset_date": "...",
               "band": "D", "required_tier": "platinum", "current_tier": "pro"}}

Every field is optional: absence is a valid state, not a validation failure.
Unknown fields are kept (``extra="allow"``) so newer gateways do not break
older clients.
"""
from __future__ import annotations

import json
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, ValidationError


class ErrorDetail(BaseModel):
    """Nested ``error`` object of an error response."""

    model_config = ConfigDict(extra="allow")

    message: Optional[str] = None
    type: Optional[str] = None
    code: Optional[Union[str, int]] = None
    credits_required: Optional[Union[int, float]] = None
    credits_remaining: Optional[Union[int, float]] = None
    reset_date: Optional[str] = None
    band: Optional[str] = None
    required_tier: Optional[str] = None
    current_tier: Optional[str] = None


class ErrorBody(BaseModel):
    """Top-level error envelope."""

    model_config = ConfigDict(extra="allow")

    error: Optional[ErrorDetail] = None

    @property
    def message(self) -> Optional[str]:
        return self.error.message if self.error and self.error.message else None

    @property
    def error_type(self) -> Optional[str]:
        return self.error.type if self.error else None


def _salvage(data: Any) -> ErrorBody:
    """Keep whatever string fields survive when full validation fails."""
    detail = data.get("error") if isinstance(data, dict) else None
    if not isinstance(detail, dict):
        return ErrorBody()
    kept = {
        k: v
        for k, v in detail.items()
        if k in ("message", "type", "band", "required_tier", "current_tier", "reset_date")
        and isinstance(v, str)
    }
    return ErrorBody(error=ErrorDetail(**kept))


def parse_error_body(text: Optional[str]) -> Optional[ErrorBody]:
    """Parse ``text`` into an :class:`ErrorBody`; ``None`` when it is not JSON.

    Never raises. A JSON body whose kind-specific fields have unexpected types
    still yields its message and type.
    """
    if not text:
        return None
    try:
        data = json.loads(text)
    except ValueError:
        return None
    try:
        return ErrorBody.model_validate(data)
    except ValidationError:
        return _salvage(data)


__all__ = ["ErrorDetail", "ErrorBody", "parse_error_body"]
