"""
Pydantic DTOs and validators for outbound chat completion requests.

Purpose
-------
Validate a chat payload before it leaves the process so obviously malformed
requests fail locally with a clear message instead of a round trip and a 400.

External dependencies: Pydantic only (no network calls). No timeouts.

Design
------
- Only the fields the SDK itself reasons about are typed; everything else the
  server accepts (``stream_options``, ``tools``, ``reasoning_effort``, provider
  specific knobs, ...) passes through untouched via ``extra="allow"``.
- The client converts ``pydantic.ValidationError`` into ``ZaguanError`` at the
  call boundary; this module raises plain validation errors.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


Role = Literal["system", "user", "assistant", "tool", "function"]


class MessageDTO(BaseModel):
    """One chat message.

    ``content`` is a string or a list of OpenAI-style content parts; it may be
    ``None`` on assistant messages that only carry ``tool_calls``.
    """

    model_config = ConfigDict(extra="allow")

    role: Role
    content: Union[str, List[Dict[str, Any]], None] = None
    name: Optional[str] = None
    tool_call_id: Optional[str] = None
    tool_calls: Optional[List[Dict[str, Any]]] = None

    @model_validator(mode="after")
    def _validate_content(self) -> "MessageDTO":
        if self.content is None and not self.tool_calls and self.role != "assistant":
            raise ValueError(f"{self.role} message must include content")
        return self


class ChatRequestDTO(BaseModel):
    """Chat completion request.

    Parameters:
        model: Target model identifier (non-empty).
        messages: Ordered list of MessageDTO (non-empty).
        max_tokens: If provided, must be positive.
        temperature: If provided, must be within [0.0, 2.0].
        stream: Set by the client for streaming calls.

    Raises:
        ValidationError: On missing model/messages or out-of-range params.
    """

    model_config = ConfigDict(extra="allow")

    model: str = Field(..., min_length=1)
    messages: List[MessageDTO] = Field(..., min_length=1)
    max_tokens: Optional[int] = Field(default=None, gt=0)
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    stream: Optional[bool] = None

    @model_validator(mode="before")
    @classmethod
    def _check_required(cls, data: Any) -> Any:
        if isinstance(data, dict):
            model = data.get("model")
            if not isinstance(model, str) or not model.strip():
                raise ValueError("model is required and must be a non-empty string")
            messages = data.get("messages")
            if not isinstance(messages, list) or not messages:
                raise ValueError("messages is required and must be a non-empty array")
        return data

    def to_payload(self) -> Dict[str, Any]:
        """Return the JSON body, omitting unset optional fields."""
        return self.model_dump(exclude_none=True)


__all__ = ["Role", "MessageDTO", "ChatRequestDTO"]
