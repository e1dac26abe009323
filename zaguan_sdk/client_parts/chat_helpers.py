"""Chat completion endpoints (buffered and streaming).

Failure modes:
    - An invalid request (missing model or messages, out-of-range
      temperature/max_tokens) raises ``ZaguanError`` before any I/O.
    - Everything after validation propagates from the orchestrator unchanged.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Iterator, Mapping, Optional, Union

from pydantic import ValidationError

from ..base.dto import ChatRequestDTO
from ..base.errors import ZaguanError
from ..base.request import RequestOptions
from ..base.streaming import StreamEvent, reconstruct_message_from_chunks
from .helpers import ZaguanCommonMixin, api_path

ChatRequestLike = Union[ChatRequestDTO, Mapping[str, Any]]

_VALUE_ERROR_PREFIX = "Value error, "


def _validation_message(exc: ValidationError) -> str:
    first = exc.errors()[0]
    msg = str(first.get("msg", "invalid request"))
    if msg.startswith(_VALUE_ERROR_PREFIX):
        return msg[len(_VALUE_ERROR_PREFIX):]
    loc = ".".join(str(p) for p in first.get("loc", ()))
    return f"{loc}: {msg}" if loc else msg


def build_chat_payload(request: ChatRequestLike, *, stream: bool) -> Dict[str, Any]:
    """Validate ``request`` and return the JSON body to send."""
    try:
        dto = request if isinstance(request, ChatRequestDTO) else ChatRequestDTO.model_validate(dict(request))
    except ValidationError as e:
        raise ZaguanError(_validation_message(e)) from e
    payload = dto.to_payload()
    if stream:
        payload["stream"] = True
    else:
        payload.pop("stream", None)
    return payload


class ZaguanChatMixin(ZaguanCommonMixin):
    """Chat completions over ``/v1/chat/completions``."""

    def chat(self, request: ChatRequestLike, options: Optional[RequestOptions] = None) -> Dict[str, Any]:
        """Perform a non-streaming chat completion and return the response body."""
        payload = build_chat_payload(request, stream=False)
        return self._post("chat", "completions", body=payload, options=options)

    def chat_stream(self, request: ChatRequestLike, options: Optional[RequestOptions] = None) -> Iterator[StreamEvent]:
        """Stream a chat completion.

        Validation happens immediately; the connection opens on first
        iteration. Each yielded item is one ``chat.completion.chunk`` dict.
        Closing the iterator early releases the connection.
        """
        payload = build_chat_payload(request, stream=True)
        return self._orchestrator.stream("POST", api_path("chat", "completions"), json_body=payload, options=options)

    @staticmethod
    def reconstruct_message_from_chunks(chunks: Iterable[StreamEvent]) -> Dict[str, Any]:
        """Fold streamed chunks into one ``chat.completion`` response."""
        return reconstruct_message_from_chunks(chunks)


__all__ = ["ZaguanChatMixin", "build_chat_payload"]
