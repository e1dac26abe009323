"""Helpers over decoded stream events.

Keeps accumulation of chat completion chunks separate from the decoder so the
decoder stays a pure buffering state machine.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from ..errors import ZaguanError


def reconstruct_message_from_chunks(chunks: Iterable[Dict[str, Any]]) -> Dict[str, Any]:
    """Accumulate ``chat.completion.chunk`` events into one ``chat.completion``.

    - Concatenates ``delta.content`` of the first choice.
    - Keeps the last ``delta.role`` seen (``assistant`` by default) and the last
      ``finish_reason``.
    - Collects tool calls that carry an ``id``; argument fragments without an
      id are not merged.
    - Usage is zeroed; the stream does not carry it reliably.

    Raises:
        ZaguanError: when ``chunks`` is empty.
    """
    chunk_list: List[Dict[str, Any]] = list(chunks)
    if not chunk_list:
        raise ZaguanError("Cannot reconstruct message from empty chunks array")

    first = chunk_list[0]
    content_parts: List[str] = []
    role = "assistant"
    tool_calls: List[Dict[str, Any]] = []
    finish_reason: Optional[str] = None

    for chunk in chunk_list:
        choices = chunk.get("choices") or [{}]
        choice = choices[0] or {}
        delta = choice.get("delta") or {}
        if delta.get("content"):
            content_parts.append(delta["content"])
        if delta.get("role"):
            role = delta["role"]
        for call in delta.get("tool_calls") or []:
            if not call.get("id"):
                continue
            fn = call.get("function") or {}
            tool_calls.append(
                {
                    "id": call["id"],
                    "type": "function",
                    "function": {
                        "name": fn.get("name") or "",
                        "arguments": fn.get("arguments") or "",
                    },
                }
            )
        if choice.get("finish_reason"):
            finish_reason = choice["finish_reason"]

    message: Dict[str, Any] = {"role": role, "content": "".join(content_parts)}
    if tool_calls:
        message["tool_calls"] = tool_calls
    return {
        "id": first.get("id"),
        "object": "chat.completion",
        "created": first.get("created"),
        "model": first.get("model"),
        "choices": [{"index": 0, "message": message, "finish_reason": finish_reason}],
        "usage": {"prompt_tokens": 0, "completion_tokens": 0, "total_tokens": 0},
    }


__all__ = ["reconstruct_message_from_chunks"]
