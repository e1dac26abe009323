"""Streaming package for the request layer.

Exposes the event-stream decoder and chunk helpers under a single namespace.
"""

from .decoder import DATA_PREFIX, DONE_SENTINEL, StreamDecoder, StreamEvent, StreamState
from .streaming import reconstruct_message_from_chunks

__all__ = [
    "DATA_PREFIX",
    "DONE_SENTINEL",
    "StreamDecoder",
    "StreamEvent",
    "StreamState",
    "reconstruct_message_from_chunks",
]
