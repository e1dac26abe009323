"""Incremental decoder for the gateway's ``data:`` event stream.

The decoder turns raw body bytes, delivered in arbitrarily sized reads, into
parsed JSON events in arrival order. It performs no I/O: the request layer
feeds it whatever each blocking read returned and forwards the events.

Wire format
-----------
One event per line: ``data: <json object>``. The literal ``data: [DONE]`` ends
the stream. Blank lines and lines without the ``data:`` prefix (comments,
keep-alive pings, ``event:`` fields) are ignored.

State machine
-------------
``STREAMING`` until either the ``[DONE]`` sentinel is seen or ``finish()`` is
called at end of body, then ``TERMINATED``. Once terminated, the rest of the
current read and every later feed is discarded.

Failure modes
-------------
None escape ``feed``/``finish``. A frame that is not valid JSON, or is JSON but
not an object, is dropped (counted in ``skipped`` and logged at debug level);
one lost frame is preferable to aborting an otherwise healthy stream.
"""
from __future__ import annotations

import codecs
import logging
import json
from enum import Enum
from typing import Any, Dict, List

from ..logging import get_logger, log_event

DATA_PREFIX = "data:"
DONE_SENTINEL = "[DONE]"

StreamEvent = Dict[str, Any]

_logger = get_logger("zaguan.stream")


class StreamState(str, Enum):
    STREAMING = "streaming"
    TERMINATED = "terminated"


class StreamDecoder:
    """Buffering line decoder; one instance per streamed response."""

    def __init__(self) -> None:
        # Holds back partial UTF-8 sequences split across reads.
        self._bytes = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._buffer = ""
        self._cursor = 0
        self._state = StreamState.STREAMING
        self.skipped = 0

    @property
    def state(self) -> StreamState:  # noqa: D401 - short property
        """Current state of the decoder."""
        return self._state

    @property
    def terminated(self) -> bool:  # noqa: D401 - short property
        """Whether the stream has ended (sentinel or end of body)."""
        return self._state is StreamState.TERMINATED

    def feed(self, data: bytes) -> List[StreamEvent]:
        """Decode ``data`` and return every event completed by it."""
        if self.terminated or not data:
            return []
        self._buffer += self._bytes.decode(data)
        return self._drain()

    def finish(self) -> List[StreamEvent]:
        """Flush at end of body; a trailing partial line is discarded."""
        if self.terminated:
            return []
        self._buffer += self._bytes.decode(b"", final=True)
        events = self._drain()
        if self._cursor < len(self._buffer):
            log_event(
                _logger,
                "stream.partial_discarded",
                level=logging.DEBUG,
                size=len(self._buffer) - self._cursor,
            )
        self._terminate()
        return events

    def _terminate(self) -> None:
        self._state = StreamState.TERMINATED
        self._buffer = ""
        self._cursor = 0

    def _drain(self) -> List[StreamEvent]:
        events: List[StreamEvent] = []
        while not self.terminated:
            newline = self._buffer.find("\n", self._cursor)
            if newline == -1:
                break
            line = self._buffer[self._cursor:newline]
            self._cursor = newline + 1
            self._handle_line(line, events)
        if not self.terminated:
            self._buffer = self._buffer[self._cursor:]
            self._cursor = 0
        return events

    def _handle_line(self, raw: str, events: List[StreamEvent]) -> None:
        line = raw.strip()
        if not line or not line.startswith(DATA_PREFIX):
            return
        payload = line[len(DATA_PREFIX):].strip()
        if payload == DONE_SENTINEL:
            self._terminate()
            return
        try:
            event = json.loads(payload)
        except ValueError:
            event = None
        if not isinstance(event, dict):
            self.skipped += 1
            log_event(_logger, "stream.frame_skipped", level=logging.DEBUG, size=len(payload))
            return
        events.append(event)


__all__ = ["StreamDecoder", "StreamState", "StreamEvent", "DATA_PREFIX", "DONE_SENTINEL"]
