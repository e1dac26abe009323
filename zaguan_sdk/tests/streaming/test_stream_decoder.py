"""Stream decoder contract: framing is independent of read boundaries."""
from __future__ import annotations

import json

import pytest

from zaguan_sdk.base.streaming import StreamDecoder, StreamState

from ..helpers import sse

EVENTS = [{"id": "c1", "n": 1}, {"id": "c1", "n": 2, "text": "héllo ☃"}, {"id": "c1", "n": 3}]
PAYLOAD = sse(*EVENTS)


def _decode(chunks) -> list:
    decoder = StreamDecoder()
    out = []
    for chunk in chunks:
        out.extend(decoder.feed(chunk))
    out.extend(decoder.finish())
    return out


def test_single_read_decodes_all_events():
    assert _decode([PAYLOAD]) == EVENTS  # nosec B101 - pytest assert in tests


def test_byte_at_a_time_matches_single_read():
    assert _decode([PAYLOAD[i:i + 1] for i in range(len(PAYLOAD))]) == EVENTS  # nosec B101 - pytest assert in tests


def test_every_two_way_split_matches_single_read():
    for offset in range(len(PAYLOAD) + 1):
        got = _decode([PAYLOAD[:offset], PAYLOAD[offset:]])
        if got != EVENTS:
            raise AssertionError(f"split at {offset} produced {got}")


def test_multibyte_character_split_across_reads():
    line = ("data: " + json.dumps({"t": "☃"}, ensure_ascii=False) + "\n").encode("utf-8")
    snowman_at = line.index("☃".encode("utf-8"))
    chunks = [line[: snowman_at + 1], line[snowman_at + 1 : snowman_at + 2], line[snowman_at + 2 :]]
    assert _decode(chunks) == [{"t": "☃"}]  # nosec B101 - pytest assert in tests


def test_done_sentinel_terminates_and_discards_the_rest():
    decoder = StreamDecoder()
    events = decoder.feed(b'data: {"a": 1}\ndata: [DONE]\ndata: {"b": 2}\n')
    assert events == [{"a": 1}]  # nosec B101 - pytest assert in tests
    assert decoder.state is StreamState.TERMINATED and decoder.terminated  # nosec B101 - pytest assert in tests
    assert decoder.feed(b'data: {"c": 3}\n') == [] and decoder.finish() == []  # nosec B101 - pytest assert in tests


def test_malformed_frames_are_skipped_and_counted(log_capture):
    decoder = StreamDecoder()
    events = decoder.feed(b'data: {"a": 1}\ndata: {broken\ndata: [1, 2]\ndata: {"b": 2}\n')
    assert events == [{"a": 1}, {"b": 2}]  # nosec B101 - pytest assert in tests
    assert decoder.skipped == 2  # nosec B101 - pytest assert in tests
    assert sum("stream.frame_skipped" in r.getMessage() for r in log_capture) == 2  # nosec B101 - pytest assert in tests


@pytest.mark.parametrize(
    "noise",
    [b": keep-alive\n", b"event: message\n", b"id: 7\n", b"\n", b"retry: 1000\n"],
)
def test_non_data_lines_are_ignored(noise):
    assert _decode([noise + b'data: {"a": 1}\n']) == [{"a": 1}]  # nosec B101 - pytest assert in tests


def test_crlf_and_missing_space_after_prefix():
    assert _decode([b'data:{"a": 1}\r\n\r\ndata: [DONE]\r\n']) == [{"a": 1}]  # nosec B101 - pytest assert in tests


def test_trailing_partial_line_is_discarded_at_end_of_body():
    decoder = StreamDecoder()
    assert decoder.feed(b'data: {"a": 1}\ndata: {"b"') == [{"a": 1}]  # nosec B101 - pytest assert in tests
    assert decoder.finish() == [] and decoder.terminated  # nosec B101 - pytest assert in tests


def test_empty_feed_is_a_no_op():
    decoder = StreamDecoder()
    assert decoder.feed(b"") == [] and decoder.state is StreamState.STREAMING  # nosec B101 - pytest assert in tests
