"""ZaguanClient construction and endpoint wiring.

Endpoints are driven through ``FakeTransport`` so each test can assert the
method, path, query and body that reached the transport boundary.
"""
from __future__ import annotations

import io
import json

import pytest

from zaguan_sdk import RequestOptions, RetryConfig, ZaguanClient, ZaguanError
from zaguan_sdk.base.errors import APIError

from .helpers import FakeResponse, FakeTransport, sse

BASE = "https://gw.test"


def _client(*responses, **kwargs):
    transport = FakeTransport(*responses)
    return ZaguanClient(BASE, "sk-test", transport=transport, **kwargs), transport


def _body(call):
    return json.loads(call.descriptor.content.decode("utf-8"))


# ---- construction ----


@pytest.mark.parametrize(
    "base_url, api_key, kwargs, message",
    [
        (None, "k", {}, "baseUrl is required and must be a non-empty string"),
        ("   ", "k", {}, "baseUrl is required and must be a non-empty string"),
        ("not a url", "k", {}, "baseUrl must be a valid URL"),
        ("ftp://gw.test", "k", {}, "baseUrl must be a valid URL"),
        (BASE, None, {}, "apiKey is required and must be a non-empty string"),
        (BASE, "", {}, "apiKey is required and must be a non-empty string"),
        (BASE, "k", {"timeout_ms": 0}, "timeoutMs must be a positive number"),
        (BASE, "k", {"timeout_ms": -5}, "timeoutMs must be a positive number"),
    ],
)
def test_invalid_construction(base_url, api_key, kwargs, message):
    with pytest.raises(ZaguanError) as ei:
        ZaguanClient(base_url, api_key, transport=FakeTransport(), **kwargs)
    assert ei.value.message == message  # nosec B101 - pytest assert in tests


def test_trailing_slash_is_stripped():
    client = ZaguanClient(BASE + "/", "k", transport=FakeTransport())
    assert client.base_url == BASE  # nosec B101 - pytest assert in tests
    assert repr(client) == f"ZaguanClient(base_url='{BASE}')"  # nosec B101 - pytest assert in tests


def test_settings_fall_back_to_environment(monkeypatch):
    monkeypatch.setenv("ZAGUAN_BASE_URL", "https://env.gw")
    monkeypatch.setenv("ZAGUAN_API_KEY", "sk-env")
    monkeypatch.setenv("ZAGUAN_TIMEOUT_MS", "2500")
    monkeypatch.setenv("ZAGUAN_MAX_RETRIES", "2")
    client = ZaguanClient(transport=FakeTransport())
    assert client.base_url == "https://env.gw" and client.timeout_ms == 2500  # nosec B101 - pytest assert in tests
    assert client.retry_config.max_retries == 2  # nosec B101 - pytest assert in tests


def test_retry_mapping_merges_over_config(monkeypatch):
    monkeypatch.setenv("ZAGUAN_INITIAL_DELAY_MS", "50")
    client = ZaguanClient(BASE, "k", retry={"max_retries": 3}, transport=FakeTransport())
    assert client.retry_config.max_retries == 3 and client.retry_config.initial_delay_ms == 50  # nosec B101 - pytest assert in tests
    explicit = RetryConfig(max_retries=1)
    assert ZaguanClient(BASE, "k", retry=explicit, transport=FakeTransport()).retry_config is explicit  # nosec B101 - pytest assert in tests


def test_close_and_context_manager_close_transport():
    client, transport = _client()
    with client as c:
        assert c is client  # nosec B101 - pytest assert in tests
    assert transport.closed  # nosec B101 - pytest assert in tests


# ---- chat ----


def test_chat_posts_validated_payload():
    client, transport = _client(FakeResponse.json({"id": "chatcmpl-1"}))
    result = client.chat(
        {"model": "openai/gpt-4o-mini", "messages": [{"role": "user", "content": "hi"}], "stream": True},
        RequestOptions(request_id="cid-7", headers={"X-Extra": "1"}),
    )
    assert result == {"id": "chatcmpl-1"}  # nosec B101 - pytest assert in tests
    call = transport.calls[0]
    assert call.descriptor.method == "POST" and call.descriptor.url == f"{BASE}/v1/chat/completions"  # nosec B101 - pytest assert in tests
    headers = call.descriptor.headers
    assert headers["Authorization"] == "Bearer sk-test" and headers["X-Request-Id"] == "cid-7"  # nosec B101 - pytest assert in tests
    assert headers["Content-Type"] == "application/json" and headers["X-Extra"] == "1"  # nosec B101 - pytest assert in tests
    assert "stream" not in _body(call) and call.stream is False  # nosec B101 - pytest assert in tests


@pytest.mark.parametrize(
    "request_body, message",
    [
        ({"messages": [{"role": "user", "content": "x"}]}, "model is required and must be a non-empty string"),
        ({"model": "m", "messages": []}, "messages is required and must be a non-empty array"),
    ],
)
def test_chat_validation_fails_before_io(request_body, message):
    client, transport = _client()
    with pytest.raises(ZaguanError) as ei:
        client.chat(request_body)
    assert ei.value.message == message  # nosec B101 - pytest assert in tests
    assert transport.calls == []  # nosec B101 - pytest assert in tests


def test_chat_rejects_out_of_range_temperature():
    client, _ = _client()
    with pytest.raises(ZaguanError) as ei:
        client.chat({"model": "m", "messages": [{"role": "user", "content": "x"}], "temperature": 3})
    assert "temperature" in ei.value.message  # nosec B101 - pytest assert in tests


def test_chat_stream_validates_eagerly_and_connects_lazily():
    client, transport = _client(FakeResponse(200, sse({"choices": [{"index": 0, "delta": {"content": "a"}}]})))
    with pytest.raises(ZaguanError):
        client.chat_stream({"model": "", "messages": [{"role": "user", "content": "x"}]})
    stream = client.chat_stream({"model": "m", "messages": [{"role": "user", "content": "x"}]})
    assert transport.calls == []  # nosec B101 - nothing sent before iteration
    chunks = list(stream)
    assert len(chunks) == 1 and _body(transport.calls[0])["stream"] is True  # nosec B101 - pytest assert in tests
    assert transport.calls[0].stream is True  # nosec B101 - pytest assert in tests


def test_api_error_surfaces_from_chat():
    client, _ = _client(FakeResponse.json({"error": {"message": "bad key"}}, status_code=401))
    with pytest.raises(APIError) as ei:
        client.chat({"model": "m", "messages": [{"role": "user", "content": "x"}]})
    assert ei.value.status_code == 401 and ei.value.message == "bad key"  # nosec B101 - pytest assert in tests


# ---- models / capabilities / credits ----


def test_list_models_unwraps_data():
    client, transport = _client(FakeResponse.json({"object": "list", "data": [{"id": "a"}, {"id": "b"}]}))
    assert [m["id"] for m in client.list_models()] == ["a", "b"]  # nosec B101 - pytest assert in tests
    assert transport.calls[0].descriptor.method == "GET"  # nosec B101 - pytest assert in tests
    assert transport.calls[0].descriptor.url == f"{BASE}/v1/models"  # nosec B101 - pytest assert in tests


def test_capabilities_query_drops_unset_filters():
    client, transport = _client(FakeResponse.json([{"model_id": "x"}]))
    assert client.get_capabilities(provider="openai", supports_vision=True) == [{"model_id": "x"}]  # nosec B101 - pytest assert in tests
    assert transport.calls[0].descriptor.url == f"{BASE}/v1/capabilities?provider=openai&supports_vision=true"  # nosec B101 - pytest assert in tests


def test_credits_endpoints_paths():
    client, transport = _client(
        FakeResponse.json({"credits_remaining": 10}),
        FakeResponse.json({"entries": []}),
        FakeResponse.json({"stats": []}),
    )
    client.get_credits_balance()
    client.get_credits_history(page=2, page_size=50)
    client.get_credits_stats(group_by="day")
    urls = [c.descriptor.url for c in transport.calls]
    assert urls == [  # nosec B101 - pytest assert in tests
        f"{BASE}/v1/credits/balance",
        f"{BASE}/v1/credits/history?page=2&page_size=50",
        f"{BASE}/v1/credits/stats?group_by=day",
    ]


# ---- media ----


def test_generate_speech_returns_bytes():
    client, transport = _client(FakeResponse(200, b"\xff\xfbMP3"))
    audio = client.generate_speech({"model": "tts-1", "input": "hi", "voice": "alloy"})
    assert audio == b"\xff\xfbMP3"  # nosec B101 - pytest assert in tests
    assert transport.calls[0].descriptor.url == f"{BASE}/v1/audio/speech"  # nosec B101 - pytest assert in tests


def test_transcription_is_multipart():
    client, transport = _client(FakeResponse.json({"text": "hello"}))
    upload = io.BytesIO(b"RIFF")
    upload.name = "/tmp/clip.wav"
    result = client.transcribe_audio(upload, "whisper-1", temperature=0.2, timestamp_granularities=["word", "segment"])
    assert result == {"text": "hello"}  # nosec B101 - pytest assert in tests
    d = transport.calls[0].descriptor
    assert d.url == f"{BASE}/v1/audio/transcriptions" and d.content is None  # nosec B101 - pytest assert in tests
    assert "Content-Type" not in d.headers  # nosec B101 - boundary chosen by the transport
    assert d.multipart.files["file"][0] == "clip.wav"  # nosec B101 - pytest assert in tests
    assert dict(d.multipart.data) == {  # nosec B101 - pytest assert in tests
        "model": "whisper-1",
        "temperature": "0.2",
        "timestamp_granularities[]": "word,segment",
    }


def test_image_edit_includes_optional_mask():
    client, transport = _client(FakeResponse.json({"data": []}), FakeResponse.json({"data": []}))
    client.edit_image(b"png", "make it blue", mask=("m.png", b"mask", "image/png"), n=2)
    client.create_image_variation(b"png")
    edit, variation = (c.descriptor for c in transport.calls)
    assert edit.url.endswith("/v1/images/edits") and set(edit.multipart.files) == {"image", "mask"}  # nosec B101 - pytest assert in tests
    assert edit.multipart.files["image"] == ("image.png", b"png")  # nosec B101 - pytest assert in tests
    assert dict(edit.multipart.data) == {"prompt": "make it blue", "n": "2"}  # nosec B101 - pytest assert in tests
    assert variation.url.endswith("/v1/images/variations") and dict(variation.multipart.data) == {}  # nosec B101 - pytest assert in tests


@pytest.mark.parametrize(
    "method, args, path",
    [
        ("generate_image", ({"prompt": "cat"},), "/v1/images/generations"),
        ("create_embeddings", ({"model": "e", "input": "x"},), "/v1/embeddings"),
        ("create_moderation", ({"input": "x"},), "/v1/moderations"),
        ("create_assistant", ({"model": "m"},), "/v1/assistants"),
        ("update_assistant", ("asst_1", {"name": "n"}), "/v1/assistants/asst_1"),
        ("create_run", ("th_1", {"assistant_id": "asst_1"}), "/v1/threads/th_1/runs"),
        ("cancel_run", ("th_1", "run_1"), "/v1/threads/th_1/runs/run_1/cancel"),
        ("create_batch", ({"input_file_id": "f"},), "/v1/batches"),
        ("cancel_batch", ("b_1",), "/v1/batches/b_1/cancel"),
        ("create_fine_tuning_job", ({"model": "m"},), "/v1/fine_tuning/jobs"),
        ("cancel_fine_tuning_job", ("ft_1",), "/v1/fine_tuning/jobs/ft_1/cancel"),
    ],
)
def test_post_endpoints(method, args, path):
    client, transport = _client(FakeResponse.json({"ok": True}))
    assert getattr(client, method)(*args) == {"ok": True}  # nosec B101 - pytest assert in tests
    d = transport.calls[0].descriptor
    assert d.method == "POST" and d.url == BASE + path  # nosec B101 - pytest assert in tests
    assert isinstance(_body(transport.calls[0]), dict)  # nosec B101 - always a JSON object body


def test_create_thread_defaults_to_empty_body():
    client, transport = _client(FakeResponse.json({"id": "th_1"}))
    client.create_thread()
    assert _body(transport.calls[0]) == {}  # nosec B101 - pytest assert in tests


@pytest.mark.parametrize(
    "method, args, http_method, path",
    [
        ("retrieve_assistant", ("asst_1",), "GET", "/v1/assistants/asst_1"),
        ("delete_assistant", ("asst_1",), "DELETE", "/v1/assistants/asst_1"),
        ("retrieve_thread", ("th_1",), "GET", "/v1/threads/th_1"),
        ("delete_thread", ("th_1",), "DELETE", "/v1/threads/th_1"),
        ("retrieve_run", ("th_1", "run_1"), "GET", "/v1/threads/th_1/runs/run_1"),
        ("retrieve_batch", ("b_1",), "GET", "/v1/batches/b_1"),
        ("list_batches", (), "GET", "/v1/batches"),
        ("list_fine_tuning_jobs", (), "GET", "/v1/fine_tuning/jobs"),
        ("retrieve_fine_tuning_job", ("ft_1",), "GET", "/v1/fine_tuning/jobs/ft_1"),
    ],
)
def test_get_and_delete_endpoints(method, args, http_method, path):
    client, transport = _client(FakeResponse.json({"id": "x"}))
    assert getattr(client, method)(*args) == {"id": "x"}  # nosec B101 - pytest assert in tests
    d = transport.calls[0].descriptor
    assert d.method == http_method and d.url == BASE + path and d.content is None  # nosec B101 - pytest assert in tests


def test_fine_tuning_events_unwraps_data():
    client, transport = _client(FakeResponse.json({"data": [{"message": "started"}]}))
    assert client.list_fine_tuning_events("ft_1") == [{"message": "started"}]  # nosec B101 - pytest assert in tests
    assert transport.calls[0].descriptor.url == f"{BASE}/v1/fine_tuning/jobs/ft_1/events"  # nosec B101 - pytest assert in tests


def test_empty_success_body_is_empty_object():
    client, _ = _client(FakeResponse(204, b""))
    assert client.delete_thread("th_1") == {}  # nosec B101 - pytest assert in tests
