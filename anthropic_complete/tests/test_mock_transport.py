"""ScriptedTransport behaviour: persisted responses, recording and body tracking."""

from __future__ import annotations

import httpx
import pytest

from anthropic_complete.mock import ScriptedTransport


def _post() -> httpx.Request:
    return httpx.Request("POST", "https://api.test/v1/complete", content=b"{}")


def test_response_persists_until_overwritten() -> None:
    transport = ScriptedTransport()
    transport.respond_with(b"Hello, World!", 200)
    for _ in range(2):
        response = transport.send(_post())
        assert response.status_code == 200  # nosec B101
        assert response.content == b"Hello, World!"  # nosec B101
    transport.respond_with("gone", 404)
    assert transport.send(_post()).status_code == 404  # nosec B101
    assert transport.call_count == 3  # nosec B101
    transport.close()


def test_unscripted_send_raises_lookup_error() -> None:
    with pytest.raises(LookupError):
        ScriptedTransport().send(_post())


def test_scripted_error_is_raised_and_request_recorded() -> None:
    transport = ScriptedTransport().respond_with(None, 0, httpx.ConnectError("refused"))
    with pytest.raises(httpx.ConnectError):
        transport.send(_post())
    assert transport.call_count == 1  # nosec B101
    assert transport.streams == []  # nosec B101


def test_streamed_body_is_lazy_and_tracks_close() -> None:
    transport = ScriptedTransport().stream_frames([{"completion": "a"}, "raw"], chunk_size=4)
    response = transport.send(_post(), stream=True)
    body = transport.last_stream
    assert body.chunks_read == 0  # nosec B101
    chunks = list(response.iter_bytes())
    assert b"".join(chunks) == b'{"completion": "a"}\nraw\n'  # nosec B101
    assert body.chunks_read == body.total_chunks  # nosec B101
    response.close()
    assert body.close_count == 1  # nosec B101
