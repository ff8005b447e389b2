"""StreamDecoder unit tests: framing, chunk boundaries and malformed input."""

from __future__ import annotations

import json
from typing import Iterator, List

import pytest

from anthropic_complete import CompletionError, ErrorCode, StopReason
from anthropic_complete.base.streaming import StreamDecoder, parse_frame
from anthropic_complete.tests.utils import frame


def _body(*frames, sep: str = "\n") -> bytes:
    return sep.join(json.dumps(f, ensure_ascii=False) for f in frames).encode("utf-8")


def _drain(decoder: StreamDecoder) -> List:
    out = []
    while (event := decoder.next_frame()) is not None:
        out.append(event)
    return out


def test_decodes_newline_delimited_frames() -> None:
    body = _body(frame(" a"), frame(" ab"), frame(" abc", "max_tokens"))
    events = _drain(StreamDecoder([body]))
    assert [e.completion for e in events] == [" a", " ab", " abc"]  # nosec B101
    assert events[-1].stop_reason is StopReason.MAX_TOKENS  # nosec B101


def test_concatenated_frames_without_separator() -> None:
    body = _body(frame("x"), frame("y", "stop_sequence"), sep="")
    assert [e.completion for e in _drain(StreamDecoder([body]))] == ["x", "y"]  # nosec B101


def test_one_byte_chunks_with_multibyte_text() -> None:
    body = _body(frame(" Grüße"), frame(" 世界", "stop_sequence"), sep="\r\n  ")
    chunks = [body[i : i + 1] for i in range(len(body))]
    decoder = StreamDecoder(chunks)
    events = _drain(decoder)
    assert [e.completion for e in events] == [" Grüße", " 世界"]  # nosec B101
    assert decoder.frames_decoded == 2  # nosec B101
    assert decoder.exhausted  # nosec B101


def test_null_and_empty_stop_reason_are_non_terminal() -> None:
    events = _drain(StreamDecoder([_body(frame("a", ""), frame("b", None))]))
    assert [e.is_terminal for e in events] == [False, False]  # nosec B101


def test_reads_chunks_lazily() -> None:
    pulled: List[int] = []

    def chunks() -> Iterator[bytes]:
        for i, f in enumerate([frame("a"), frame("b"), frame("c", "stop_sequence")]):
            pulled.append(i)
            yield _body(f)

    decoder = StreamDecoder(chunks())
    decoder.next_frame()
    assert pulled == [0]  # nosec B101


def test_empty_body_returns_none() -> None:
    decoder = StreamDecoder([b"", b"  \n"])
    assert decoder.next_frame() is None  # nosec B101
    assert decoder.exhausted  # nosec B101


def test_truncated_frame_at_end_is_malformed() -> None:
    decoder = StreamDecoder([_body(frame("a")), b'\n{"completion": "b'])
    assert decoder.next_frame().completion == "a"  # nosec B101
    with pytest.raises(CompletionError) as exc_info:
        decoder.next_frame()
    assert exc_info.value.code is ErrorCode.MALFORMED_STREAM_FRAME  # nosec B101


def test_invalid_utf8_is_malformed() -> None:
    with pytest.raises(CompletionError) as exc_info:
        StreamDecoder([b'{"completion": "\xff"}']).next_frame()
    assert exc_info.value.code is ErrorCode.MALFORMED_STREAM_FRAME  # nosec B101


def test_oversized_partial_frame_is_malformed() -> None:
    def chunks() -> Iterator[bytes]:
        yield b'{"completion": "'
        while True:
            yield b"x" * 16

    with pytest.raises(CompletionError) as exc_info:
        StreamDecoder(chunks(), max_frame_chars=64).next_frame()
    assert exc_info.value.code is ErrorCode.MALFORMED_STREAM_FRAME  # nosec B101
    assert "64" in exc_info.value.message  # nosec B101


def test_chunk_iterator_errors_propagate_unchanged() -> None:
    def chunks() -> Iterator[bytes]:
        yield _body(frame("a"))
        raise ConnectionResetError("peer reset")

    decoder = StreamDecoder(chunks())
    decoder.next_frame()
    with pytest.raises(ConnectionResetError):
        decoder.next_frame()


def test_parse_frame_rejects_non_objects_and_bad_fields() -> None:
    for bad in (["a"], "text", 3, {"completion": "x", "stop_reason": "unknown"}):
        with pytest.raises(CompletionError) as exc_info:
            parse_frame(bad, model="claude-v1")
        assert exc_info.value.code is ErrorCode.MALFORMED_STREAM_FRAME  # nosec B101
        assert exc_info.value.model == "claude-v1"  # nosec B101


def test_parse_frame_keeps_extra_fields() -> None:
    event = parse_frame(frame("x", "stop_sequence", stop="\n\nHuman:", truncated=False, log_id="l1", extra="ok"))
    assert event.stop == "\n\nHuman:"  # nosec B101
    assert event.truncated is False  # nosec B101
    assert event.log_id == "l1"  # nosec B101


def test_bad_json_fails_without_waiting_for_end_of_body() -> None:
    pulled: List[int] = []

    def chunks() -> Iterator[bytes]:
        yield _body(frame(" a")) + b"\n"
        yield b"{not json\n"
        while True:
            pulled.append(1)
            yield b"  \n"

    decoder = StreamDecoder(chunks())
    assert decoder.next_frame().completion == " a"  # nosec B101
    with pytest.raises(CompletionError) as exc_info:
        decoder.next_frame()
    assert exc_info.value.code is ErrorCode.MALFORMED_STREAM_FRAME  # nosec B101
    assert pulled == []  # nosec B101


def test_garbage_after_partial_literal_fails_before_end_of_body() -> None:
    pulled: List[int] = []

    def chunks() -> Iterator[bytes]:
        yield b'{"completion": "a", "truncated": tr'
        yield b"ix, "
        while True:
            pulled.append(1)
            yield b" "

    with pytest.raises(CompletionError) as exc_info:
        StreamDecoder(chunks()).next_frame()
    assert exc_info.value.code is ErrorCode.MALFORMED_STREAM_FRAME  # nosec B101
    assert len(pulled) < 100  # nosec B101


def test_tokens_split_mid_value_keep_reading() -> None:
    body = b'{"completion": "caf\\u00e9", "truncated": false, "n": -1.5e+3, "stop": null, "stop_reason": ""}\n'
    chunks = [body[i : i + 1] for i in range(len(body))]
    events = _drain(StreamDecoder(chunks))
    assert [e.completion for e in events] == ["café"]  # nosec B101
    assert events[0].truncated is False  # nosec B101


def test_large_frame_in_small_chunks_is_not_reparsed_per_chunk(monkeypatch) -> None:
    calls: List[int] = []
    original = json.JSONDecoder.raw_decode

    def counting(self, s, idx=0):
        calls.append(len(s))
        return original(self, s, idx)

    monkeypatch.setattr(json.JSONDecoder, "raw_decode", counting)
    body = _body(frame("x" * 4096, "stop_sequence"))
    chunks = [body[i : i + 8] for i in range(0, len(body), 8)]
    events = _drain(StreamDecoder(chunks))
    assert events[0].completion == "x" * 4096  # nosec B101
    assert len(calls) < 20  # nosec B101
