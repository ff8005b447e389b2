"""Incremental decoder for streaming completion bodies.

A streaming body is a sequence of JSON objects, optionally separated by
whitespace or newlines. :class:`StreamDecoder` pulls byte chunks from the
body only when it needs them, decodes UTF-8 incrementally, and returns one
:class:`StreamEvent` per object. It holds at most one partial frame in
memory and never reorders frames.

Failure semantics:
- Clean end of body between frames: ``next_frame`` returns ``None``.
- Invalid UTF-8, undecodable JSON, a non-object value, a frame that fails
  schema validation, or a partial frame larger than ``max_frame_chars``:
  ``CompletionError(MALFORMED_STREAM_FRAME)``.
- Bad JSON is reported as soon as it is seen. Only input that can still grow
  into a valid frame keeps the decoder reading.
- Exceptions raised by the chunk iterator itself propagate unchanged.
"""

from __future__ import annotations

import codecs
import json
import re
from typing import Any, Iterable, Iterator, Optional

from pydantic import ValidationError

from ...config.defaults import DEFAULT_MAX_FRAME_CHARS
from ..dto import StreamFrameDTO
from ..errors import CompletionError, ErrorCode
from ..models import StreamEvent

# Tokens that can still grow into valid JSON once more input arrives.
_LITERALS = ("true", "false", "null", "NaN", "Infinity", "-Infinity")
_PARTIAL_NUMBER = re.compile(r"\.|[eE][-+]?")
_PARTIAL_ESCAPE = re.compile(r"\\?u[0-9a-fA-F]{0,4}")


def _is_truncated(buffer: str, err: json.JSONDecodeError) -> bool:
    """True when ``err`` means the parser ran out of input rather than hit bad input."""
    if err.msg.startswith("Unterminated string"):
        return True
    tail = buffer[err.pos :]
    if not tail.strip():
        return True
    if any(lit.startswith(tail) for lit in _LITERALS):
        return True
    if err.msg.startswith("Invalid \\uXXXX escape"):
        return _PARTIAL_ESCAPE.fullmatch(tail) is not None
    return _PARTIAL_NUMBER.fullmatch(tail) is not None


def parse_frame(obj: Any, *, model: Optional[str] = None) -> StreamEvent:
    """Validate one decoded JSON value as a stream frame."""
    if not isinstance(obj, dict):
        raise CompletionError(
            code=ErrorCode.MALFORMED_STREAM_FRAME,
            message=f"stream frame must be a JSON object, got {type(obj).__name__}",
            model=model,
        )
    try:
        return StreamFrameDTO.model_validate(obj).to_event()
    except ValidationError as e:
        raise CompletionError(
            code=ErrorCode.MALFORMED_STREAM_FRAME,
            message=f"stream frame failed validation: {e.error_count()} error(s)",
            model=model,
            raw=e,
        ) from e


class StreamDecoder:
    """Turns an iterable of byte chunks into successive :class:`StreamEvent` values."""

    def __init__(
        self,
        chunks: Iterable[bytes],
        *,
        max_frame_chars: int = DEFAULT_MAX_FRAME_CHARS,
        model: Optional[str] = None,
    ) -> None:
        self._chunks: Iterator[bytes] = iter(chunks)
        self._text = codecs.getincrementaldecoder("utf-8")()
        self._json = json.JSONDecoder()
        self._buffer = ""
        self._eof = False
        self._closing_seen = False
        self._retry_chars = 0
        self._max_frame_chars = max_frame_chars
        self._model = model
        self.frames_decoded = 0

    @property
    def exhausted(self) -> bool:
        """True once the body ended and no buffered data remains."""
        return self._eof and not self._buffer.strip()

    def next_frame(self) -> Optional[StreamEvent]:
        """Decode and return the next frame, or ``None`` at a clean end of body."""
        obj = self._next_object()
        if obj is None:
            return None
        event = parse_frame(obj, model=self._model)
        self.frames_decoded += 1
        return event

    def _next_object(self) -> Optional[Any]:
        while True:
            self._buffer = self._buffer.lstrip()
            if self._buffer and self._should_decode():
                self._closing_seen = False
                try:
                    obj, end = self._json.raw_decode(self._buffer)
                except json.JSONDecodeError as e:
                    if self._eof:
                        raise self._malformed(f"undecodable frame at end of stream: {e.msg}", e) from e
                    if not _is_truncated(self._buffer, e):
                        raise self._malformed(f"undecodable frame: {e.msg} at char {e.pos}", e) from e
                    if len(self._buffer) > self._max_frame_chars:
                        raise self._malformed(
                            f"partial frame exceeds {self._max_frame_chars} characters", e
                        ) from e
                    self._retry_chars = 2 * len(self._buffer)
                else:
                    self._buffer = self._buffer[end:]
                    self._retry_chars = 0
                    return obj
            elif not self._buffer and self._eof:
                return None
            self._fill()

    def _should_decode(self) -> bool:
        # raw_decode restarts from the frame start; retry once the frame may be whole.
        return (
            self._eof
            or self._closing_seen
            or len(self._buffer) >= self._retry_chars
            or len(self._buffer) > self._max_frame_chars
        )

    def _fill(self) -> None:
        try:
            chunk = next(self._chunks)
        except StopIteration:
            self._eof = True
            chunk, final = b"", True
        else:
            final = False
        try:
            text = self._text.decode(chunk, final=final)
        except UnicodeDecodeError as e:
            raise self._malformed(f"stream body is not valid UTF-8: {e.reason}", e) from e
        if "}" in text:
            self._closing_seen = True
        self._buffer += text

    def _malformed(self, message: str, raw: Exception) -> CompletionError:
        return CompletionError(
            code=ErrorCode.MALFORMED_STREAM_FRAME,
            message=message,
            model=self._model,
            raw=raw,
        )


__all__ = ["StreamDecoder", "parse_frame"]
