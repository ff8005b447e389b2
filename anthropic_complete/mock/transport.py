"""Deterministic scripted transport for offline testing.

Purpose
-------
Provide a :class:`~anthropic_complete.base.http.Transport` that never opens a
socket. Responses are scripted up front (``respond_with`` for whole bodies,
``stream_frames`` for streaming bodies, ``fail_with`` for transport errors)
and served through ``httpx.MockTransport`` so the client sees genuine
``httpx.Response`` objects, including lazily-read streaming bodies.

Behaviour
---------
- Exactly one response is scripted at a time; it is served to every call
  until the next scripting call overwrites it.
- Every request passed to ``send`` is recorded, including ones that fail.
- Every body served is a :class:`TrackingByteStream`, so tests can assert the
  body was released exactly once and how many chunks were consumed.

External dependencies
---------------------
``httpx`` only.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, List, Mapping, Optional, Union

import httpx

Body = Union[bytes, str, Mapping[str, Any], None]


class TrackingByteStream(httpx.SyncByteStream):
    """Byte stream that counts consumed chunks and ``close`` calls.

    When ``error`` is set it is raised after the scripted chunks are exhausted,
    simulating a connection dropped mid-body.
    """

    def __init__(self, chunks: Iterable[bytes], *, error: Optional[BaseException] = None) -> None:
        self._chunks = list(chunks)
        self._error = error
        self.chunks_read = 0
        self.close_count = 0

    def __iter__(self) -> Iterator[bytes]:
        for chunk in self._chunks:
            self.chunks_read += 1
            yield chunk
        if self._error is not None:
            raise self._error

    def close(self) -> None:
        self.close_count += 1

    @property
    def closed(self) -> bool:
        return self.close_count > 0

    @property
    def total_chunks(self) -> int:
        return len(self._chunks)


@dataclass
class ScriptedResponse:
    """One scripted outcome of ``send``."""

    status: int = 200
    chunks: List[bytes] = field(default_factory=list)
    headers: Mapping[str, str] = field(default_factory=dict)
    error: Optional[BaseException] = None
    body_error: Optional[BaseException] = None


def _encode_body(body: Body) -> bytes:
    if body is None:
        return b""
    if isinstance(body, bytes):
        return body
    if isinstance(body, str):
        return body.encode("utf-8")
    return json.dumps(dict(body)).encode("utf-8")


def _split(data: bytes, chunk_size: Optional[int]) -> List[bytes]:
    if not chunk_size or chunk_size <= 0:
        return [data] if data else []
    return [data[i : i + chunk_size] for i in range(0, len(data), chunk_size)]


class ScriptedTransport:
    """In-memory transport that replays scripted responses.

    Example::

        transport = ScriptedTransport().respond_with(
            {"completion": " Hi", "stop_reason": "stop_sequence"}
        )
        client = CompletionClient(transport, ClientConfig(api_key="k"))
    """

    def __init__(self) -> None:
        self._scripted: Optional[ScriptedResponse] = None
        self._served: Optional[ScriptedResponse] = None
        self._client = httpx.Client(transport=httpx.MockTransport(self._handle))
        self.requests: List[httpx.Request] = []
        self.streams: List[TrackingByteStream] = []

    # ------------------------------------------------------------------
    # Scripting

    def respond_with(
        self,
        body: Body = None,
        status: int = 200,
        error: Optional[BaseException] = None,
        *,
        headers: Optional[Mapping[str, str]] = None,
        chunk_size: Optional[int] = None,
    ) -> "ScriptedTransport":
        """Serve ``body`` with ``status`` from now on; ``error`` makes ``send`` raise instead."""
        self._scripted = ScriptedResponse(
            status=status,
            chunks=_split(_encode_body(body), chunk_size),
            headers=dict(headers or {}),
            error=error,
        )
        return self

    def stream_frames(
        self,
        frames: Iterable[Union[Mapping[str, Any], str, bytes]],
        status: int = 200,
        *,
        headers: Optional[Mapping[str, str]] = None,
        separator: bytes = b"\n",
        chunk_size: Optional[int] = None,
        body_error: Optional[BaseException] = None,
    ) -> "ScriptedTransport":
        """Serve a streaming body made of ``frames`` from now on.

        Mapping frames are JSON-encoded; ``str``/``bytes`` frames are sent
        verbatim (useful for malformed input). Without ``chunk_size`` each
        frame arrives as its own chunk. ``body_error`` is raised by the body
        after the last chunk.
        """
        encoded = [_encode_body(f) + separator for f in frames]
        if chunk_size:
            chunks = _split(b"".join(encoded), chunk_size)
        else:
            chunks = encoded
        self._scripted = ScriptedResponse(
            status=status, chunks=chunks, headers=dict(headers or {}), body_error=body_error
        )
        return self

    def fail_with(self, error: BaseException) -> "ScriptedTransport":
        """Make ``send`` raise ``error`` from now on."""
        self._scripted = ScriptedResponse(error=error)
        return self

    # ------------------------------------------------------------------
    # Transport protocol

    def send(self, request: httpx.Request, *, stream: bool = False) -> httpx.Response:
        self.requests.append(request)
        scripted = self._next()
        if scripted.error is not None:
            raise scripted.error
        self._served = scripted
        return self._client.send(request, stream=stream)

    def close(self) -> None:
        self._client.close()

    # ------------------------------------------------------------------
    # Inspection helpers

    @property
    def call_count(self) -> int:
        return len(self.requests)

    @property
    def last_request(self) -> Optional[httpx.Request]:
        return self.requests[-1] if self.requests else None

    def last_json(self) -> Any:
        """Decoded JSON body of the most recent request."""
        if self.last_request is None:
            raise LookupError("no request has been sent")
        return json.loads(self.last_request.content)

    @property
    def last_stream(self) -> Optional[TrackingByteStream]:
        return self.streams[-1] if self.streams else None

    # ------------------------------------------------------------------
    # Internals

    def _next(self) -> ScriptedResponse:
        if self._scripted is None:
            raise LookupError("no response scripted; call respond_with() first")
        return self._scripted

    def _handle(self, request: httpx.Request) -> httpx.Response:
        scripted = self._served
        if scripted is None:  # pragma: no cover - send always sets it
            raise LookupError("no response scripted")
        body = TrackingByteStream(scripted.chunks, error=scripted.body_error)
        self.streams.append(body)
        return httpx.Response(scripted.status, headers=scripted.headers, stream=body, request=request)


__all__ = ["ScriptedTransport", "ScriptedResponse", "TrackingByteStream"]
