"""Streaming path for the completion client.

Lifecycle of one streaming call (one request, one response body):

1. Opening: validate, check cancellation, build with ``stream: true``, send.
   A non-success status is classified exactly like the synchronous path and
   no frame is ever read.
2. Open: ``on_open(response)`` runs once; an exception from it aborts the call.
3. Streaming: before every frame the cancellation token is checked, then one
   frame is decoded and yielded. End of body without a terminal frame is
   ``UNEXPECTED_STREAM_TERMINATION``.
4. Terminal: the first frame with a stop reason or an exception is yielded
   last; the response is closed on every exit path, exactly once.

``stream_impl`` layers the callback contract on top: non-terminal frames go
to ``on_update`` in arrival order and the terminal frame is returned (it is
never passed to ``on_update``).
"""

from __future__ import annotations

import logging
import time
from contextlib import closing
from typing import TYPE_CHECKING, Callable, Generator, Optional

import httpx

from .base.cancellation import CancellationToken, CancelledError
from .base.errors import CompletionError, ErrorCode, transport_failure
from .base.logging import LogContext, normalized_log_event
from .base.models import CompletionRequest, StreamEvent
from .base.streaming import StreamDecoder
from .helpers import build_http_request, classify_error_response, send_request

if TYPE_CHECKING:
    from .client import CompletionClient

OnOpen = Callable[[httpx.Response], None]
OnUpdate = Callable[[StreamEvent], None]


def iter_stream_events(
    client: "CompletionClient",
    request: CompletionRequest,
    token: CancellationToken,
    on_open: Optional[OnOpen] = None,
) -> Generator[StreamEvent, None, None]:
    """Yield every frame of one streaming call, the terminal frame last."""
    client._validator.validate(request.prompt)
    model = request.model_name or client._builder.default_model
    token.raise_if_cancelled(model=model)
    serialized = client._builder.build(request, stream=True)
    ctx = LogContext(operation="stream", model=serialized.model, endpoint=client._config.endpoint)
    normalized_log_event(
        client._logger,
        "stream.start",
        ctx,
        phase="start",
        max_tokens=request.max_tokens_to_sample,
        temperature=request.temperature,
    )
    t0 = time.perf_counter()
    emitted = 0
    first_frame_ms: Optional[float] = None

    response: Optional[httpx.Response] = None
    try:
        response = send_request(client, build_http_request(client._config, serialized), stream=True, model=serialized.model)
        if not response.is_success:
            raise classify_error_response(response, model=serialized.model)
        normalized_log_event(client._logger, "stream.open", ctx, phase="open", status_code=response.status_code)
        if on_open is not None:
            on_open(response)

        decoder = StreamDecoder(
            response.iter_bytes(),
            max_frame_chars=client._config.max_frame_chars,
            model=serialized.model,
        )
        while True:
            token.raise_if_cancelled(model=serialized.model)
            try:
                event = decoder.next_frame()
            except (httpx.HTTPError, httpx.StreamError, OSError) as e:
                raise transport_failure(e, model=serialized.model) from e
            if event is None:
                raise CompletionError(
                    code=ErrorCode.UNEXPECTED_STREAM_TERMINATION,
                    message=f"stream ended after {emitted} frame(s) without a terminal frame",
                    model=serialized.model,
                )
            if first_frame_ms is None:
                first_frame_ms = (time.perf_counter() - t0) * 1000.0
            emitted += 1
            if event.is_terminal:
                if event.exception:
                    normalized_log_event(
                        client._logger,
                        "stream.exception",
                        ctx,
                        phase="finalize",
                        emitted=emitted,
                        level=logging.WARNING,
                        exception=event.exception,
                        log_id=event.log_id,
                    )
                normalized_log_event(
                    client._logger,
                    "stream.end",
                    ctx,
                    phase="finalize",
                    emitted=emitted,
                    stop_reason=event.stop_reason.value if event.stop_reason else None,
                    log_id=event.log_id,
                    metrics={
                        "time_to_first_frame_ms": first_frame_ms,
                        "total_duration_ms": (time.perf_counter() - t0) * 1000.0,
                        "emitted_count": emitted,
                    },
                )
                yield event
                return
            yield event
    except CancelledError as e:
        normalized_log_event(client._logger, "stream.cancelled", ctx, phase="mid_stream", emitted=emitted, reason=e.message)
        raise
    except CompletionError as e:
        normalized_log_event(
            client._logger,
            "stream.error",
            ctx,
            phase="mid_stream" if emitted else "open",
            emitted=emitted,
            error_code=e.code.value,
            level=logging.WARNING,
            error=e.message,
        )
        raise
    finally:
        if response is not None:
            response.close()


def stream_impl(
    client: "CompletionClient",
    request: CompletionRequest,
    on_open: Optional[OnOpen],
    on_update: Optional[OnUpdate],
    token: CancellationToken,
) -> StreamEvent:
    """Callback form of the streaming path; returns the terminal frame."""
    with closing(iter_stream_events(client, request, token, on_open)) as events:
        for event in events:
            if event.is_terminal:
                return event
            if on_update is not None:
                on_update(event)
    # iter_stream_events always ends with a terminal frame or an exception.
    raise CompletionError(
        code=ErrorCode.UNEXPECTED_STREAM_TERMINATION,
        message="stream ended without a terminal frame",
        model=request.model_name,
    )


__all__ = ["OnOpen", "OnUpdate", "iter_stream_events", "stream_impl"]
