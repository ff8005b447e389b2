"""CompletionStream: a one-shot, cancellable iterator over stream frames.

Wraps the generator produced by the streaming path so callers can iterate
frames lazily instead of registering callbacks. The request is sent when
iteration starts; the response body is released when the iterator finishes,
raises, or is closed (also via ``with``).
"""
from __future__ import annotations

from typing import Generator, Iterator, Optional

from ..cancellation import CancellationToken
from ..models import StreamEvent


class CompletionStream:
    """High-level cancellable iterator over :class:`StreamEvent` values.

    Responsibilities:
      * Yield every frame in arrival order, the terminal frame last.
      * Expose ``cancel(reason)`` for cooperative cancellation (observed
        before the next frame is decoded).
      * Track the terminal event for post-hoc inspection.

    Not restartable: a second iteration yields nothing.
    """

    def __init__(self, events: Generator[StreamEvent, None, None], token: CancellationToken) -> None:
        self._events = events
        self._token = token
        self._terminal_event: Optional[StreamEvent] = None

    def __iter__(self) -> Iterator[StreamEvent]:
        for evt in self._events:
            if evt.is_terminal:
                self._terminal_event = evt
            yield evt

    def __enter__(self) -> "CompletionStream":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Stop the stream and release the response body (idempotent)."""
        self._events.close()

    def cancel(self, reason: Optional[str] = None) -> None:
        """Request cooperative cancellation of the underlying stream.

        Safe to invoke multiple times or after completion.
        """
        self._token.cancel(reason)

    @property
    def token(self) -> CancellationToken:
        return self._token

    @property
    def finished(self) -> bool:  # noqa: D401 - short property
        """Whether the terminal frame has been received."""
        return self._terminal_event is not None

    @property
    def terminal_event(self) -> Optional[StreamEvent]:  # noqa: D401 - short property
        """Return the terminal event if the stream completed."""
        return self._terminal_event


__all__ = ["CompletionStream"]
