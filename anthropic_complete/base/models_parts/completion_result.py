"""
CompletionResult and StreamEvent values returned by the client.

A non-streaming call returns one :class:`CompletionResult`. A streaming call
produces one :class:`StreamEvent` per frame; the first terminal event ends the
stream.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from .stop_reason import StopReason


@dataclass(frozen=True)
class CompletionResult:
    """Completion returned by the service.

    Attributes:
        completion: Generated text up to and excluding the stop sequence
            (possibly empty).
        stop_reason: Why sampling stopped; ``None`` while a stream is still
            producing output.
        stop: The stop sequence that was matched, when reported.
        truncated: Whether the service truncated the completion.
        log_id: Service-side trace identifier for the request.
    """

    completion: str
    stop_reason: Optional[StopReason] = None
    stop: Optional[str] = None
    truncated: Optional[bool] = None
    log_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary (enum values as strings)."""
        data = asdict(self)
        if self.stop_reason is not None:
            data["stop_reason"] = self.stop_reason.value
        return data


@dataclass(frozen=True)
class StreamEvent(CompletionResult):
    """One incremental streaming frame.

    Attributes:
        exception: Fault text the service reports mid-stream; a non-empty
            value makes the event terminal.
    """

    exception: Optional[str] = None

    @property
    def is_terminal(self) -> bool:
        """True when the frame carries a stop reason or an exception."""
        return self.stop_reason is not None or bool(self.exception)


__all__ = ["CompletionResult", "StreamEvent"]
