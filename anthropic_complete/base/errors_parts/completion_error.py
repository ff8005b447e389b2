"""
Structured completion error exception types.

`CompletionError` carries a normalized `ErrorCode` so callers can branch on the
failure category without parsing messages. `RemoteAPIError` additionally
carries the decoded `APIFault` reported by the service.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..models_parts.api_fault import APIFault
from .error_code import ErrorCode


@dataclass
class CompletionError(Exception):
    """Represents a classified completion failure.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        model: Optional model identifier associated with the failure.
        raw: Optional original exception for diagnostics (for transport
            failures this is the transport's exception, unmodified).
    """

    code: ErrorCode
    message: str
    model: Optional[str] = None
    raw: Optional[BaseException] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.code.value}: {self.message}"


@dataclass
class RemoteAPIError(CompletionError):
    """The service rejected the request with a non-success status.

    The ``fault`` field exposes status code, fault type and message for
    caller-driven handling (``fault.retryable`` is only a hint).
    """

    fault: Optional[APIFault] = field(default=None)

    def __str__(self) -> str:  # pragma: no cover - trivial
        if self.fault is None:
            return super().__str__()
        return (
            f"{self.code.value}: code: {self.fault.status_code}, "
            f"type: {self.fault.type}, message: {self.fault.message}"
        )


__all__ = ["CompletionError", "RemoteAPIError"]
