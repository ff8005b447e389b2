"""Cancellation error type.

Defines the public ``CancelledError`` raised when a completion call observes a
cancellation request. Kept isolated to satisfy one-class-per-file policy.
"""

from __future__ import annotations

from typing import Optional

from ..errors_parts.completion_error import CompletionError
from ..errors_parts.error_code import ErrorCode


class CancelledError(CompletionError):
    """Raised when an operation is cancelled cooperatively.

    This specialized error distinguishes caller-initiated cancellation from
    service or transport faults, so callers can suppress log noise for it.
    It always carries ``ErrorCode.CANCELLED``.
    """

    def __init__(self, reason: str = "operation cancelled", *, model: Optional[str] = None) -> None:
        super().__init__(code=ErrorCode.CANCELLED, message=reason, model=model)


__all__ = ["CancelledError"]
