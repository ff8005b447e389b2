"""
Error classification helpers mapping exceptions to normalized ErrorCode values.

Used at the transport seam to tag whatever the transport raised, and by
callers that want a single code for an arbitrary exception.
"""
from __future__ import annotations

from typing import Optional

import httpx

from .completion_error import CompletionError
from .error_code import ErrorCode


def _extract_status(exc: BaseException) -> Optional[int]:
    """Attempt to extract an HTTP status code from an exception.

    Supported attribute shapes (checked in order):
    - ``exc.status_code``
    - ``exc.response.status_code``
    Returns ``None`` if no valid status can be found.
    """
    val = getattr(exc, "status_code", None)
    if isinstance(val, int) and 100 <= val < 600:
        return val
    resp = getattr(exc, "response", None)
    if resp is not None:
        sc = getattr(resp, "status_code", None)
        if isinstance(sc, int) and 100 <= sc < 600:
            return sc
    return None


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. CompletionError passthrough.
        2. ``httpx.HTTPStatusError`` (or anything exposing a status) maps to
           ``REMOTE_API_FAULT``.
        3. Other ``httpx`` errors, timeouts and OS-level errors map to
           ``TRANSPORT_FAILURE``.
        4. ``UNKNOWN`` fallback.
    """
    if isinstance(exc, CompletionError):
        return exc.code
    if isinstance(exc, httpx.HTTPStatusError) or _extract_status(exc) is not None:
        return ErrorCode.REMOTE_API_FAULT
    if isinstance(exc, (httpx.HTTPError, httpx.InvalidURL, TimeoutError, OSError)):
        return ErrorCode.TRANSPORT_FAILURE
    return ErrorCode.UNKNOWN


def transport_failure(exc: BaseException, *, model: Optional[str] = None) -> CompletionError:
    """Wrap a transport exception without altering it (kept on ``raw``)."""
    return CompletionError(
        code=ErrorCode.TRANSPORT_FAILURE,
        message=f"{type(exc).__name__}: {exc}",
        model=model,
        raw=exc,
    )


__all__ = [
    "classify_exception",
    "transport_failure",
    "_extract_status",
]
