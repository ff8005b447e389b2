"""
Normalized completion error codes (taxonomy).

Defines the `ErrorCode` enumeration raised by the completion client. Values are
lowercase snake_case and are considered a stable public contract for logging
and caller-side handling.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated error codes representing completion failure categories.

    Local, raised before any network action:
        ``INVALID_PROMPT_FORMAT``, ``SERIALIZATION_FAILED``.
    Transport:
        ``TRANSPORT_FAILURE`` wraps the transport's own exception verbatim.
    Remote service:
        ``REMOTE_API_FAULT`` for non-success statuses; the ``MALFORMED_*``
        codes and ``UNEXPECTED_STREAM_TERMINATION`` for protocol violations.
    Caller initiated:
        ``CANCELLED``.
    """

    INVALID_PROMPT_FORMAT = "invalid_prompt_format"
    SERIALIZATION_FAILED = "serialization_failed"
    TRANSPORT_FAILURE = "transport_failure"
    REMOTE_API_FAULT = "remote_api_fault"
    MALFORMED_ERROR_BODY = "malformed_error_body"
    MALFORMED_SUCCESS_BODY = "malformed_success_body"
    MALFORMED_STREAM_FRAME = "malformed_stream_frame"
    CANCELLED = "cancelled"
    UNEXPECTED_STREAM_TERMINATION = "unexpected_stream_termination"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
