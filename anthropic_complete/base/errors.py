"""Completion error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``anthropic_complete.base.errors_parts`` (and the cancellation error) to
maintain a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.completion_error import CompletionError, RemoteAPIError
from .errors_parts.classification import classify_exception, transport_failure
from .cancellation_parts.cancelled_error import CancelledError

__all__ = [
    "ErrorCode",
    "CompletionError",
    "RemoteAPIError",
    "CancelledError",
    "classify_exception",
    "transport_failure",
]
