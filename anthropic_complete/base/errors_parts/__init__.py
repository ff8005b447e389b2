"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `anthropic_complete.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .completion_error import CompletionError, RemoteAPIError
from .classification import classify_exception, transport_failure

__all__ = [
    "ErrorCode",
    "CompletionError",
    "RemoteAPIError",
    "classify_exception",
    "transport_failure",
]
