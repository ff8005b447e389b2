"""Data model public surface.

Re-exports the request, result and fault value types from
``anthropic_complete.base.models_parts``.
"""

from .models_parts import (
    TOP_DISABLED,
    APIFault,
    CompletionRequest,
    CompletionResult,
    Model,
    RequestMetadata,
    StopReason,
    StreamEvent,
)

__all__ = [
    "APIFault",
    "CompletionRequest",
    "RequestMetadata",
    "TOP_DISABLED",
    "CompletionResult",
    "StreamEvent",
    "Model",
    "StopReason",
]
