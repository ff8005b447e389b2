"""Models parts package (one class per module)."""

from .api_fault import APIFault
from .completion_request import TOP_DISABLED, CompletionRequest, RequestMetadata
from .completion_result import CompletionResult, StreamEvent
from .model import Model
from .stop_reason import StopReason

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
