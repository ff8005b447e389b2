"""Pydantic wire DTOs for the completion endpoint."""

from .completion import (
    CompletionRequestDTO,
    CompletionResponseDTO,
    ErrorEnvelopeDTO,
    RequestMetadataDTO,
    StreamFrameDTO,
)

__all__ = [
    "CompletionRequestDTO",
    "CompletionResponseDTO",
    "ErrorEnvelopeDTO",
    "RequestMetadataDTO",
    "StreamFrameDTO",
]
