"""
Pydantic DTOs for the completion wire protocol.

Purpose
-------
Define the exact JSON shapes exchanged with the completion endpoint so that
serialization and decoding are validated in one place:

- ``CompletionRequestDTO``: outbound body. Dumped with ``exclude_none=True`` so
  every unset optional field is absent rather than ``null``.
- ``CompletionResponseDTO``: non-streaming success body.
- ``StreamFrameDTO``: one frame of a streaming body.
- ``ErrorEnvelopeDTO``: body of a non-success response.

External dependencies: Pydantic only. Validation either succeeds or raises
``pydantic.ValidationError``; callers translate that into the matching
``ErrorCode``.
"""

from __future__ import annotations

from typing import Annotated, Any, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator, model_validator

from ..models import CompletionResult, StopReason, StreamEvent, TOP_DISABLED


class RequestMetadataDTO(BaseModel):
    """Wire shape of ``metadata``; ``user_id`` is an opaque identifier."""

    model_config = ConfigDict(extra="forbid")

    user_id: Optional[str] = None


class CompletionRequestDTO(BaseModel):
    """Outbound completion body with numeric bounds enforced.

    Raises:
        ValidationError: Empty model, non-positive token budget, sampling
            controls out of range, or non-finite floats.
    """

    model_config = ConfigDict(extra="forbid")

    prompt: str
    model: str = Field(..., min_length=1)
    max_tokens_to_sample: int = Field(..., gt=0)
    stop_sequences: Optional[List[str]] = None
    stream: Optional[bool] = None
    temperature: Optional[float] = Field(default=None, ge=0.0, le=1.0, allow_inf_nan=False)
    top_k: Optional[int] = None
    top_p: Optional[float] = Field(default=None, allow_inf_nan=False)
    metadata: Optional[RequestMetadataDTO] = None

    @field_validator("top_k")
    @classmethod
    def _validate_top_k(cls, value: Optional[int]) -> Optional[int]:
        if value is None or value == TOP_DISABLED or value > 0:
            return value
        raise ValueError("top_k must be positive or -1 (disabled)")

    @field_validator("top_p")
    @classmethod
    def _validate_top_p(cls, value: Optional[float]) -> Optional[float]:
        if value is None or value == TOP_DISABLED or 0.0 <= value <= 1.0:
            return value
        raise ValueError("top_p must be within [0, 1] or -1 (disabled)")

    @field_validator("metadata")
    @classmethod
    def _drop_empty_metadata(cls, value: Optional[RequestMetadataDTO]) -> Optional[RequestMetadataDTO]:
        if value is not None and value.user_id is None:
            return None
        return value


def _blank_to_none(value: Any) -> Any:
    return None if value == "" else value


class CompletionResponseDTO(BaseModel):
    """Non-streaming success body: ``completion`` plus ``stop_reason``."""

    model_config = ConfigDict(extra="ignore")

    completion: str
    stop_reason: Annotated[Optional[StopReason], BeforeValidator(_blank_to_none)] = None
    stop: Optional[str] = None
    truncated: Optional[bool] = None
    log_id: Optional[str] = None

    def to_result(self) -> CompletionResult:
        return CompletionResult(
            completion=self.completion,
            stop_reason=self.stop_reason,
            stop=self.stop,
            truncated=self.truncated,
            log_id=self.log_id,
        )


class StreamFrameDTO(CompletionResponseDTO):
    """One streaming frame; intermediate frames carry an empty ``stop_reason``."""

    completion: str = ""
    exception: Annotated[Optional[str], BeforeValidator(_blank_to_none)] = None

    def to_event(self) -> StreamEvent:
        return StreamEvent(
            completion=self.completion,
            stop_reason=self.stop_reason,
            stop=self.stop,
            truncated=self.truncated,
            log_id=self.log_id,
            exception=self.exception,
        )


class ErrorEnvelopeDTO(BaseModel):
    """Error body: fault ``type`` and ``message``.

    Accepts both the nested ``{"error": {"type", "message"}}`` envelope and the
    flat ``{"type", "message"}`` shape.
    """

    model_config = ConfigDict(extra="ignore")

    type: str
    message: str

    @model_validator(mode="before")
    @classmethod
    def _unwrap_error(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get("error"), dict):
            return data["error"]
        return data


__all__ = [
    "RequestMetadataDTO",
    "CompletionRequestDTO",
    "CompletionResponseDTO",
    "StreamFrameDTO",
    "ErrorEnvelopeDTO",
]
