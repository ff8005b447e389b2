"""Request builder: ``CompletionRequest`` -> wire-ready JSON body.

Responsibilities:
- Apply the configured default model when the request leaves ``model`` unset.
- Never invent a token budget (``answer`` supplies its own before delegating).
- Omit every unset optional field from the payload (absent, not ``null``).
- Never mutate the caller's request.

Serialization goes through ``CompletionRequestDTO`` so range checks and JSON
encoding failures surface as ``ErrorCode.SERIALIZATION_FAILED``.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from .base.dto import CompletionRequestDTO, RequestMetadataDTO
from .base.errors import CompletionError, ErrorCode
from .base.logging import LogContext, get_logger, normalized_log_event
from .base.models import TOP_DISABLED, CompletionRequest


@dataclass(frozen=True)
class SerializedRequest:
    """Immutable serialized form of one request.

    Attributes:
        body: UTF-8 JSON body sent to the endpoint.
        model: Model identifier actually sent (after defaults).
        payload: Read-only view of the JSON object in ``body``.
    """

    body: bytes
    model: str
    payload: Mapping[str, Any]

    @property
    def stream(self) -> bool:
        return bool(self.payload.get("stream"))


def _sampling_conflict(request: CompletionRequest) -> bool:
    return (
        request.temperature is not None
        and request.top_p is not None
        and request.top_p != TOP_DISABLED
    )


class RequestBuilder:
    """Builds :class:`SerializedRequest` values for one configured default model."""

    def __init__(self, default_model: str, logger: Optional[logging.Logger] = None) -> None:
        self._default_model = default_model
        self._logger = logger or get_logger("anthropic_complete.request_builder")

    @property
    def default_model(self) -> str:
        return self._default_model

    def build(self, request: CompletionRequest, *, stream: Optional[bool] = None) -> SerializedRequest:
        """Serialize ``request``; ``stream`` overrides ``request.stream`` when given.

        Raises:
            CompletionError: ``SERIALIZATION_FAILED`` when a value cannot be
                represented on the wire (out-of-range sampling controls,
                non-finite floats, non-encodable text).
        """
        model = request.model_name or self._default_model
        metadata = None
        if request.metadata is not None:
            metadata = RequestMetadataDTO(user_id=request.metadata.user_id)
        if _sampling_conflict(request):
            normalized_log_event(
                self._logger,
                "request.sampling_conflict",
                LogContext(operation="build", model=model),
                phase="build",
                level=logging.WARNING,
                note="temperature and top_p are both set; alter one of them, not both",
            )
        try:
            dto = CompletionRequestDTO(
                prompt=request.prompt,
                model=model,
                max_tokens_to_sample=request.max_tokens_to_sample,
                stop_sequences=list(request.stop_sequences) if request.stop_sequences is not None else None,
                stream=request.stream if stream is None else stream,
                temperature=request.temperature,
                top_k=request.top_k,
                top_p=request.top_p,
                metadata=metadata,
            )
        except ValidationError as e:
            raise CompletionError(
                code=ErrorCode.SERIALIZATION_FAILED,
                message=f"request cannot be serialized: {e.error_count()} invalid field(s): "
                + ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors()),
                model=model,
                raw=e,
            ) from e
        payload = dto.model_dump(mode="json", exclude_none=True)
        try:
            body = json.dumps(payload, ensure_ascii=False, allow_nan=False).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise CompletionError(
                code=ErrorCode.SERIALIZATION_FAILED,
                message=f"request cannot be encoded as JSON: {e}",
                model=model,
                raw=e,
            ) from e
        return SerializedRequest(body=body, model=model, payload=MappingProxyType(payload))


__all__ = ["RequestBuilder", "SerializedRequest"]
