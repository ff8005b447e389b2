"""Completion client helpers.

Purpose:
- Hold the request/response plumbing shared by the synchronous and streaming
  paths (HTTP request construction, the single transport send, error-body
  classification, success-body decoding) plus the synchronous ``complete``
  flow, keeping ``client.py`` a thin facade.

External dependencies:
- ``httpx`` request/response objects, exchanged through the injected
  :class:`~anthropic_complete.base.http.Transport`.
- ``pydantic`` DTOs for body decoding.

Failure semantics:
- Every failure is raised as a :class:`CompletionError` carrying its
  :class:`ErrorCode`; the response is closed on every exit path.
- No retries and no timeouts are applied here.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Optional

import httpx
from pydantic import ValidationError

from .base.cancellation import CancellationToken
from .base.dto import CompletionResponseDTO, ErrorEnvelopeDTO
from .base.errors import (
    CompletionError,
    ErrorCode,
    RemoteAPIError,
    classify_exception,
    transport_failure,
)
from .base.logging import LogContext, normalized_log_event
from .base.models import APIFault, CompletionRequest, CompletionResult
from .config import ClientConfig
from .request_builder import SerializedRequest

if TYPE_CHECKING:
    from .client import CompletionClient


def build_http_request(config: ClientConfig, serialized: SerializedRequest) -> httpx.Request:
    """Construct the single POST sent to the completion endpoint."""
    return httpx.Request(
        "POST",
        config.endpoint,
        headers={
            "content-type": "application/json",
            "accept": "application/json",
            "x-api-key": config.api_key,
            "client": config.client_id,
        },
        content=serialized.body,
    )


def send_request(client: "CompletionClient", http_request: httpx.Request, *, stream: bool, model: str) -> httpx.Response:
    """Perform the one transport exchange for a call.

    Transport-level failures are tagged ``TRANSPORT_FAILURE`` with the original
    exception preserved on ``raw``; anything else propagates untouched.
    """
    try:
        return client._transport.send(http_request, stream=stream)
    except Exception as e:
        if classify_exception(e) is ErrorCode.TRANSPORT_FAILURE:
            raise transport_failure(e, model=model) from e
        raise


def classify_error_response(response: httpx.Response, *, model: Optional[str]) -> CompletionError:
    """Decode a non-success response into ``RemoteAPIError`` or ``MALFORMED_ERROR_BODY``."""
    status = response.status_code
    try:
        body = response.read()
    except (httpx.HTTPError, httpx.StreamError, OSError) as e:
        return transport_failure(e, model=model)
    try:
        envelope = ErrorEnvelopeDTO.model_validate_json(body)
    except ValidationError as e:
        return CompletionError(
            code=ErrorCode.MALFORMED_ERROR_BODY,
            message=f"status {status}: error body could not be decoded",
            model=model,
            raw=e,
        )
    fault = APIFault(status_code=status, type=envelope.type, message=envelope.message)
    return RemoteAPIError(
        code=ErrorCode.REMOTE_API_FAULT,
        message=f"code: {status}, type: {fault.type}, message: {fault.message}",
        model=model,
        fault=fault,
    )


def decode_success(response: httpx.Response, *, model: Optional[str]) -> CompletionResult:
    """Decode a 2xx body into a :class:`CompletionResult`."""
    try:
        return CompletionResponseDTO.model_validate_json(response.content).to_result()
    except ValidationError as e:
        raise CompletionError(
            code=ErrorCode.MALFORMED_SUCCESS_BODY,
            message=f"success body could not be decoded: {e.error_count()} error(s)",
            model=model,
            raw=e,
        ) from e


def complete_impl(
    client: "CompletionClient",
    request: CompletionRequest,
    token: Optional[CancellationToken] = None,
) -> CompletionResult:
    """Synchronous validate -> build -> send -> decode flow.

    Returns exactly one ``CompletionResult`` or raises exactly one
    ``CompletionError``; never both.
    """
    client._validator.validate(request.prompt)
    model = request.model_name or client._builder.default_model
    if token is not None:
        token.raise_if_cancelled(model=model)
    # The sync path reads one JSON body, so a streaming flag is sent as false.
    serialized = client._builder.build(request, stream=False if request.stream else None)
    ctx = LogContext(operation="complete", model=serialized.model, endpoint=client._config.endpoint)
    normalized_log_event(
        client._logger,
        "complete.start",
        ctx,
        phase="start",
        max_tokens=request.max_tokens_to_sample,
        temperature=request.temperature,
    )
    t0 = time.perf_counter()
    try:
        response = send_request(client, build_http_request(client._config, serialized), stream=False, model=serialized.model)
        try:
            if not response.is_success:
                raise classify_error_response(response, model=serialized.model)
            result = decode_success(response, model=serialized.model)
        finally:
            response.close()
    except CompletionError as e:
        normalized_log_event(
            client._logger,
            "complete.error",
            ctx,
            phase="finalize",
            error_code=e.code.value,
            level=logging.WARNING,
            error=e.message,
            status_code=e.fault.status_code if isinstance(e, RemoteAPIError) and e.fault else None,
        )
        raise
    normalized_log_event(
        client._logger,
        "complete.end",
        ctx,
        phase="finalize",
        emitted=True,
        latency_ms=(time.perf_counter() - t0) * 1000.0,
        stop_reason=result.stop_reason.value if result.stop_reason else None,
        log_id=result.log_id,
    )
    return result


__all__ = [
    "build_http_request",
    "send_request",
    "classify_error_response",
    "decode_success",
    "complete_impl",
]
