"""anthropic_complete package

Client library for a remote text-completion endpoint.

Purpose:
    Validate prompts against the Human/Assistant envelope, serialize
    completion requests, send them through an injected HTTP transport, and
    decode either a single JSON result or a stream of incremental frames
    with cancellation and guaranteed release of the response body.

Public API (re-exported):
    - Version: ``__version__``
    - Client: :class:`CompletionClient`, :class:`CompletionStream`
    - Values: :class:`CompletionRequest`, :class:`RequestMetadata`,
      :class:`CompletionResult`, :class:`StreamEvent`, :class:`StopReason`,
      :class:`Model`, :class:`APIFault`
    - Prompt helpers: ``HUMAN_PROMPT``, ``AI_PROMPT``, :func:`format_prompt`,
      :func:`validate_prompt`, :class:`PromptValidator`
    - Errors: :class:`CompletionError`, :class:`RemoteAPIError`,
      :class:`CancelledError`, :class:`ErrorCode`
    - Cancellation: :class:`CancellationToken`
    - Configuration: :class:`ClientConfig`, :func:`get_client_config`
    - Transport: :class:`Transport`, :func:`build_httpx_client`

Example::

    from anthropic_complete import CompletionClient, build_httpx_client, get_client_config

    config = get_client_config()
    with build_httpx_client(config) as http:
        client = CompletionClient(http, config)
        print(client.answer("Why is the sky blue?"))
"""

from .base.cancellation import CancellationToken
from .base.errors import CancelledError, CompletionError, ErrorCode, RemoteAPIError
from .base.http import Transport, build_httpx_client
from .base.models import (
    TOP_DISABLED,
    APIFault,
    CompletionRequest,
    CompletionResult,
    Model,
    RequestMetadata,
    StopReason,
    StreamEvent,
)
from .base.streaming import CompletionStream
from .client import CompletionClient
from .config import ClientConfig, get_client_config
from .config.defaults import PACKAGE_VERSION
from .prompt import AI_PROMPT, HUMAN_PROMPT, PromptValidator, format_prompt, is_valid_prompt, validate_prompt
from .request_builder import RequestBuilder, SerializedRequest

__version__ = PACKAGE_VERSION

__all__ = [
    "__version__",
    "CompletionClient",
    "CompletionStream",
    "CompletionRequest",
    "RequestMetadata",
    "CompletionResult",
    "StreamEvent",
    "StopReason",
    "Model",
    "APIFault",
    "TOP_DISABLED",
    "HUMAN_PROMPT",
    "AI_PROMPT",
    "PromptValidator",
    "format_prompt",
    "validate_prompt",
    "is_valid_prompt",
    "RequestBuilder",
    "SerializedRequest",
    "CompletionError",
    "RemoteAPIError",
    "CancelledError",
    "ErrorCode",
    "CancellationToken",
    "ClientConfig",
    "get_client_config",
    "Transport",
    "build_httpx_client",
]
