"""Completion client facade.

``CompletionClient`` owns one immutable :class:`ClientConfig`, one injected
:class:`Transport` and one :class:`PromptValidator`, and exposes the public
operations:

- ``complete``: one request, one decoded :class:`CompletionResult`.
- ``answer``: wrap a bare question in the prompt envelope and return only the
  completion text.
- ``stream``: callback-driven streaming; returns the terminal frame.
- ``open_stream``: iterator-driven streaming via :class:`CompletionStream`.

The client holds no per-call state, so one instance may serve concurrent
calls from several threads provided the transport allows it. It applies no
retries and no timeouts; those belong to the transport.
"""

from __future__ import annotations

import logging
from typing import Optional

from .base.cancellation import CancellationToken
from .base.http import Transport
from .base.logging import get_logger
from .base.models import CompletionRequest, CompletionResult, Model, StreamEvent
from .base.streaming import CompletionStream
from .config import ClientConfig, get_client_config
from .helpers import complete_impl
from .prompt import PromptValidator, format_prompt
from .request_builder import RequestBuilder
from .stream_helpers import OnOpen, OnUpdate, iter_stream_events, stream_impl


class CompletionClient:
    """Client for the text-completion endpoint."""

    def __init__(
        self,
        transport: Transport,
        config: Optional[ClientConfig] = None,
        *,
        validator: Optional[PromptValidator] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        """Create a client.

        Parameters
        ----------
        transport: Transport
            Object performing the HTTP exchange (an ``httpx.Client`` works
            as-is). Required.
        config: ClientConfig | None
            Immutable settings; when omitted they are loaded with
            :func:`get_client_config`.
        validator: PromptValidator | None
            Prompt checker; a default instance is created when omitted.
        logger: logging.Logger | None
            Destination for structured events.

        Raises
        ------
        ValueError
            When ``transport`` is ``None``.
        """
        if transport is None:
            raise ValueError("transport is required")
        self._transport = transport
        self._config = config if config is not None else get_client_config()
        self._validator = validator or PromptValidator()
        self._logger = logger or get_logger("anthropic_complete.client")
        self._builder = RequestBuilder(self._config.model, logger=self._logger)

    @property
    def config(self) -> ClientConfig:
        return self._config

    def complete(self, request: CompletionRequest, *, token: Optional[CancellationToken] = None) -> CompletionResult:
        """Send one non-streaming completion request.

        Raises ``CompletionError`` with ``INVALID_PROMPT_FORMAT`` before any
        network activity when the prompt is not enveloped.
        """
        return complete_impl(self, request, token)

    def answer(
        self,
        question: str,
        max_tokens: Optional[int] = None,
        model: Optional[str | Model] = None,
        *,
        token: Optional[CancellationToken] = None,
    ) -> str:
        """Ask a bare question and return only the completion text."""
        request = CompletionRequest(
            prompt=format_prompt(question),
            max_tokens_to_sample=max_tokens if max_tokens is not None else self._config.answer_max_tokens,
            model=model,
        )
        return self.complete(request, token=token).completion

    def stream(
        self,
        request: CompletionRequest,
        on_open: Optional[OnOpen] = None,
        on_update: Optional[OnUpdate] = None,
        *,
        token: Optional[CancellationToken] = None,
    ) -> StreamEvent:
        """Stream a completion, delivering frames to callbacks.

        ``on_open`` runs once with the open response before any frame is
        read; ``on_update`` receives every non-terminal frame in arrival
        order. Returns the terminal frame, which may carry ``exception``.
        Exceptions raised by either callback abort the call and propagate
        unchanged.
        """
        return stream_impl(self, request, on_open, on_update, token or CancellationToken())

    def open_stream(
        self,
        request: CompletionRequest,
        *,
        token: Optional[CancellationToken] = None,
        on_open: Optional[OnOpen] = None,
    ) -> CompletionStream:
        """Return a lazy :class:`CompletionStream`; the request is sent on first iteration."""
        tok = token or CancellationToken()
        return CompletionStream(iter_stream_events(self, request, tok, on_open), tok)


__all__ = ["CompletionClient"]
