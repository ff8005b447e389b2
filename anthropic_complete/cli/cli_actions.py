"""CLI action handlers.

Purpose
-------
Execute the ``ask`` subcommand against a :class:`CompletionClient`, keeping
the entrypoint in ``__init__`` a thin dispatcher. No top-level side effects.

Failure semantics
-----------------
- Missing API key: returns ``2`` with a JSON hint on stderr naming the
  environment variable to set. No request is sent.
- ``CompletionError`` during the call: returns ``1`` with
  ``{"error", "code"}`` JSON on stderr and a normalized ``cli.error`` event.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Dict, Optional

from ..base.errors import CompletionError, RemoteAPIError
from ..base.http import Transport, build_httpx_client
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import CompletionRequest, CompletionResult
from ..client import CompletionClient
from ..config import ClientConfig, get_client_config
from ..config.env import ENV_MAP
from ..prompt import format_prompt


def _error_payload(e: CompletionError) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"error": e.message, "code": e.code.value}
    if isinstance(e, RemoteAPIError) and e.fault is not None:
        payload["status_code"] = e.fault.status_code
        payload["type"] = e.fault.type
    return payload


def _run(client: CompletionClient, args: argparse.Namespace) -> CompletionResult:
    request = CompletionRequest(
        prompt=format_prompt(args.question),
        max_tokens_to_sample=args.max_tokens or client.config.answer_max_tokens,
        model=args.model,
        stream=True if args.stream else None,
    )
    return client.stream(request) if args.stream else client.complete(request)


def handle_ask(
    args: argparse.Namespace,
    *,
    transport: Optional[Transport] = None,
    config: Optional[ClientConfig] = None,
) -> int:
    """Run one ``ask`` command.

    Parameters
    ----------
    args: argparse.Namespace
        Parsed ``ask`` arguments (``question``, ``max_tokens``, ``model``,
        ``stream``, ``json``).
    transport: Transport | None
        Injected transport; when omitted an ``httpx.Client`` is built from
        configuration and closed afterwards.
    config: ClientConfig | None
        Injected configuration; loaded with ``get_client_config`` when omitted.

    Returns
    -------
    int
        ``0`` on success, ``1`` on a completion error, ``2`` when no API key
        is configured.
    """
    cfg = config or get_client_config()
    if not cfg.api_key:
        hint = {"error": "missing API key", "set_env": ENV_MAP["api_key"]}
        print(json.dumps(hint), file=sys.stderr)
        return 2

    logger = get_logger("anthropic_complete.cli")
    ctx = LogContext(operation="cli.ask", model=args.model or cfg.model, endpoint=cfg.endpoint)
    normalized_log_event(logger, "cli.start", ctx, phase="start", stream=bool(args.stream))

    owned = transport is None
    http = build_httpx_client(cfg) if owned else transport
    try:
        result = _run(CompletionClient(http, cfg, logger=logger), args)
    except CompletionError as e:
        normalized_log_event(
            logger, "cli.error", ctx, phase="finalize", emitted=False, error_code=e.code.value, error=e.message
        )
        print(json.dumps(_error_payload(e)), file=sys.stderr)
        return 1
    finally:
        if owned:
            http.close()

    if args.json:
        print(json.dumps(result.to_dict()))
    else:
        print(result.completion)
    normalized_log_event(logger, "cli.finalize", ctx, phase="finalize", emitted=bool(result.completion))
    return 0


__all__ = ["handle_ask"]
