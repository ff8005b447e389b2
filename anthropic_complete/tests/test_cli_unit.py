"""CLI: missing key preflight, plain/JSON output, streaming and error exit codes.

Structured log lines may share stderr with the CLI's own JSON error output,
so ``_cli_error`` picks the line without an ``event`` key.
"""

from __future__ import annotations

import json
from typing import Any, Dict

import pytest

from anthropic_complete import ClientConfig
from anthropic_complete.cli import main
from anthropic_complete.cli.cli_parser import build_parser
from anthropic_complete.mock import ScriptedTransport
from anthropic_complete.tests.utils import frame


def _cli_error(stderr: str) -> Dict[str, Any]:
    for line in reversed(stderr.strip().splitlines()):
        try:
            data = json.loads(line)
        except ValueError:
            continue
        if isinstance(data, dict) and "event" not in data:
            return data
    pytest.fail(f"no CLI error payload in stderr: {stderr!r}")


def test_missing_key_exits_2_without_sending(capsys) -> None:
    transport = ScriptedTransport().respond_with({"completion": "x", "stop_reason": "stop_sequence"})
    code = main(["ask", "hello"], transport=transport, config=ClientConfig())
    assert code == 2  # nosec B101
    assert transport.call_count == 0  # nosec B101
    err = _cli_error(capsys.readouterr().err)
    assert err["error"] == "missing API key"  # nosec B101
    assert err["set_env"] == "ANTHROPIC_API_KEY"  # nosec B101


def test_ask_prints_completion(capsys, transport, config) -> None:
    transport.respond_with({"completion": " Because of Rayleigh scattering.", "stop_reason": "stop_sequence"})
    code = main(["ask", "Why is the sky blue?", "--max-tokens", "40"], transport=transport, config=config)
    assert code == 0  # nosec B101
    assert capsys.readouterr().out == " Because of Rayleigh scattering.\n"  # nosec B101
    body = transport.last_json()
    assert body["max_tokens_to_sample"] == 40  # nosec B101
    assert "stream" not in body  # nosec B101


def test_bare_question_implies_ask(capsys, transport, config) -> None:
    transport.respond_with({"completion": " ok", "stop_reason": "stop_sequence"})
    assert main(["hello", "--model", "claude-instant-v1"], transport=transport, config=config) == 0  # nosec B101
    assert transport.last_json()["model"] == "claude-instant-v1"  # nosec B101


def test_json_output(capsys, transport, config) -> None:
    transport.respond_with({"completion": " ok", "stop_reason": "max_tokens", "log_id": "L1"})
    assert main(["ask", "hi", "--json"], transport=transport, config=config) == 0  # nosec B101
    out = json.loads(capsys.readouterr().out)
    assert out["stop_reason"] == "max_tokens" and out["log_id"] == "L1"  # nosec B101


def test_stream_flag_uses_streaming_path(capsys, transport, config) -> None:
    transport.stream_frames([frame(" par"), frame(" partial answer", "stop_sequence")])
    assert main(["ask", "hi", "--stream"], transport=transport, config=config) == 0  # nosec B101
    assert capsys.readouterr().out == " partial answer\n"  # nosec B101
    assert transport.last_json()["stream"] is True  # nosec B101


def test_completion_error_exits_1(capsys, transport, config) -> None:
    transport.respond_with({"error": {"type": "authentication_error", "message": "invalid x-api-key"}}, status=401)
    assert main(["ask", "hi"], transport=transport, config=config) == 1  # nosec B101
    err = _cli_error(capsys.readouterr().err)
    assert err["code"] == "remote_api_fault"  # nosec B101
    assert err["status_code"] == 401 and err["type"] == "authentication_error"  # nosec B101


def test_no_command_prints_help_and_exits_2(capsys) -> None:
    assert main([]) == 2  # nosec B101
    assert "anthropic-complete" in capsys.readouterr().err  # nosec B101


def test_parser_rejects_non_positive_budget() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args(["ask", "hi", "--max-tokens", "0"])
