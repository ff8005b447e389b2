"""CLI parser construction for anthropic-complete.

This module wires subparsers but contains no execution logic. Subcommand
handlers live in ``cli_actions``.
"""

from __future__ import annotations

import argparse


def _positive_int(v: str) -> int:
    """Parse a strictly positive integer argument."""
    try:
        n = int(v)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"expected an integer, got {v!r}") from e
    if n <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {n}")
    return n


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level CLI parser and the ``ask`` subcommand.

    Performs no side effects; no I/O or network calls occur here.
    """
    p = argparse.ArgumentParser(prog="anthropic-complete", description="Ask the completion endpoint a question")
    sub = p.add_subparsers(dest="cmd")

    p_ask = sub.add_parser("ask", help="Wrap QUESTION in the prompt envelope and print the completion")
    p_ask.add_argument("question")
    p_ask.add_argument("--max-tokens", dest="max_tokens", type=_positive_int, default=None)
    p_ask.add_argument("--model", default=None)
    p_ask.add_argument("--stream", action="store_true", help="Use the streaming endpoint")
    p_ask.add_argument("--json", action="store_true", help="Print the full result as JSON")
    return p


__all__ = ["build_parser"]
