"""anthropic-complete CLI (package entrypoint).

This package wires argument parsing to the action handlers in
``cli_actions``. It performs no completion logic directly.

Public API re-exports:
- ``main``: CLI entrypoint callable
"""

from __future__ import annotations

import sys
from typing import Optional

from ..base.http import Transport
from ..config import ClientConfig
from .cli_actions import handle_ask
from .cli_parser import build_parser


def main(
    argv: Optional[list[str]] = None,
    *,
    transport: Optional[Transport] = None,
    config: Optional[ClientConfig] = None,
) -> int:
    """CLI entrypoint.

    Parameters
    ----------
    argv: Optional[list[str]]
        Argument vector; when ``None`` uses ``sys.argv[1:]``.
    transport, config:
        Optional injections forwarded to ``handle_ask`` (used by tests).

    Returns
    -------
    int
        Process exit code (0 success, non-zero on error).
    """
    p = build_parser()
    argv_list = list(sys.argv[1:] if argv is None else argv)
    # A bare question implies the only subcommand.
    if argv_list and argv_list[0] not in {"ask", "-h", "--help"}:
        argv_list = ["ask"] + argv_list
    args = p.parse_args(argv_list)
    if args.cmd != "ask":
        p.print_help(sys.stderr)
        return 2
    return handle_ask(args, transport=transport, config=config)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
