"""Shared helpers for the completion client tests.

Exports:
    - PROMPT: a well-formed prompt used across test modules.
    - frame(completion, stop_reason, **extra): one streaming wire frame.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

PROMPT = "\n\nHuman: Tell me a haiku about trees\n\nAssistant:"


def frame(completion: str = "", stop_reason: Optional[str] = "", **extra: Any) -> Dict[str, Any]:
    """Build one wire frame; intermediate frames carry an empty stop reason."""
    return {"completion": completion, "stop_reason": stop_reason, **extra}
