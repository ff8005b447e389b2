"""anthropic_complete.config.env
==============================

Environment variable names read by the configuration layer, plus the
placeholder heuristic used to ignore template values such as
``ANTHROPIC_API_KEY=changeme`` copied from sample files.

Helpers never raise on unset variables; callers decide how to proceed.
"""

from __future__ import annotations

import os
from typing import Dict, Optional

# Config field -> environment variable
ENV_MAP: Dict[str, str] = {
    "api_key": "ANTHROPIC_API_KEY",  # pragma: allowlist secret - env var name, not a secret
    "base_url": "ANTHROPIC_BASE_URL",
    "model": "ANTHROPIC_MODEL",
    "timeout_seconds": "ANTHROPIC_TIMEOUT_SECONDS",
}

CONFIG_FILE_ENV = "ANTHROPIC_COMPLETE_CONFIG_FILE"


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the provided string looks like a placeholder value.

    Heuristics (case-insensitive, surrounding spaces ignored): contains
    ``placeholder``, ``changeme`` or ``your-api-key``, or is wrapped in angle
    brackets like ``<api-key>``.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return (
        "placeholder" in v
        or "changeme" in v
        or "your-api-key" in v
        or (v.startswith("<") and v.endswith(">"))
    )


def env_overrides() -> Dict[str, str]:
    """Return config fields set through the environment (placeholders dropped)."""
    out: Dict[str, str] = {}
    for field, var in ENV_MAP.items():
        val = os.getenv(var)
        if val is None or not val.strip() or is_placeholder(val):
            continue
        out[field] = val.strip()
    return out


__all__ = ["ENV_MAP", "CONFIG_FILE_ENV", "is_placeholder", "env_overrides"]
