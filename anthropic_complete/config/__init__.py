"""Configuration layer for the completion client.

Goals
-----
* Centralize defaults (endpoint, model, client id, token budget for ``answer``).
* Merge sources in a predictable order (later wins):
    1. Built-in defaults (``config.defaults``)
    2. Optional external config file (JSON or YAML) named by
       ``ANTHROPIC_COMPLETE_CONFIG_FILE``, ``anthropic`` section
    3. Environment variables (``ANTHROPIC_API_KEY``, ``ANTHROPIC_BASE_URL``,
       ``ANTHROPIC_MODEL``, ``ANTHROPIC_TIMEOUT_SECONDS``)
    4. Explicit overrides passed to ``get_client_config`` (``None`` ignored)
* Produce one immutable :class:`ClientConfig` that the client reads and never
  mutates.

External Config File (Optional)
-------------------------------
```
anthropic:
  api_key: ${ANTHROPIC_API_KEY}
  model: claude-instant-v1
  answer_max_tokens: 512
```

Public API
----------
* ``ClientConfig``
* ``get_client_config(overrides: dict | None = None) -> ClientConfig``
"""
from __future__ import annotations

import json
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .defaults import (
    DEFAULT_ANSWER_MAX_TOKENS,
    DEFAULT_BASE_URL,
    DEFAULT_CLIENT_ID,
    DEFAULT_COMPLETE_PATH,
    DEFAULT_MAX_FRAME_CHARS,
    DEFAULT_MODEL,
    DEFAULT_TIMEOUT_SECONDS,
)
from .env import CONFIG_FILE_ENV, env_overrides, is_placeholder

CONFIG_FILE_SECTION = "anthropic"


@dataclass(frozen=True)
class ClientConfig:
    """Immutable client configuration, read-only after construction.

    Attributes:
        api_key: Value of the ``x-api-key`` header.
        base_url: Service root, without the completion path.
        complete_path: Path of the completion endpoint under ``base_url``.
        model: Model used when a request leaves ``model`` unset.
        client_id: Value of the ``client`` identification header.
        answer_max_tokens: Token budget used by ``answer`` when none is given.
        timeout_seconds: Timeout used by ``build_httpx_client`` only; the
            client itself imposes none.
        max_frame_chars: Upper bound, in decoded characters, for one
            partial streaming frame held in memory.
    """

    api_key: str = ""
    base_url: str = DEFAULT_BASE_URL
    complete_path: str = DEFAULT_COMPLETE_PATH
    model: str = DEFAULT_MODEL
    client_id: str = DEFAULT_CLIENT_ID
    answer_max_tokens: int = DEFAULT_ANSWER_MAX_TOKENS
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    max_frame_chars: int = DEFAULT_MAX_FRAME_CHARS

    @property
    def endpoint(self) -> str:
        """Absolute URL of the completion endpoint."""
        return self.base_url.rstrip("/") + "/" + self.complete_path.lstrip("/")

    def __repr__(self) -> str:  # keep the key out of logs and tracebacks
        return (
            f"ClientConfig(endpoint={self.endpoint!r}, model={self.model!r}, "
            f"client_id={self.client_id!r}, api_key={'***' if self.api_key else ''!r})"
        )


_COERCE = {
    "answer_max_tokens": int,
    "timeout_seconds": float,
    "max_frame_chars": int,
}


def _load_external_config() -> Dict[str, Any]:
    """Return the ``anthropic`` section of the external config file (or ``{}``)."""
    path = os.getenv(CONFIG_FILE_ENV)
    if not path:
        return {}
    p = Path(path).expanduser()
    if not p.is_file():
        return {}
    text = p.read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        return {}
    section = data.get(CONFIG_FILE_SECTION, {})
    return dict(section) if isinstance(section, dict) else {}


def _coerce(values: Mapping[str, Any]) -> Dict[str, Any]:
    known = {f.name for f in fields(ClientConfig)}
    out: Dict[str, Any] = {}
    for key, val in values.items():
        if key not in known or val is None:
            continue
        if key == "api_key" and is_placeholder(str(val)):
            continue
        caster = _COERCE.get(key)
        out[key] = caster(val) if caster else str(val)
    return out


def get_client_config(overrides: Optional[Mapping[str, Any]] = None) -> ClientConfig:
    """Return merged configuration for the completion client.

    Merge order (later wins): defaults -> external config -> env vars -> overrides.
    Unknown keys are ignored.

    Raises:
        ValueError: A numeric setting cannot be parsed.
        yaml.YAMLError: The config file is neither valid JSON nor valid YAML.
    """
    merged: Dict[str, Any] = {}
    merged |= _coerce(_load_external_config())
    merged |= _coerce(env_overrides())
    if overrides:
        merged |= _coerce(overrides)
    return ClientConfig(**merged)


__all__ = ["ClientConfig", "get_client_config", "CONFIG_FILE_SECTION"]
