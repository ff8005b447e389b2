"""anthropic_complete.config.defaults
===================================

Central place for the small, stable default values used by the completion
client. Every value can be overridden through environment variables, an
external config file, or explicit overrides (see ``get_client_config``).

This module performs no I/O and imports nothing from the rest of the package
to avoid circular dependencies.
"""

from __future__ import annotations

PACKAGE_VERSION = "0.1.0"

# ---- Endpoint ----
DEFAULT_BASE_URL = "https://api.anthropic.com"
DEFAULT_COMPLETE_PATH = "/v1/complete"
# Sent in the "client" header on every request.
DEFAULT_CLIENT_ID = f"anthropic-complete/{PACKAGE_VERSION}"

# ---- Request defaults ----
DEFAULT_MODEL = "claude-v1"
# Token budget applied by ``CompletionClient.answer`` only.
DEFAULT_ANSWER_MAX_TOKENS = 256

# ---- Transport factory ----
DEFAULT_TIMEOUT_SECONDS = 600.0

# ---- Streaming ----
# Upper bound (decoded characters) for a single partial frame held in memory.
DEFAULT_MAX_FRAME_CHARS = 1024 * 1024


__all__ = [
    "PACKAGE_VERSION",
    "DEFAULT_BASE_URL",
    "DEFAULT_COMPLETE_PATH",
    "DEFAULT_CLIENT_ID",
    "DEFAULT_MODEL",
    "DEFAULT_ANSWER_MAX_TOKENS",
    "DEFAULT_TIMEOUT_SECONDS",
    "DEFAULT_MAX_FRAME_CHARS",
]
