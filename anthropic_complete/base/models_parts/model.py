"""
Known model identifiers accepted by the completion endpoint.

Requests accept either a :class:`Model` member or any plain string, so newer
identifiers can be used without a library release.
"""
from __future__ import annotations

from enum import Enum


class Model(str, Enum):
    """Model identifiers for the text-completion service."""

    # Largest model, for a wide range of more complex tasks.
    CLAUDE_V1 = "claude-v1"
    # claude-v1 with a 100,000 token context window.
    CLAUDE_V1_100K = "claude-v1-100k"
    # Smaller, lower latency and less expensive model.
    CLAUDE_INSTANT_V1 = "claude-instant-v1"
    CLAUDE_INSTANT_V1_100K = "claude-instant-v1-100k"
    # Pinned versions.
    CLAUDE_V1_3 = "claude-v1.3"
    CLAUDE_V1_3_100K = "claude-v1.3-100k"
    CLAUDE_V1_2 = "claude-v1.2"
    CLAUDE_V1_0 = "claude-v1.0"
    CLAUDE_INSTANT_V1_1 = "claude-instant-v1.1"
    CLAUDE_INSTANT_V1_1_100K = "claude-instant-v1.1-100k"
    CLAUDE_INSTANT_V1_0 = "claude-instant-v1.0"

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.value


__all__ = ["Model"]
