"""Structured logging context object for completion calls.

:class:`LogContext` carries the fields shared by every event of one call
(operation, model, endpoint, trace id) plus an ``extra`` mapping, and prunes
``None`` values when serialized.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Structured context for completion logging events."""

    operation: Optional[str] = None
    model: Optional[str] = None
    endpoint: Optional[str] = None
    log_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        extra = data.pop("extra", {}) or {}
        data.update({k: v for k, v in extra.items() if v is not None})
        return {k: v for k, v in data.items() if v is not None}


__all__ = ["LogContext"]
