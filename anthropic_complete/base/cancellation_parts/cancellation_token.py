"""Cooperative cancellation token implementation.

Exposes the ``CancellationToken`` class a caller hands to a completion call to
request early termination. The client polls it cooperatively: once before the
request is sent and once before every stream frame is decoded.
"""

from __future__ import annotations

import threading
from typing import Optional

from .cancelled_error import CancelledError


class CancellationToken:
    """A cooperative cancellation token.

    Thread-safe: one thread may call ``cancel`` while another is blocked in a
    streaming call polling ``raise_if_cancelled``.
    """

    def __init__(self) -> None:
        self._event = threading.Event()
        self._reason: Optional[str] = None
        self._lock = threading.Lock()

    @property
    def cancelled(self) -> bool:  # noqa: D401 - short form
        """Whether cancellation has been requested."""
        return self._event.is_set()

    @property
    def reason(self) -> Optional[str]:  # noqa: D401 - short form
        """Reason string supplied at cancel time (if any)."""
        return self._reason

    def cancel(self, reason: Optional[str] = None) -> None:
        """Request cooperative cancellation.

        Idempotent: the first reason wins.
        """
        with self._lock:
            if self._event.is_set():
                return
            self._reason = reason
            self._event.set()

    def raise_if_cancelled(self, *, model: Optional[str] = None) -> None:
        """Raise ``CancelledError`` if the token is cancelled."""
        if self._event.is_set():
            raise CancelledError(self._reason or "operation cancelled", model=model)

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"CancellationToken(cancelled={self.cancelled}, reason={self._reason!r})"


__all__ = ["CancellationToken"]
