"""Cooperative cancellation primitives (public API facade).

Purpose
-------
Expose the cancellation constructs used by completion calls via the canonical
``anthropic_complete.base.cancellation`` import path while the concrete
implementations live under ``cancellation_parts``.

Notes
-----
- ``CancellationToken`` is the caller-owned signal passed into
  ``CompletionClient`` calls; the client polls it before sending and before
  decoding each stream frame.
- ``CancelledError`` is raised by operations that observe a cancellation request.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledError"]
