"""
APIFault value describing a non-success response from the completion service.
"""
from __future__ import annotations

from dataclasses import dataclass

_RETRYABLE_STATUSES = frozenset({408, 409, 429, 500, 502, 503, 504, 529})


@dataclass(frozen=True)
class APIFault:
    """Fault reported by the service alongside a non-2xx status.

    Attributes:
        status_code: HTTP status code of the response.
        type: Fault category tag from the service (e.g. ``"invalid_request_error"``).
        message: Human-readable description supplied by the service.
    """

    status_code: int
    type: str
    message: str

    @property
    def retryable(self) -> bool:
        """Hint that the same request may succeed later (throttling, overload, 5xx).

        The client itself never retries; this exists for caller-driven policies.
        """
        return self.status_code in _RETRYABLE_STATUSES


__all__ = ["APIFault"]
