"""
CompletionRequest value describing one call to the completion endpoint.

Every optional field uses ``None`` to mean "unset"; unset fields are left out
of the wire payload entirely so the service applies its own defaults.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Union

from .model import Model

TOP_DISABLED = -1
"""Sentinel accepted by ``top_k`` and ``top_p`` meaning "sampling control disabled"."""


@dataclass(frozen=True)
class RequestMetadata:
    """Metadata about the request.

    Attributes:
        user_id: UUID, hash value or other opaque external identifier for the
            end user, used by the service to help detect abuse. Must not
            contain identifying information such as name, email or phone.
    """

    user_id: Optional[str] = None


@dataclass(frozen=True)
class CompletionRequest:
    """Completion request parameters (required and optional).

    Attributes:
        prompt: Text to complete; must follow the ``\\n\\nHuman: ...\\n\\nAssistant:``
            envelope.
        max_tokens_to_sample: Maximum number of tokens to generate before stopping.
        model: Model identifier; ``None`` selects the client's configured default.
        stop_sequences: Additional strings that stop generation. Models already
            stop on ``"\\n\\nHuman:"``.
        stream: Whether to stream the response incrementally.
        temperature: Randomness in ``[0, 1]``; closer to 0 for analytical tasks,
            closer to 1 for creative ones.
        top_k: Only sample from the top K options for each token; ``-1`` disables.
        top_p: Nucleus sampling cutoff in ``[0, 1]``; ``-1`` disables. Alter
            either ``temperature`` or ``top_p``, not both.
        metadata: Optional :class:`RequestMetadata`.
    """

    prompt: str
    max_tokens_to_sample: int
    model: Optional[Union[Model, str]] = None
    stop_sequences: Optional[Sequence[str]] = None
    stream: Optional[bool] = None
    temperature: Optional[float] = None
    top_k: Optional[int] = None
    top_p: Optional[float] = None
    metadata: Optional[RequestMetadata] = None

    def __post_init__(self) -> None:
        # Freeze list input so the request cannot change after validation.
        if self.stop_sequences is not None and not isinstance(self.stop_sequences, tuple):
            object.__setattr__(self, "stop_sequences", tuple(self.stop_sequences))

    @property
    def model_name(self) -> Optional[str]:
        """Model identifier as a plain string (``None`` when unset)."""
        if self.model is None:
            return None
        return self.model.value if isinstance(self.model, Model) else str(self.model)


__all__ = ["CompletionRequest", "RequestMetadata", "TOP_DISABLED"]
