"""
Stop reason enumeration reported with every finished completion.
"""
from __future__ import annotations

from enum import Enum


class StopReason(str, Enum):
    """Why sampling stopped.

    ``STOP_SEQUENCE``: a stop sequence was reached, either one supplied via
    ``stop_sequences`` or one built into the model.
    ``MAX_TOKENS``: ``max_tokens_to_sample`` or the model's maximum was exceeded.
    """

    STOP_SEQUENCE = "stop_sequence"
    MAX_TOKENS = "max_tokens"


__all__ = ["StopReason"]
