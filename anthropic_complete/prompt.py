"""Prompt envelope helpers.

The completion endpoint only accepts prompts wrapped in the conversational
envelope::

    "\\n\\nHuman: <content>\\n\\nAssistant:"

``PromptValidator`` owns one precompiled pattern and checks the whole string
against it; validation is pure and runs before any serialization or network
activity.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Pattern

from .base.errors import CompletionError, ErrorCode

HUMAN_PROMPT = "\n\nHuman:"
AI_PROMPT = "\n\nAssistant:"
PROMPT_FORMAT = HUMAN_PROMPT + " {}" + AI_PROMPT

INVALID_PROMPT_MESSAGE = (
    "invalid prompt: prompts have to be of following format: "
    "`\\n\\nHuman: ${prompt}\\n\\nAssistant:`"
)


def _compile_envelope() -> Pattern[str]:
    return re.compile(re.escape(HUMAN_PROMPT) + r".*" + re.escape(AI_PROMPT), re.DOTALL)


@dataclass(frozen=True)
class PromptValidator:
    """Checks prompts against the Human/Assistant envelope.

    The prompt must start with exactly ``"\\n\\nHuman:"`` and end with
    ``"\\n\\nAssistant:"``; anything (including nothing, or several lines and
    turns) may sit in between.
    """

    pattern: Pattern[str] = field(default_factory=_compile_envelope)

    def is_valid(self, prompt: str) -> bool:
        return isinstance(prompt, str) and self.pattern.fullmatch(prompt) is not None

    def validate(self, prompt: str) -> None:
        """Raise ``CompletionError(INVALID_PROMPT_FORMAT)`` unless ``prompt`` is enveloped."""
        if not self.is_valid(prompt):
            raise CompletionError(code=ErrorCode.INVALID_PROMPT_FORMAT, message=INVALID_PROMPT_MESSAGE)


_DEFAULT_VALIDATOR = PromptValidator()


def validate_prompt(prompt: str) -> None:
    """Module-level shortcut for ``PromptValidator().validate``."""
    _DEFAULT_VALIDATOR.validate(prompt)


def is_valid_prompt(prompt: str) -> bool:
    return _DEFAULT_VALIDATOR.is_valid(prompt)


def format_prompt(question: str) -> str:
    """Wrap a bare question into the envelope (``"\\n\\nHuman: q\\n\\nAssistant:"``)."""
    return PROMPT_FORMAT.format(question)


__all__ = [
    "HUMAN_PROMPT",
    "AI_PROMPT",
    "PROMPT_FORMAT",
    "PromptValidator",
    "validate_prompt",
    "is_valid_prompt",
    "format_prompt",
]
