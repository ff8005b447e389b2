"""RequestBuilder serialization.

Covers field omission, default model, explicit values, range failures
surfacing as ``SERIALIZATION_FAILED`` and the sampling-conflict warning.
"""

from __future__ import annotations

import json
import math

import pytest

from anthropic_complete import (
    CompletionError,
    CompletionRequest,
    ErrorCode,
    Model,
    RequestBuilder,
    RequestMetadata,
)
from anthropic_complete.tests.utils import PROMPT


def _builder() -> RequestBuilder:
    return RequestBuilder("claude-v1")


def test_unset_optional_fields_are_omitted() -> None:
    out = _builder().build(CompletionRequest(prompt=PROMPT, max_tokens_to_sample=300))
    body = json.loads(out.body)
    assert body == {"prompt": PROMPT, "model": "claude-v1", "max_tokens_to_sample": 300}  # nosec B101
    assert out.model == "claude-v1"  # nosec B101
    assert out.stream is False  # nosec B101


def test_explicit_fields_are_serialized() -> None:
    request = CompletionRequest(
        prompt=PROMPT,
        max_tokens_to_sample=10,
        model=Model.CLAUDE_INSTANT_V1,
        stop_sequences=["\n\nHuman:", "END"],
        stream=True,
        temperature=0.2,
        top_k=5,
        top_p=-1,
        metadata=RequestMetadata(user_id="user-123"),
    )
    body = json.loads(_builder().build(request).body)
    assert body["model"] == "claude-instant-v1"  # nosec B101
    assert body["stop_sequences"] == ["\n\nHuman:", "END"]  # nosec B101
    assert body["stream"] is True  # nosec B101
    assert body["temperature"] == 0.2  # nosec B101
    assert body["top_k"] == 5  # nosec B101
    assert body["top_p"] == -1  # nosec B101
    assert body["metadata"] == {"user_id": "user-123"}  # nosec B101


def test_metadata_without_user_id_is_omitted() -> None:
    request = CompletionRequest(prompt=PROMPT, max_tokens_to_sample=1, metadata=RequestMetadata())
    assert "metadata" not in _builder().build(request).payload  # nosec B101


def test_stream_argument_overrides_request_flag() -> None:
    request = CompletionRequest(prompt=PROMPT, max_tokens_to_sample=1, stream=True)
    assert _builder().build(request, stream=False).payload["stream"] is False  # nosec B101
    plain = CompletionRequest(prompt=PROMPT, max_tokens_to_sample=1)
    assert _builder().build(plain, stream=True).stream is True  # nosec B101


def test_builder_does_not_mutate_request() -> None:
    request = CompletionRequest(prompt=PROMPT, max_tokens_to_sample=5, stop_sequences=["a"])
    _builder().build(request, stream=True)
    assert request.model is None  # nosec B101
    assert request.stream is None  # nosec B101
    assert request.stop_sequences == ("a",)  # nosec B101


def test_non_ascii_text_is_utf8_encoded() -> None:
    prompt = "\n\nHuman: Grüße, 世界\n\nAssistant:"
    out = _builder().build(CompletionRequest(prompt=prompt, max_tokens_to_sample=1))
    assert "Grüße, 世界".encode("utf-8") in out.body  # nosec B101


@pytest.mark.parametrize(
    "kwargs",
    [
        {"temperature": 1.5},
        {"temperature": -0.1},
        {"temperature": math.nan},
        {"top_p": math.inf},
        {"top_p": 1.2},
        {"top_k": 0},
        {"top_k": -2},
        {"max_tokens_to_sample": 0},
    ],
)
def test_unrepresentable_values_fail_serialization(kwargs) -> None:
    params = {"prompt": PROMPT, "max_tokens_to_sample": 10, **kwargs}
    with pytest.raises(CompletionError) as exc_info:
        _builder().build(CompletionRequest(**params))
    assert exc_info.value.code is ErrorCode.SERIALIZATION_FAILED  # nosec B101


def test_sampling_conflict_is_logged_but_sent(log_events) -> None:
    request = CompletionRequest(prompt=PROMPT, max_tokens_to_sample=1, temperature=0.5, top_p=0.9)
    body = json.loads(_builder().build(request).body)
    assert body["temperature"] == 0.5 and body["top_p"] == 0.9  # nosec B101
    events = log_events.events("request.sampling_conflict")
    assert len(events) == 1  # nosec B101
    assert events[0]["phase"] == "build"  # nosec B101


def test_disabled_top_p_is_not_a_conflict(log_events) -> None:
    request = CompletionRequest(prompt=PROMPT, max_tokens_to_sample=1, temperature=0.5, top_p=-1)
    _builder().build(request)
    assert log_events.events("request.sampling_conflict") == []  # nosec B101
