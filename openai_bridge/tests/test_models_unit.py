"""Unit tests for canonical models and sampling options validation."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from openai_bridge.base.errors import ConversionError
from openai_bridge.base.models import (
    ChatRequest,
    ChatResponse,
    Message,
    Role,
    SamplingOptions,
    ToolCall,
    ToolCallFunction,
)


def test_message_coerces_string_role():
    msg = Message(role="user", content="hi")
    assert msg.role is Role.USER  # nosec B101


def test_message_rejects_unknown_role():
    with pytest.raises(ValueError):
        Message(role="narrator", content="x")


def test_message_to_dict_encodes_image_bytes_and_omits_empty_members():
    msg = Message(role=Role.USER, content="look", images=[b"\x00\x01", "QUJD"])
    data = msg.to_dict()
    assert data == {"role": "user", "content": "look", "images": ["AAE=", "QUJD"]}  # nosec B101


def test_response_to_dict_shape():
    created = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    call = ToolCall(id="c1", function=ToolCallFunction(name="f", arguments={"a": 1}))
    resp = ChatResponse(
        model="m",
        created_at=created,
        message=Message(role=Role.ASSISTANT, content="ok", tool_calls=[call]),
        done=True,
        done_reason="stop",
        prompt_eval_count=3,
        eval_count=4,
    )
    data = resp.to_dict()
    assert data["created_at"] == "2024-01-02T03:04:05+00:00"  # nosec B101
    assert data["done_reason"] == "stop"  # nosec B101
    assert data["prompt_eval_count"] == 3 and data["eval_count"] == 4  # nosec B101
    assert data["message"]["tool_calls"] == [{"id": "c1", "function": {"name": "f", "arguments": {"a": 1}}}]  # nosec B101


def test_partial_response_to_dict_omits_done_reason_and_counters():
    resp = ChatResponse(model="m", message=Message(role="assistant", content="He"), done_reason="stop")
    data = resp.to_dict()
    assert data["done"] is False  # nosec B101
    assert "done_reason" not in data  # nosec B101
    assert "prompt_eval_count" not in data and "eval_count" not in data  # nosec B101


def test_sampling_options_from_mapping_maps_recognized_keys():
    opts = SamplingOptions.from_mapping(
        {"temperature": 1, "top_p": 0.5, "num_predict": 64.0, "seed": 7, "presence_penalty": 0.1}
    )
    assert opts.temperature == 1.0 and isinstance(opts.temperature, float)  # nosec B101
    assert opts.num_predict == 64 and isinstance(opts.num_predict, int)  # nosec B101
    assert opts.to_wire_params() == {  # nosec B101
        "temperature": 1.0,
        "top_p": 0.5,
        "max_tokens": 64,
        "seed": 7,
        "presence_penalty": 0.1,
    }


def test_sampling_options_absent_keys_stay_unset():
    opts = SamplingOptions.from_mapping({"temperature": None})
    assert opts == SamplingOptions()  # nosec B101
    assert opts.to_wire_params() == {}  # nosec B101


def test_sampling_options_accepts_max_tokens_alias():
    assert SamplingOptions.from_mapping({"max_tokens": 10}).num_predict == 10  # nosec B101


def test_sampling_options_ignores_unrecognized_keys(log_events):
    opts = SamplingOptions.from_mapping({"num_ctx": 4096, "seed": 1})
    assert opts.seed == 1  # nosec B101
    ignored = [e for e in log_events if e.get("event") == "request.option_ignored"]
    assert ignored and ignored[0]["key"] == "num_ctx"  # nosec B101


@pytest.mark.parametrize(
    "options",
    [
        {"temperature": "hot"},
        {"temperature": True},
        {"top_p": float("nan")},
        {"num_predict": 1.5},
        {"seed": "42"},
    ],
)
def test_sampling_options_rejects_bad_values(options):
    with pytest.raises(ConversionError):
        SamplingOptions.from_mapping(options)


def test_chat_request_sampling_options_passthrough():
    opts = SamplingOptions(temperature=0.2)
    req = ChatRequest(model="m", options=opts)
    assert req.sampling_options() is opts  # nosec B101
    assert ChatRequest(model="m").sampling_options() == SamplingOptions()  # nosec B101
