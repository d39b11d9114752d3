"""Tests for the streaming transcoder (SSE chunks -> canonical responses)."""

from __future__ import annotations

import json

import pytest

from openai_bridge.base.cancellation import CancellationToken, CancelledError
from openai_bridge.base.errors import StreamReadError
from openai_bridge.base.wire import ChatCompletion
from openai_bridge.transcode.response import from_wire_response
from openai_bridge.transcode.streaming import StreamTranscoder
from openai_bridge.tests.utils import completion, content_chunk, sse_body, tool_chunk


def _lines(*payloads, done=True):
    return sse_body(*payloads, done=done).decode("utf-8").splitlines()


def _run(*payloads, done=True, **kwargs):
    out = []
    StreamTranscoder(out.append, model="llama3", **kwargs).run(_lines(*payloads, done=done))
    return out


def test_content_deltas_emit_increments_then_terminal():
    out = _run(content_chunk("He"), content_chunk("llo"))
    assert [r.done for r in out] == [False, False, True]  # nosec B101
    assert [r.message.content for r in out[:2]] == ["He", "llo"]  # nosec B101
    assert out[-1].message.content == "Hello"  # nosec B101
    assert out[-1].done_reason == "stop" and out[-1].model == "llama3"  # nosec B101
    assert all(r.message.role.value == "assistant" for r in out)  # nosec B101


def test_partials_concatenate_to_non_streaming_content():
    pieces = ["The ", "quick ", "brown ", "fox"]
    out = _run(*[content_chunk(p) for p in pieces])
    streamed = "".join(r.message.content for r in out if not r.done)
    non_stream = from_wire_response(ChatCompletion.model_validate(completion("".join(pieces))))
    assert streamed == non_stream.message.content == out[-1].message.content  # nosec B101


def test_reasoning_deltas_are_emitted_and_accumulated():
    chunks = [
        {"choices": [{"index": 0, "delta": {"reasoning_content": "think "}}]},
        {"choices": [{"index": 0, "delta": {"reasoning": "more"}}]},
        content_chunk("answer"),
    ]
    out = _run(*chunks)
    assert [r.message.thinking for r in out[:2]] == ["think ", "more"]  # nosec B101
    assert out[-1].message.thinking == "think more"  # nosec B101
    assert out[-1].message.content == "answer"  # nosec B101


def test_tool_call_deltas_accumulate_by_index():
    chunks = [
        tool_chunk(0, id="call_a", name="search", arguments='{"q": '),
        tool_chunk(0, arguments='"cats"}'),
        tool_chunk(1, id="call_b", name="fetch", arguments='{"url": "u"}'),
        tool_chunk(0, name="search_v2"),
        {"choices": [{"index": 0, "delta": {}, "finish_reason": "tool_calls"}]},
    ]
    out = _run(*chunks)
    assert len(out) == 1  # nosec B101
    terminal = out[0]
    calls = terminal.message.tool_calls
    assert [c.index for c in calls] == [0, 1]  # nosec B101
    assert calls[0].id == "call_a" and calls[0].function.name == "search_v2"  # nosec B101
    assert calls[0].function.arguments == {"q": "cats"}  # nosec B101
    assert calls[1].id == "call_b" and calls[1].function.arguments == {"url": "u"}  # nosec B101
    assert terminal.done_reason == "tool_calls"  # nosec B101


def test_tool_calls_surface_in_ascending_index_order():
    out = _run(
        tool_chunk(2, id="c2", name="b", arguments="{}"),
        tool_chunk(0, id="c0", name="a", arguments="{}"),
    )
    assert [c.id for c in out[-1].message.tool_calls] == ["c0", "c2"]  # nosec B101


def test_deltas_without_index_open_a_call_per_new_id():
    out = _run(
        tool_chunk(None, id="a", name="first", arguments='{"x": 1}'),
        tool_chunk(None, id="b", name="second", arguments='{"y": 2}'),
    )
    calls = out[-1].message.tool_calls
    assert [c.id for c in calls] == ["a", "b"]  # nosec B101
    assert [c.function.arguments for c in calls] == [{"x": 1}, {"y": 2}]  # nosec B101
    assert [c.index for c in calls] == [0, 1]  # nosec B101


def test_deltas_without_index_or_id_extend_the_latest_call():
    out = _run(
        tool_chunk(None, id="a", name="lookup", arguments='{"k": '),
        tool_chunk(None, arguments='"v"}'),
    )
    calls = out[-1].message.tool_calls
    assert len(calls) == 1 and calls[0].function.arguments == {"k": "v"}  # nosec B101


def test_unparseable_accumulated_arguments_drop_call(log_events):
    out = _run(
        tool_chunk(0, id="c0", name="a", arguments='{"x": '),
        tool_chunk(1, id="c1", name="b", arguments='{"ok": true}'),
        content_chunk("text"),
    )
    terminal = out[-1]
    assert [c.id for c in terminal.message.tool_calls] == ["c1"]  # nosec B101
    assert terminal.message.content == "text"  # nosec B101
    assert any(e.get("event") == "stream.tool_call_dropped" and e["index"] == 0 for e in log_events)  # nosec B101


def test_stream_without_sentinel_still_emits_terminal():
    out = _run(content_chunk("a"), content_chunk("b", finish_reason="length"), done=False)
    assert out[-1].done is True and out[-1].message.content == "ab"  # nosec B101
    # Normal closure without a sentinel reports "stop" regardless of earlier finish reasons.
    assert out[-1].done_reason == "stop"  # nosec B101


def test_sentinel_keeps_last_finish_reason():
    out = _run(content_chunk("a", finish_reason="length"))
    assert out[-1].done_reason == "length"  # nosec B101


def test_sentinel_stops_reading_further_frames():
    lines = _lines(content_chunk("a")) + ["data: " + json.dumps(content_chunk("ignored"))]
    out = []
    StreamTranscoder(out.append, model="m").run(lines)
    assert [r.message.content for r in out] == ["a", "a"]  # nosec B101
    assert out[-1].done is True  # nosec B101


def test_empty_choices_skipped_and_usage_recorded():
    usage_chunk = {"choices": [], "usage": {"prompt_tokens": 9, "completion_tokens": 2, "total_tokens": 11}}
    out = _run(content_chunk("hi"), usage_chunk)
    assert len(out) == 2  # nosec B101
    assert out[-1].prompt_eval_count == 9 and out[-1].eval_count == 2  # nosec B101


def test_terminal_without_usage_leaves_counters_unset():
    out = _run(content_chunk("hi"))
    assert out[-1].prompt_eval_count is None and out[-1].eval_count is None  # nosec B101


def test_malformed_chunk_is_logged_and_skipped(log_events):
    out = _run("{not json", content_chunk("ok"))
    assert [r.message.content for r in out] == ["ok", "ok"]  # nosec B101
    assert any(e.get("event") == "stream.decode_error" for e in log_events)  # nosec B101


def test_finalize_event_logged(log_events):
    _run(content_chunk("x"))
    finalize = [e for e in log_events if e.get("event") == "stream.finalize"]
    assert len(finalize) == 1  # nosec B101
    assert finalize[0]["emitted"] == 2 and finalize[0]["done_reason"] == "stop"  # nosec B101


def test_sink_error_propagates_and_stops_reading():
    seen = []

    class Boom(Exception):
        pass

    def sink(resp):
        seen.append(resp)
        raise Boom("client went away")

    with pytest.raises(Boom):
        StreamTranscoder(sink, model="m").run(_lines(content_chunk("a"), content_chunk("b")))
    assert len(seen) == 1 and seen[0].message.content == "a"  # nosec B101


def test_read_failure_raises_stream_read_error_without_terminal():
    def lines():
        yield "data: " + json.dumps(content_chunk("partial"))
        raise OSError("connection reset")

    out = []
    with pytest.raises(StreamReadError) as info:
        StreamTranscoder(out.append, model="m").run(lines())
    assert [r.done for r in out] == [False]  # nosec B101
    assert isinstance(info.value.raw, OSError)  # nosec B101


def test_cancellation_stops_stream_without_terminal():
    token = CancellationToken()
    out = []

    def sink(resp):
        out.append(resp)
        token.cancel("user abort")

    with pytest.raises(CancelledError):
        StreamTranscoder(sink, model="m", cancellation_token=token).run(
            _lines(content_chunk("a"), content_chunk("b"))
        )
    assert [r.message.content for r in out] == ["a"]  # nosec B101
    assert not any(r.done for r in out)  # nosec B101


def test_read_failure_after_cancel_reports_cancellation():
    token = CancellationToken()

    def lines():
        yield "data: " + json.dumps(content_chunk("a"))
        token.cancel("closing")
        raise RuntimeError("stream closed")

    with pytest.raises(CancelledError):
        StreamTranscoder(lambda r: None, model="m", cancellation_token=token).run(lines())


def test_feed_and_finish_are_idempotent_after_sentinel():
    out = []
    transcoder = StreamTranscoder(out.append, model="m")
    assert transcoder.feed(json.dumps(content_chunk("a"))) is False  # nosec B101
    assert transcoder.feed("[DONE]") is True  # nosec B101
    transcoder.finish()
    assert transcoder.feed(json.dumps(content_chunk("late"))) is True  # nosec B101
    assert [r.done for r in out] == [False, True]  # nosec B101
