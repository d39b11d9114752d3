"""Shared builders for fake chat-completions payloads used across tests."""

from __future__ import annotations

import json


def sse_body(*payloads: object, done: bool = True) -> bytes:
    """Encode payloads as a ``text/event-stream`` body.

    Dict payloads are JSON encoded; strings are sent verbatim.
    """
    lines = []
    for payload in payloads:
        data = payload if isinstance(payload, str) else json.dumps(payload)
        lines.append(f"data: {data}\n\n")
    if done:
        lines.append("data: [DONE]\n\n")
    return "".join(lines).encode("utf-8")


def content_chunk(text: str, *, finish_reason=None, model: str = "gpt-remote") -> dict:
    """Build a chat-completions chunk carrying a content delta."""
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion.chunk",
        "created": 1700000000,
        "model": model,
        "choices": [{"index": 0, "delta": {"content": text}, "finish_reason": finish_reason}],
    }


def tool_chunk(index, *, id=None, name=None, arguments=None) -> dict:
    """Build a chunk carrying one tool-call delta (``index=None`` omits the key)."""
    function = {}
    if name is not None:
        function["name"] = name
    if arguments is not None:
        function["arguments"] = arguments
    entry = {"function": function}
    if index is not None:
        entry["index"] = index
    if id is not None:
        entry["id"] = id
        entry["type"] = "function"
    return {
        "id": "chatcmpl-1",
        "created": 1700000000,
        "model": "gpt-remote",
        "choices": [{"index": 0, "delta": {"tool_calls": [entry]}, "finish_reason": None}],
    }


def completion(
    content="hello",
    *,
    finish_reason="stop",
    usage=None,
    tool_calls=None,
    model="gpt-remote",
    **message_fields,
) -> dict:
    """Build a non-streaming chat completion body with a single choice."""
    message = {"role": "assistant", "content": content, **message_fields}
    if tool_calls is not None:
        message["tool_calls"] = tool_calls
    body = {
        "id": "chatcmpl-1",
        "object": "chat.completion",
        "created": 1700000000,
        "model": model,
        "choices": [{"index": 0, "message": message, "finish_reason": finish_reason}],
    }
    if usage is not None:
        body["usage"] = usage
    return body
