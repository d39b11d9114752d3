"""
Canonical request -> chat-completions request.

Pure mapping; no I/O. Message order and roles are preserved one-to-one.
Failures to represent local data on the wire raise ``ConversionError`` and
abort the whole conversion.
"""

from __future__ import annotations

import json
import logging
from typing import List, Optional

from ..base.constants import DEFAULT_IMAGE_MIME, TOOL_CALL_TYPE
from ..base.errors import ConversionError
from ..base.logging import get_logger, log_event
from ..base.models import ChatRequest, Message, Role, ToolCall, image_to_base64
from ..base.wire import (
    ChatCompletionRequest,
    ContentPart,
    ImagePart,
    ImageUrl,
    MessageContent,
    Reasoning,
    ResponseFormat,
    TextPart,
    WireFunctionCall,
    WireMessage,
    WireToolCall,
)

_logger = get_logger("bridge.transcode.request")


def _image_data_uri(image) -> str:
    return f"data:{DEFAULT_IMAGE_MIME};base64,{image_to_base64(image)}"


def _content_for(message: Message) -> MessageContent:
    if not message.images:
        return message.content
    parts: List[ContentPart] = []
    if message.content:
        parts.append(TextPart(text=message.content))
    for image in message.images:
        parts.append(ImagePart(image_url=ImageUrl(url=_image_data_uri(image))))
    return parts


def _wire_tool_call(call: ToolCall) -> WireToolCall:
    try:
        arguments = json.dumps(call.function.arguments, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise ConversionError(
            message=f"tool call {call.id!r} arguments are not JSON serializable: {exc}",
            raw=exc,
        ) from exc
    return WireToolCall(
        id=call.id,
        type=TOOL_CALL_TYPE,
        function=WireFunctionCall(name=call.function.name, arguments=arguments),
    )


def to_wire_message(message: Message) -> WireMessage:
    """Map one canonical message to its wire form."""
    wire = WireMessage(role=message.role.value, content=_content_for(message))
    if message.tool_calls:
        wire.tool_calls = [_wire_tool_call(tc) for tc in message.tool_calls]
    if message.thinking:
        wire.reasoning = message.thinking
    if message.role is Role.TOOL:
        if message.tool_call_id:
            wire.tool_call_id = message.tool_call_id
        if message.tool_name:
            wire.name = message.tool_name
    return wire


def _reasoning_for(request: ChatRequest) -> Optional[Reasoning]:
    think = request.think
    if isinstance(think, str) and think:
        return Reasoning(effort=think)
    if think is not None:
        # Only an effort level has a wire counterpart.
        log_event(
            _logger,
            "request.think_ignored",
            level=logging.DEBUG,
            model=request.model,
            think=think,
        )
    return None


def _response_format_for(request: ChatRequest) -> Optional[ResponseFormat]:
    fmt = request.format
    if fmt is None:
        return None
    if fmt == "json":
        return ResponseFormat(type="json_object")
    if isinstance(fmt, dict):
        return ResponseFormat(type="json_schema", json_schema={"name": "response", "schema": fmt})
    raise ConversionError(message=f"unsupported output format {fmt!r}; expected 'json' or a JSON schema")


def to_wire_request(request: ChatRequest, remote_model: Optional[str] = None) -> ChatCompletionRequest:
    """Build the chat-completions request for ``request``.

    Parameters:
        request: Fully assembled canonical request.
        remote_model: Model alias on the remote; defaults to ``request.model``.

    Returns:
        A ``ChatCompletionRequest`` ready to serialize with ``to_payload()``.

    Raises:
        ConversionError: Tool-call arguments cannot be serialized, an option
            has the wrong type, or ``format`` has an unsupported shape.
    """
    wire = ChatCompletionRequest(
        model=remote_model or request.model,
        messages=[to_wire_message(m) for m in request.messages],
        stream=bool(request.stream),
        tools=request.tools,
        reasoning=_reasoning_for(request),
        response_format=_response_format_for(request),
        **request.sampling_options().to_wire_params(),
    )
    return wire


__all__ = ["to_wire_request", "to_wire_message"]
