"""
Chat-completions response -> canonical response (non-streaming path).

Also hosts the tool-argument parsing shared with the streaming transcoder:
arguments arrive as raw JSON text and must become a mapping before a tool
call is considered complete.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError

from ..base.constants import DEFAULT_DONE_REASON
from ..base.errors import EmptyChoiceError, MalformedResponseError
from ..base.logging import get_logger, log_event
from ..base.models import ChatResponse, Message, Role, ToolCall, ToolCallFunction
from ..base.wire import ChatCompletion, WireToolCall, content_text

_logger = get_logger("bridge.transcode.response")


def parse_tool_arguments(raw: Optional[str]) -> Dict[str, Any]:
    """Parse a raw argument string into a mapping.

    An empty or missing string yields ``{}``.

    Raises:
        ValueError: The text is not JSON or does not decode to an object.
    """
    if raw is None or not raw.strip():
        return {}
    value = json.loads(raw)
    if not isinstance(value, dict):
        raise ValueError(f"tool arguments must decode to an object, got {type(value).__name__}")
    return value


def timestamp_from_epoch(created: Optional[int]) -> datetime:
    """Return the UTC datetime for ``created`` seconds, or now when absent."""
    if created is None:
        return datetime.now(timezone.utc)
    return datetime.fromtimestamp(created, tz=timezone.utc)


def _convert_tool_calls(calls: Optional[List[WireToolCall]], model: Optional[str]) -> List[ToolCall]:
    out: List[ToolCall] = []
    for call in calls or []:
        try:
            arguments = parse_tool_arguments(call.function.arguments)
        except ValueError as exc:
            log_event(
                _logger,
                "response.tool_call_dropped",
                level=logging.WARNING,
                model=model,
                tool_call_id=call.id,
                tool_name=call.function.name,
                error=str(exc),
            )
            continue
        out.append(ToolCall(id=call.id, function=ToolCallFunction(name=call.function.name, arguments=arguments)))
    return out


def _role_of(value: Optional[str]) -> Role:
    try:
        return Role(value)
    except ValueError:
        return Role.ASSISTANT


def parse_completion(body: Union[bytes, str]) -> ChatCompletion:
    """Validate a raw JSON response body.

    Raises:
        MalformedResponseError: The body is not JSON or does not fit the schema.
    """
    try:
        return ChatCompletion.model_validate_json(body)
    except ValidationError as exc:
        raise MalformedResponseError(message=f"invalid chat completion body: {exc}", raw=exc) from exc


def from_wire_response(completion: ChatCompletion, model: Optional[str] = None) -> ChatResponse:
    """Map a complete remote response to one terminal canonical response.

    Parameters:
        completion: Validated remote response.
        model: Fallback model name when the remote does not report one.

    Raises:
        EmptyChoiceError: The remote returned zero choices.
    """
    if not completion.choices:
        raise EmptyChoiceError(message="remote returned no choices")
    choice = completion.choices[0]
    wire_msg = choice.message
    resolved_model = completion.model or model or ""

    message = Message(
        role=_role_of(wire_msg.role),
        content=content_text(wire_msg.content),
        tool_calls=_convert_tool_calls(wire_msg.tool_calls, resolved_model),
        thinking=wire_msg.reasoning or None,
    )
    usage = completion.usage
    return ChatResponse(
        model=resolved_model,
        created_at=timestamp_from_epoch(completion.created),
        message=message,
        done=True,
        done_reason=choice.finish_reason or DEFAULT_DONE_REASON,
        prompt_eval_count=usage.prompt_tokens if usage else None,
        eval_count=usage.completion_tokens if usage else None,
    )


__all__ = [
    "parse_completion",
    "from_wire_response",
    "parse_tool_arguments",
    "timestamp_from_epoch",
]
