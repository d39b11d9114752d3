"""Wire chat message and tool-call shapes."""

from __future__ import annotations

from typing import List, Optional

from pydantic import AliasChoices, Field

from ..constants import TOOL_CALL_TYPE
from .content import MessageContent
from .wire_model import WireModel


class WireFunctionCall(WireModel):
    """Function name plus raw JSON argument string."""

    name: str = ""
    arguments: str = ""


class WireToolCall(WireModel):
    id: str = ""
    type: str = TOOL_CALL_TYPE
    function: WireFunctionCall = Field(default_factory=WireFunctionCall)


class WireMessage(WireModel):
    """A chat-completions message (request or non-streaming response).

    Reasoning text is accepted under either ``reasoning`` or
    ``reasoning_content`` (both spellings exist in the wild) and is always
    emitted as ``reasoning``.
    """

    role: str
    content: Optional[MessageContent] = None
    reasoning: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("reasoning", "reasoning_content"),
    )
    tool_calls: Optional[List[WireToolCall]] = None
    tool_call_id: Optional[str] = None
    name: Optional[str] = None


__all__ = ["WireFunctionCall", "WireToolCall", "WireMessage"]
