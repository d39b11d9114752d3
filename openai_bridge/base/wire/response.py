"""Non-streaming chat-completions response body."""

from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from .message import WireMessage
from .wire_model import WireModel


class Usage(WireModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: Optional[int] = None


class Choice(WireModel):
    index: int = 0
    message: WireMessage = Field(default_factory=lambda: WireMessage(role="assistant"))
    finish_reason: Optional[str] = None


class ChatCompletion(WireModel):
    """A complete response; only ``choices[0]`` is ever consumed."""

    id: Optional[str] = None
    created: Optional[int] = None
    model: Optional[str] = None
    choices: List[Choice] = Field(default_factory=list)
    usage: Optional[Usage] = None


__all__ = ["Usage", "Choice", "ChatCompletion"]
