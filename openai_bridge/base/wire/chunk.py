"""
Streaming chunk body (one ``data:`` frame).

Each tool-call delta normally carries an ``index`` naming the in-progress
call it extends; some remotes omit it and send every call as one whole
delta. ``id`` and ``function.name`` usually arrive only on the first delta
for an index while ``function.arguments`` arrives as raw JSON text fragments.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import AliasChoices, Field

from .response import Usage
from .wire_model import WireModel


class FunctionDelta(WireModel):
    name: Optional[str] = None
    arguments: Optional[str] = None


class ToolCallDelta(WireModel):
    index: Optional[int] = None
    id: Optional[str] = None
    type: Optional[str] = None
    function: Optional[FunctionDelta] = None


class ChoiceDelta(WireModel):
    role: Optional[str] = None
    content: Optional[str] = None
    reasoning: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("reasoning", "reasoning_content"),
    )
    tool_calls: Optional[List[ToolCallDelta]] = None


class ChunkChoice(WireModel):
    index: int = 0
    delta: ChoiceDelta = Field(default_factory=ChoiceDelta)
    finish_reason: Optional[str] = None


class ChatCompletionChunk(WireModel):
    id: Optional[str] = None
    created: Optional[int] = None
    model: Optional[str] = None
    choices: List[ChunkChoice] = Field(default_factory=list)
    usage: Optional[Usage] = None


__all__ = ["FunctionDelta", "ToolCallDelta", "ChoiceDelta", "ChunkChoice", "ChatCompletionChunk"]
