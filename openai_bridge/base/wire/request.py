"""Chat-completions request body."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import Field

from .message import WireMessage
from .wire_model import WireModel


class Reasoning(WireModel):
    """Reasoning-effort directive (``{"effort": "high"}``)."""

    effort: str


class ResponseFormat(WireModel):
    """Structured-output selector.

    ``json_object`` asks for any JSON object; ``json_schema`` carries
    ``{"name": ..., "schema": {...}}`` in ``json_schema``.
    """

    type: Literal["text", "json_object", "json_schema"]
    json_schema: Optional[Dict[str, Any]] = None


class ChatCompletionRequest(WireModel):
    model: str
    messages: List[WireMessage] = Field(default_factory=list)
    stream: bool = False
    tools: Optional[List[Dict[str, Any]]] = None
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    max_tokens: Optional[int] = None
    seed: Optional[int] = None
    frequency_penalty: Optional[float] = None
    presence_penalty: Optional[float] = None
    reasoning: Optional[Reasoning] = None
    response_format: Optional[ResponseFormat] = None


__all__ = ["Reasoning", "ResponseFormat", "ChatCompletionRequest"]
