"""
Canonical chat request.

This is the request the native chat endpoint has already fully assembled
(history, tool definitions, options) by the time it decides to forward the
call to a remote OpenAI-compatible service.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Mapping, Optional, Union

from .message import Message
from .sampling_options import SamplingOptions


# Absent, a boolean switch, or a named reasoning effort level ("low", "high", ...).
ThinkDirective = Optional[Union[bool, str]]

# "json" for free-form JSON output, or a JSON Schema mapping.
OutputFormat = Optional[Union[Literal["json"], Dict[str, Any]]]


@dataclass
class ChatRequest:
    """Native chat request handed to the bridge.

    Attributes:
        model: Native model identifier (used as the remote model unless an
            explicit remote alias is supplied at send time).
        messages: Ordered conversation history.
        stream: Whether the caller wants incremental responses.
        options: Open-ended native options mapping, or pre-validated
            :class:`SamplingOptions`.
        tools: Tool definitions, passed through to the remote unmodified.
        think: Reasoning directive; only the string form is forwarded.
        format: Structured-output request (``"json"`` or a JSON Schema).
    """

    model: str
    messages: List[Message] = field(default_factory=list)
    stream: bool = False
    options: Optional[Union[Mapping[str, Any], SamplingOptions]] = None
    tools: Optional[List[Dict[str, Any]]] = None
    think: ThinkDirective = None
    format: OutputFormat = None

    def sampling_options(self) -> SamplingOptions:
        """Return the validated sampling options for this request."""
        if isinstance(self.options, SamplingOptions):
            return self.options
        return SamplingOptions.from_mapping(self.options)


__all__ = ["ChatRequest", "ThinkDirective", "OutputFormat"]
