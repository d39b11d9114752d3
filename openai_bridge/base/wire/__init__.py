"""
Pydantic models for the OpenAI-compatible chat-completions wire protocol.

Parsing is lenient about unknown fields (remotes add vendor extensions) but
strict about the shapes the bridge actually reads. Serialization via
``to_payload()`` drops ``None`` so unset sampling parameters fall back to the
remote's defaults.
"""

from .wire_model import WireModel
from .content import TextPart, ImageUrl, ImagePart, ContentPart, MessageContent, content_text
from .message import WireFunctionCall, WireToolCall, WireMessage
from .request import Reasoning, ResponseFormat, ChatCompletionRequest
from .response import Usage, Choice, ChatCompletion
from .chunk import FunctionDelta, ToolCallDelta, ChoiceDelta, ChunkChoice, ChatCompletionChunk

__all__ = [
    "WireModel",
    "TextPart",
    "ImageUrl",
    "ImagePart",
    "ContentPart",
    "MessageContent",
    "content_text",
    "WireFunctionCall",
    "WireToolCall",
    "WireMessage",
    "Reasoning",
    "ResponseFormat",
    "ChatCompletionRequest",
    "Usage",
    "Choice",
    "ChatCompletion",
    "FunctionDelta",
    "ToolCallDelta",
    "ChoiceDelta",
    "ChunkChoice",
    "ChatCompletionChunk",
]
