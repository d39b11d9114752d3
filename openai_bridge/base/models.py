"""
Canonical (native) chat models public surface.

This module re-exports the one-class-per-file implementations under
``openai_bridge.base.models_parts``. These are the request/response shapes the
host system uses internally, independent of any remote provider's wire format.
"""

from .models_parts.tool_call import ToolCall, ToolCallFunction
from .models_parts.message import Message, Role, ImageData, image_to_base64
from .models_parts.sampling_options import SamplingOptions, RECOGNIZED_OPTION_KEYS
from .models_parts.chat_request import ChatRequest, ThinkDirective, OutputFormat
from .models_parts.chat_response import ChatResponse

__all__ = [
    "ToolCall",
    "ToolCallFunction",
    "Message",
    "Role",
    "ImageData",
    "image_to_base64",
    "SamplingOptions",
    "RECOGNIZED_OPTION_KEYS",
    "ChatRequest",
    "ThinkDirective",
    "OutputFormat",
    "ChatResponse",
]
