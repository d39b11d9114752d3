"""Models parts package public surface.

Re-exports individual canonical DTOs so callers can import from
`openai_bridge.base.models_parts` if needed, while `openai_bridge.base.models`
remains the primary stable import path.
"""

from .tool_call import ToolCall, ToolCallFunction
from .message import Message, Role, ImageData, image_to_base64
from .sampling_options import SamplingOptions, RECOGNIZED_OPTION_KEYS
from .chat_request import ChatRequest, ThinkDirective, OutputFormat
from .chat_response import ChatResponse

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
