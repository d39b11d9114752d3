"""Pure mappings between canonical chat models and the chat-completions wire schema."""

from .request import to_wire_request, to_wire_message
from .response import from_wire_response, parse_completion, parse_tool_arguments
from .sse import iter_sse_data
from .streaming import Sink, StreamAccumulator, StreamTranscoder, ToolCallSlot

__all__ = [
    "to_wire_request",
    "to_wire_message",
    "from_wire_response",
    "parse_completion",
    "parse_tool_arguments",
    "iter_sse_data",
    "Sink",
    "StreamAccumulator",
    "StreamTranscoder",
    "ToolCallSlot",
]
