"""
Bridge Base Package

Exports the provider-agnostic building blocks shared by the transcoders and
the transport:
- Models: canonical (native) chat request/response dataclasses
- Wire: pydantic schema of the chat-completions protocol
- Errors: structured exception taxonomy with normalized error codes
- Cancellation, timeouts, structured logging and the shared HTTP pool
"""

from .models import (
    ChatRequest,
    ChatResponse,
    Message,
    Role,
    SamplingOptions,
    ToolCall,
    ToolCallFunction,
)
from .errors import (
    BridgeError,
    ConversionError,
    EmptyChoiceError,
    ErrorCode,
    MalformedResponseError,
    RemoteAPIError,
    RemoteConnectionError,
    StreamReadError,
    classify_exception,
)
from .cancellation import CancellationToken, CancelledError
from .timeouts import TimeoutConfig, get_timeout_config
from .logging import LogContext, configure_logger, get_logger, log_event, normalized_log_event
from .http import close_all_clients, get_httpx_client

__all__ = [
    "ChatRequest",
    "ChatResponse",
    "Message",
    "Role",
    "SamplingOptions",
    "ToolCall",
    "ToolCallFunction",
    "BridgeError",
    "ConversionError",
    "EmptyChoiceError",
    "ErrorCode",
    "MalformedResponseError",
    "RemoteAPIError",
    "RemoteConnectionError",
    "StreamReadError",
    "classify_exception",
    "CancellationToken",
    "CancelledError",
    "TimeoutConfig",
    "get_timeout_config",
    "LogContext",
    "configure_logger",
    "get_logger",
    "log_event",
    "normalized_log_event",
    "close_all_clients",
    "get_httpx_client",
]
