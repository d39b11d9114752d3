"""openai_bridge package

Forward native (Ollama-style) chat requests to OpenAI-compatible
chat-completions remotes and translate the answers back, streamed or not.

Public API (re-exported):
    - Version: ``__version__``
    - Models: :class:`ChatRequest`, :class:`ChatResponse`, :class:`Message`,
      :class:`Role`, :class:`ToolCall`, :class:`ToolCallFunction`,
      :class:`SamplingOptions`
    - Transport: :class:`RemoteChatClient`, :func:`send`
    - Transcoders: :func:`to_wire_request`, :func:`from_wire_response`,
      :class:`StreamTranscoder`
    - Configuration: :func:`load_remote_endpoint`, :class:`RemoteEndpoint`,
      :class:`RemoteProtocol`
    - Errors: :class:`BridgeError` and subclasses, :class:`ErrorCode`,
      :class:`CancelledError`

Typical use::

    client = load_remote_endpoint("my-proxy").client()
    client.send(request, sink=responses.append)
"""

from .base.cancellation import CancellationToken, CancelledError
from .base.errors import (
    BridgeError,
    ConversionError,
    EmptyChoiceError,
    ErrorCode,
    MalformedResponseError,
    RemoteAPIError,
    RemoteConnectionError,
    StreamReadError,
)
from .base.models import (
    ChatRequest,
    ChatResponse,
    Message,
    Role,
    SamplingOptions,
    ToolCall,
    ToolCallFunction,
)
from .config import RemoteEndpoint, RemoteProtocol, load_remote_endpoint
from .transcode import StreamTranscoder, from_wire_response, to_wire_request
from .transport import RemoteChatClient, resolve_chat_completions_url, send

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "CancellationToken",
    "CancelledError",
    "BridgeError",
    "ConversionError",
    "EmptyChoiceError",
    "ErrorCode",
    "MalformedResponseError",
    "RemoteAPIError",
    "RemoteConnectionError",
    "StreamReadError",
    "ChatRequest",
    "ChatResponse",
    "Message",
    "Role",
    "SamplingOptions",
    "ToolCall",
    "ToolCallFunction",
    "RemoteEndpoint",
    "RemoteProtocol",
    "load_remote_endpoint",
    "StreamTranscoder",
    "from_wire_response",
    "to_wire_request",
    "RemoteChatClient",
    "resolve_chat_completions_url",
    "send",
]
