"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `openai_bridge.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .bridge_error import BridgeError
from .conversion_error import ConversionError
from .remote_api_error import RemoteAPIError
from .remote_connection_error import RemoteConnectionError
from .stream_read_error import StreamReadError
from .malformed_response_error import MalformedResponseError, EmptyChoiceError
from .classification import classify_exception, code_for_status

__all__ = [
    "ErrorCode",
    "BridgeError",
    "ConversionError",
    "RemoteAPIError",
    "RemoteConnectionError",
    "StreamReadError",
    "MalformedResponseError",
    "EmptyChoiceError",
    "classify_exception",
    "code_for_status",
]
