"""Unified bridge error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``openai_bridge.base.errors_parts`` to maintain a stable import path.

Taxonomy
--------
- ``ConversionError``: local data could not be mapped to the wire shape.
- ``RemoteAPIError``: non-2xx HTTP status, with the status and the raw body.
- ``RemoteConnectionError``: no response could be obtained at all.
- ``StreamReadError``: the body read failed mid-way.
- ``MalformedResponseError`` / ``EmptyChoiceError``: a 2xx body that does not
  fit the wire schema, or reports zero choices.

Cooperative cancellation is signalled separately via
:class:`openai_bridge.base.cancellation.CancelledError`.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.bridge_error import BridgeError
from .errors_parts.conversion_error import ConversionError
from .errors_parts.remote_api_error import RemoteAPIError
from .errors_parts.remote_connection_error import RemoteConnectionError
from .errors_parts.stream_read_error import StreamReadError
from .errors_parts.malformed_response_error import MalformedResponseError, EmptyChoiceError
from .errors_parts.classification import classify_exception, code_for_status

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
