"""Transport-level failure while reading a response body."""
from __future__ import annotations

from dataclasses import dataclass

from .bridge_error import BridgeError
from .error_code import ErrorCode


@dataclass(eq=False)
class StreamReadError(BridgeError):
    """Reading the remote response body failed part way through.

    Partial responses already delivered to the sink are not retracted; the
    caller decides whether that output is usable.
    """

    code: ErrorCode = ErrorCode.TRANSIENT


__all__ = ["StreamReadError"]
