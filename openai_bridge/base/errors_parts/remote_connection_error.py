"""Failure to obtain any response from the remote."""
from __future__ import annotations

from dataclasses import dataclass

from .bridge_error import BridgeError
from .error_code import ErrorCode


@dataclass(eq=False)
class RemoteConnectionError(BridgeError):
    """Connecting to the remote or waiting for its response headers failed."""

    code: ErrorCode = ErrorCode.TRANSIENT


__all__ = ["RemoteConnectionError"]
