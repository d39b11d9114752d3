"""Conversion failure raised when local data cannot be mapped to the wire shape."""
from __future__ import annotations

from dataclasses import dataclass

from .bridge_error import BridgeError
from .error_code import ErrorCode


@dataclass(eq=False)
class ConversionError(BridgeError):
    """Local request data could not be expressed on the wire.

    Fatal to the call that raised it and never retried. Typical causes are
    unserializable tool-call arguments, option values of the wrong type, or an
    unusable remote base URL.
    """

    code: ErrorCode = ErrorCode.VALIDATION


__all__ = ["ConversionError"]
