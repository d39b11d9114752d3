"""
Structured bridge error exception type.

Root of the error taxonomy raised by the transcoders and the transport. Every
subclass carries a normalized `ErrorCode` so callers can branch on the failure
category without string matching.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass(eq=False)
class BridgeError(Exception):
    """Represents a structured bridge failure with a normalized error code.

    Attributes:
        message: Human-readable error message suitable for logging.
        code: Normalized :class:`ErrorCode` classification for the failure.
        raw: Optional original exception for diagnostics.
    """

    message: str
    code: ErrorCode = ErrorCode.UNKNOWN
    raw: Optional[BaseException] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.code.value}: {self.message}"


__all__ = ["BridgeError"]
