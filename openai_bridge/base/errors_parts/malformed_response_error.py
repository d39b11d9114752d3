"""Malformed remote response errors."""
from __future__ import annotations

from dataclasses import dataclass

from .bridge_error import BridgeError
from .error_code import ErrorCode


@dataclass(eq=False)
class MalformedResponseError(BridgeError):
    """A successful HTTP response whose body does not match the wire schema."""

    code: ErrorCode = ErrorCode.INTERNAL


@dataclass(eq=False)
class EmptyChoiceError(MalformedResponseError):
    """The remote reported zero choices for a non-streaming completion."""


__all__ = ["MalformedResponseError", "EmptyChoiceError"]
