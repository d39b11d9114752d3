"""Cancellation error type.

Defines the public ``CancelledError`` raised when a bridged call observes a
cancellation request. Kept isolated to satisfy one-class-per-file policy.
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when a call is cancelled cooperatively.

    Distinguishes caller-initiated cancellation from transport failures: no
    terminal response is synthesized and nothing is classified as a remote
    error.
    """


__all__ = ["CancelledError"]
