"""Remote API error carrying the HTTP status and the verbatim response body."""
from __future__ import annotations

from dataclasses import dataclass

from .bridge_error import BridgeError
from .error_code import ErrorCode


@dataclass(eq=False)
class RemoteAPIError(BridgeError):
    """The remote answered with a non-2xx status.

    Attributes:
        status_code: HTTP status returned by the remote.
        body: Response body exactly as received, never partially parsed, so
            callers can surface provider-specific diagnostics.

    When no explicit ``code`` is supplied it is derived from ``status_code``.
    """

    status_code: int = 0
    body: str = ""

    def __post_init__(self) -> None:
        if self.code is ErrorCode.UNKNOWN:
            # Local import keeps classification free to import this module.
            from .classification import code_for_status

            self.code = code_for_status(self.status_code)

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"remote API returned status {self.status_code}: {self.body}"


__all__ = ["RemoteAPIError"]
