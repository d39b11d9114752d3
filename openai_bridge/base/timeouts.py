"""Unified timeout configuration for bridged calls.

This module centralizes the timeout values used by the transport so that no
ad-hoc numeric literals are scattered across call sites.

Key Components
--------------
TimeoutConfig
    Frozen dataclass capturing normalized timeout values in seconds.

get_timeout_config()
    Returns a process-cached configuration, re-reading environment overrides
    only when they change. Supported environment variables (all optional):
        BRIDGE_TIMEOUT_REMOTE_SECONDS
        BRIDGE_TIMEOUT_CONNECT_SECONDS

to_httpx_timeout()
    Builds the ``httpx.Timeout`` applied to each outbound call.

Design Constraints
------------------
1. A bounded, multi-minute limit on every single network operation (each
   read, write and pool wait), generous enough for long pauses between
   tokens. It is not a deadline for the whole call: a stream that keeps
   producing bytes runs until the remote finishes or the caller cancels.
2. Avoid per-call env parsing (cache keyed on the raw env values).
3. Invalid or non-positive overrides fall back to the defaults.
"""
from __future__ import annotations

import os
from dataclasses import dataclass

import httpx


REMOTE_TIMEOUT_ENV = "BRIDGE_TIMEOUT_REMOTE_SECONDS"
CONNECT_TIMEOUT_ENV = "BRIDGE_TIMEOUT_CONNECT_SECONDS"


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        remote_timeout_seconds: Ceiling for each read/write/pool wait of one
            remote call. Streaming generations can pause for a long time
            between tokens, hence the multi-minute default.
        connect_timeout_seconds: Timeout for establishing the outbound
            connection.
    """

    remote_timeout_seconds: float = 300.0
    connect_timeout_seconds: float = 30.0

    def to_httpx_timeout(self) -> httpx.Timeout:
        """Return the equivalent ``httpx.Timeout``."""
        return httpx.Timeout(self.remote_timeout_seconds, connect=self.connect_timeout_seconds)


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float) -> float:
    """Parse an environment variable as a positive float with a fallback default."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached :class:`TimeoutConfig` instance."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join([os.getenv(REMOTE_TIMEOUT_ENV, ""), os.getenv(CONNECT_TIMEOUT_ENV, "")])
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED
    defaults = TimeoutConfig()
    _CACHED = TimeoutConfig(
        remote_timeout_seconds=_parse_env_float(REMOTE_TIMEOUT_ENV, defaults.remote_timeout_seconds),
        connect_timeout_seconds=_parse_env_float(CONNECT_TIMEOUT_ENV, defaults.connect_timeout_seconds),
    )
    _ENV_GUARD = guard
    return _CACHED


__all__ = [
    "TimeoutConfig",
    "get_timeout_config",
    "REMOTE_TIMEOUT_ENV",
    "CONNECT_TIMEOUT_ENV",
]
