"""Shared HTTP client pool for bridged calls.

Purpose:
    Provide a centralized, thread-safe pool of reusable ``httpx.Client``
    instances so that concurrent bridged calls share connections instead of
    paying a per-call handshake. This is the only mutable state shared across
    calls.

Timeout strategy:
    - Each client is created with the ``httpx.Timeout`` derived from
      :func:`get_timeout_config` at the time of first creation.

Lifecycle & cleanup:
    - Clients are cached by a ``purpose`` string (e.g. ``"chat"``). Base URLs
      are not bound to the client; callers pass absolute URLs so one pool
      serves every remote host.
    - All clients are closed at interpreter exit via ``atexit``. Tests may
      also call :func:`close_all_clients` explicitly.
"""

from __future__ import annotations

import atexit
import threading
from contextlib import suppress
from typing import Dict

import httpx

from ..timeouts import get_timeout_config

_CLIENTS: Dict[str, httpx.Client] = {}
_LOCK = threading.RLock()


def get_httpx_client(purpose: str = "chat") -> httpx.Client:
    """Return a pooled ``httpx.Client`` for the given purpose.

    Parameters:
        purpose: A short string discriminating separate pools. Keep stable to
            maximize reuse.

    Returns:
        A reusable ``httpx.Client`` instance.

    Thread-safety:
        Safe for concurrent use; creation is guarded by a re-entrant lock.
    """
    client = _CLIENTS.get(purpose)
    if client is not None and not client.is_closed:
        return client

    with _LOCK:
        client = _CLIENTS.get(purpose)
        if client is not None and not client.is_closed:
            return client
        client = httpx.Client(timeout=get_timeout_config().to_httpx_timeout())
        _CLIENTS[purpose] = client
        return client


def close_all_clients() -> None:
    """Close and clear all pooled HTTP clients."""
    with _LOCK:
        for c in _CLIENTS.values():
            # Interpreter-exit teardown; close failures are non-actionable.
            with suppress(Exception):  # nosec B110
                c.close()
        _CLIENTS.clear()


atexit.register(close_all_clients)

__all__ = ["get_httpx_client", "close_all_clients"]
