"""openai_bridge.config.env
========================

Environment variable conventions for remote endpoints.

Every endpoint ``name`` maps to the prefix ``name.upper()`` with any
character outside ``[A-Z0-9]`` replaced by ``_`` (``my-proxy`` ->
``MY_PROXY``). Recognized variables::

    <PREFIX>_BASE_URL, <PREFIX>_API_KEY, <PREFIX>_MODEL, <PREFIX>_PROTOCOL

Unset variables contribute nothing; an empty string is a deliberate value
(e.g. clearing an API key).
"""

from __future__ import annotations

import os
import re
from typing import Dict, Mapping, Optional

ENV_FIELD_MAP: Dict[str, str] = {
    "base_url": "BASE_URL",
    "api_key": "API_KEY",  # pragma: allowlist secret - env suffix name, not a secret
    "model": "MODEL",
    "protocol": "PROTOCOL",
}

_NON_ALNUM = re.compile(r"[^A-Z0-9]")


def env_prefix(name: str) -> str:
    """Return the environment prefix for endpoint ``name``."""
    return _NON_ALNUM.sub("_", (name or "").strip().upper())


def get_env_var_name(name: str, field: str) -> Optional[str]:
    """Return the variable holding ``field`` for endpoint ``name`` (None if unknown)."""
    suffix = ENV_FIELD_MAP.get(field)
    if suffix is None:
        return None
    return f"{env_prefix(name)}_{suffix}"


def env_overrides(name: str, environ: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """Collect the endpoint fields set in the environment."""
    source = os.environ if environ is None else environ
    out: Dict[str, str] = {}
    for field in ENV_FIELD_MAP:
        var = get_env_var_name(name, field)
        if var is not None and var in source:
            out[field] = source[var]
    return out


__all__ = ["ENV_FIELD_MAP", "env_prefix", "get_env_var_name", "env_overrides"]
