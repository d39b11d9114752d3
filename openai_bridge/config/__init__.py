"""Remote endpoint configuration.

Goals
-----
* Resolve the base URL, credential, model alias and protocol of a named
  remote endpoint from layered sources.
* Merge sources in a predictable order (later wins):
    1. Built-in defaults (``config.defaults.DEFAULTS``)
    2. Optional external config file (JSON or YAML) named by BRIDGE_CONFIG_FILE
    3. Environment variables (``<NAME>_BASE_URL``, ``<NAME>_API_KEY``, ...)
    4. In-code overrides passed to the helper
* Make protocol selection an explicit flag. Nothing inspects the URL shape
  to guess whether a remote is OpenAI-compatible.

External Config File (Optional)
-------------------------------
JSON is tried first, then YAML. Structure example::

    my-proxy:
      base_url: https://llm.internal.example
      api_key: sk-...
      model: gpt-4o-mini
      protocol: openai

Public API
----------
* load_remote_endpoint(name, overrides=None) -> RemoteEndpoint
* get_endpoint_config(name, overrides=None) -> dict
* reset_config_cache()
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import httpx
import yaml

from ..base.errors import ConversionError
from ..base.logging import get_logger, log_event
from .defaults import CONFIG_FILE_ENV, DEFAULTS
from .env import env_overrides

_logger = get_logger("bridge.config")

# (path, mtime) -> parsed file contents
_FILE_CACHE: Dict[Tuple[str, float], Dict[str, Any]] = {}


class RemoteProtocol(str, Enum):
    """Wire protocol spoken by a remote endpoint."""

    OPENAI = "openai"
    NATIVE = "native"


@dataclass(frozen=True)
class RemoteEndpoint:
    """Resolved configuration of one remote endpoint.

    Attributes:
        name: Endpoint name used for lookup.
        base_url: Remote base URL.
        api_key: Pre-resolved credential (may be empty).
        model: Remote model alias; ``None`` forwards the canonical model name.
        protocol: Explicit wire protocol of the remote.
    """

    name: str
    base_url: str
    api_key: str = ""
    model: Optional[str] = None
    protocol: RemoteProtocol = RemoteProtocol.OPENAI

    def client(self, http_client: Optional[httpx.Client] = None):
        """Return a ``RemoteChatClient`` for this endpoint.

        Raises:
            ConversionError: The endpoint does not speak the OpenAI protocol.
        """
        if self.protocol is not RemoteProtocol.OPENAI:
            raise ConversionError(
                message=f"endpoint {self.name!r} uses protocol {self.protocol.value!r}; "
                "only OpenAI-compatible remotes can be bridged"
            )
        # Local import: transport depends on base layers only, not on config.
        from ..transport.remote_client import RemoteChatClient

        return RemoteChatClient(
            self.base_url,
            api_key=self.api_key,
            http_client=http_client,
            remote_model=self.model,
        )


def reset_config_cache() -> None:
    """Forget parsed config files (tests and long-lived processes)."""
    _FILE_CACHE.clear()


def _parse_config_text(text: str) -> Any:
    try:
        return json.loads(text)
    except ValueError:
        return yaml.safe_load(text)


def _load_external_config() -> Dict[str, Any]:
    path = os.getenv(CONFIG_FILE_ENV)
    if not path:
        return {}
    p = Path(path).expanduser()
    if not p.is_file():
        log_event(_logger, "config.file_missing", level=logging.WARNING, path=str(p))
        return {}
    key = (str(p.resolve()), p.stat().st_mtime)
    cached = _FILE_CACHE.get(key)
    if cached is not None:
        return cached
    try:
        data = _parse_config_text(p.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        log_event(_logger, "config.file_invalid", level=logging.WARNING, path=str(p), error=str(exc))
        data = {}
    if not isinstance(data, dict):
        data = {}
    _FILE_CACHE[key] = data
    return data


def get_endpoint_config(name: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return the merged configuration mapping for endpoint ``name``.

    Merge order (later wins): defaults -> external config -> env vars -> overrides
    """
    key = (name or "").lower().strip()
    cfg: Dict[str, Any] = {}

    # 1. Defaults
    cfg |= DEFAULTS.get("*", {})
    cfg |= DEFAULTS.get(key, {})

    # 2. External config file section
    file_cfg = _load_external_config().get(key)
    if isinstance(file_cfg, dict):
        cfg |= file_cfg

    # 3. Env overrides
    cfg |= env_overrides(key)

    # 4. Explicit overrides arg
    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}

    return cfg


def load_remote_endpoint(name: str, overrides: Optional[Dict[str, Any]] = None) -> RemoteEndpoint:
    """Resolve endpoint ``name`` into a :class:`RemoteEndpoint`.

    Raises:
        ConversionError: No base URL is configured or the protocol is unknown.
    """
    cfg = get_endpoint_config(name, overrides)
    base_url = cfg.get("base_url")
    if not base_url:
        raise ConversionError(message=f"no base_url configured for endpoint {name!r}")
    raw_protocol = str(cfg.get("protocol") or RemoteProtocol.OPENAI.value).strip().lower()
    try:
        protocol = RemoteProtocol(raw_protocol)
    except ValueError as exc:
        raise ConversionError(message=f"unknown protocol {raw_protocol!r} for endpoint {name!r}", raw=exc) from exc
    return RemoteEndpoint(
        name=name,
        base_url=str(base_url),
        api_key=str(cfg.get("api_key") or ""),
        model=cfg.get("model") or None,
        protocol=protocol,
    )


__all__ = [
    "RemoteProtocol",
    "RemoteEndpoint",
    "load_remote_endpoint",
    "get_endpoint_config",
    "reset_config_cache",
]
