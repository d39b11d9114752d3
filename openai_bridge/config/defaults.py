"""openai_bridge.config.defaults
=============================

Small, stable default values for remote endpoint configuration. No I/O and
no imports from the rest of the package, so any layer may import it.
"""

from __future__ import annotations

# Environment variable naming an optional JSON/YAML endpoint config file.
CONFIG_FILE_ENV = "BRIDGE_CONFIG_FILE"

# Remotes speak the OpenAI chat-completions protocol unless configured otherwise.
DEFAULT_REMOTE_PROTOCOL = "openai"

# Built-in per-endpoint defaults, keyed by lower-case endpoint name. The
# ``"*"`` entry applies to every endpoint.
DEFAULTS = {
    "*": {"protocol": DEFAULT_REMOTE_PROTOCOL, "api_key": ""},
    "openai": {"base_url": "https://api.openai.com"},
    "openrouter": {"base_url": "https://openrouter.ai/api"},
}

__all__ = ["CONFIG_FILE_ENV", "DEFAULT_REMOTE_PROTOCOL", "DEFAULTS"]
