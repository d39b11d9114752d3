"""Base shared constants for the bridge.

Central location to avoid scattering wire-level magic strings.
"""
from __future__ import annotations

# Path appended to a remote base URL unless already present.
CHAT_COMPLETIONS_PATH = "/v1/chat/completions"

# Server-sent events framing.
SSE_DATA_FIELD = "data:"
STREAM_DONE_SENTINEL = "[DONE]"

# finish/done reason used when the remote does not report one.
DEFAULT_DONE_REASON = "stop"

# Images are inlined as data URIs; the canonical model carries no MIME type.
DEFAULT_IMAGE_MIME = "image/jpeg"

# Wire tool-call type; the only one the chat-completions protocol defines.
TOOL_CALL_TYPE = "function"

# Provider label used in log contexts.
REMOTE_PROVIDER_LABEL = "openai-compatible"

__all__ = [
    "CHAT_COMPLETIONS_PATH",
    "SSE_DATA_FIELD",
    "STREAM_DONE_SENTINEL",
    "DEFAULT_DONE_REASON",
    "DEFAULT_IMAGE_MIME",
    "TOOL_CALL_TYPE",
    "REMOTE_PROVIDER_LABEL",
]
