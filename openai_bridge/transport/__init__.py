"""Outbound transport to OpenAI-compatible remotes."""

from .remote_client import RemoteChatClient, resolve_chat_completions_url, send

__all__ = ["RemoteChatClient", "resolve_chat_completions_url", "send"]
