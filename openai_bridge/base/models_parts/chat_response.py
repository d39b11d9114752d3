"""
Canonical chat response.

A bridged call delivers one or more of these to the caller's sink: zero or
more partials (``done=False``) carrying only the newest increment, then one
terminal response (``done=True``) carrying the full message and usage.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .message import Message, Role


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ChatResponse:
    """Native chat response.

    Attributes:
        model: Model identifier reported for this response.
        created_at: Creation timestamp (UTC).
        message: The assistant's contribution (an increment for partials).
        done: True only on the terminal response.
        done_reason: Finish reason; meaningful only when ``done`` is True.
        prompt_eval_count: Prompt token count (terminal response only).
        eval_count: Completion token count (terminal response only).
    """

    model: str
    message: Message = field(default_factory=lambda: Message(role=Role.ASSISTANT))
    created_at: datetime = field(default_factory=_utcnow)
    done: bool = False
    done_reason: Optional[str] = None
    prompt_eval_count: Optional[int] = None
    eval_count: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return the native JSON shape of the response."""
        out: Dict[str, Any] = {
            "model": self.model,
            "created_at": self.created_at.isoformat(),
            "message": self.message.to_dict(),
            "done": self.done,
        }
        if self.done and self.done_reason:
            out["done_reason"] = self.done_reason
        if self.prompt_eval_count is not None:
            out["prompt_eval_count"] = self.prompt_eval_count
        if self.eval_count is not None:
            out["eval_count"] = self.eval_count
        return out


__all__ = ["ChatResponse"]
