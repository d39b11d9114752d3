"""
Canonical tool-call records.

A tool call carries structured (already parsed) arguments. Raw JSON argument
strings only exist on the wire side; the transcoders parse or serialize at the
boundary.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class ToolCallFunction:
    """Function name plus structured arguments of a tool call."""

    name: str
    arguments: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ToolCall:
    """A single tool call requested by the assistant.

    Attributes:
        id: Opaque identifier, unique within one message.
        function: Name and structured arguments.
        index: Remote delta index when the call was assembled from a stream;
            ``None`` otherwise.
    """

    id: str
    function: ToolCallFunction
    index: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "id": self.id,
            "function": {"name": self.function.name, "arguments": self.function.arguments},
        }
        if self.index is not None:
            out["function"]["index"] = self.index
        return out


__all__ = ["ToolCall", "ToolCallFunction"]
