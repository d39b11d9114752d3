"""
Canonical chat message used by the native chat API.

Defines the `Role` enumeration and the `Message` dataclass. A message is owned
by exactly one request or response; transcoders never share instances across
calls.
"""
from __future__ import annotations

import base64
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from .tool_call import ToolCall


class Role(str, Enum):
    """Sender role of a canonical message."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


# Raw image bytes, or text that is already base64 encoded.
ImageData = Union[bytes, str]


def image_to_base64(image: ImageData) -> str:
    """Return ``image`` as base64 text; strings are assumed to be encoded already."""
    if isinstance(image, (bytes, bytearray)):
        return base64.b64encode(image).decode("ascii")
    return image


@dataclass
class Message:
    """A chat message in the native (canonical) shape.

    Attributes:
        role: Author role. Plain strings are coerced to :class:`Role`; an
            unknown role raises ``ValueError``.
        content: Textual content (may be empty, e.g. for pure tool calls).
        images: Ordered embedded images.
        tool_calls: Ordered tool calls requested by an assistant message.
        thinking: Optional free-text reasoning segment.
        tool_call_id: For tool-role messages, the id of the call answered.
        tool_name: For tool-role messages, the optional tool name.
    """

    role: Role
    content: str = ""
    images: List[ImageData] = field(default_factory=list)
    tool_calls: List[ToolCall] = field(default_factory=list)
    thinking: Optional[str] = None
    tool_call_id: Optional[str] = None
    tool_name: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.role, Role):
            self.role = Role(self.role)

    def to_dict(self) -> Dict[str, Any]:
        """Return the native JSON shape, omitting empty optional members."""
        out: Dict[str, Any] = {"role": self.role.value, "content": self.content}
        if self.thinking:
            out["thinking"] = self.thinking
        if self.images:
            out["images"] = [image_to_base64(img) for img in self.images]
        if self.tool_calls:
            out["tool_calls"] = [tc.to_dict() for tc in self.tool_calls]
        if self.tool_call_id:
            out["tool_call_id"] = self.tool_call_id
        if self.tool_name:
            out["tool_name"] = self.tool_name
        return out


__all__ = ["Role", "ImageData", "Message", "image_to_base64"]
