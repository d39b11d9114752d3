"""
Message content variants.

Chat-completions ``content`` is either a plain string or an ordered list of
typed parts. The list form is a discriminated union on ``type`` so a payload
is validated into exactly one part class, never an untyped mapping.
"""

from __future__ import annotations

from typing import Annotated, List, Literal, Optional, Union

from pydantic import Field

from .wire_model import WireModel


class TextPart(WireModel):
    type: Literal["text"] = "text"
    text: str


class ImageUrl(WireModel):
    """Image reference; the bridge always sends inline ``data:`` URIs."""

    url: str
    detail: Optional[str] = None


class ImagePart(WireModel):
    type: Literal["image_url"] = "image_url"
    image_url: ImageUrl


ContentPart = Annotated[Union[TextPart, ImagePart], Field(discriminator="type")]

MessageContent = Union[str, List[ContentPart]]


def content_text(content: Optional[MessageContent]) -> str:
    """Return the textual portion of ``content``; text parts are joined in order."""
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    return "".join(part.text for part in content if isinstance(part, TextPart))


__all__ = ["TextPart", "ImageUrl", "ImagePart", "ContentPart", "MessageContent", "content_text"]
