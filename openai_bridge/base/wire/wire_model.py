"""Common pydantic base for the chat-completions wire schema."""

from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict


class WireModel(BaseModel):
    """Base model: unknown remote fields are ignored, ``None`` is never sent."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    def to_payload(self) -> Dict[str, Any]:
        """Return the JSON-ready mapping with unset (``None``) fields removed."""
        return self.model_dump(mode="json", exclude_none=True, by_alias=True)


__all__ = ["WireModel"]
