"""Server-sent events framing for chat-completions streams."""

from __future__ import annotations

from typing import Iterable, Iterator, Union

from ..base.constants import SSE_DATA_FIELD


def iter_sse_data(lines: Iterable[Union[str, bytes]]) -> Iterator[str]:
    """Yield the payload of every ``data:`` line in ``lines``.

    One optional space after the colon is stripped. Blank lines, ``:``
    comments (keepalives) and other fields (``event:``, ``id:``, ``retry:``)
    are skipped. Every data line is its own payload: chat-completions remotes
    never split one JSON chunk across several data lines.
    """
    for raw in lines:
        line = raw.decode("utf-8") if isinstance(raw, (bytes, bytearray)) else raw
        line = line.rstrip("\r\n")
        if not line.startswith(SSE_DATA_FIELD):
            continue
        payload = line[len(SSE_DATA_FIELD):]
        if payload.startswith(" "):
            payload = payload[1:]
        yield payload


__all__ = ["iter_sse_data"]
