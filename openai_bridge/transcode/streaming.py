"""
Streaming transcoder: chat-completions chunks -> canonical responses.

One :class:`StreamTranscoder` serves exactly one HTTP response body. It owns a
:class:`StreamAccumulator` for that body and drives the caller's sink:

- every content or reasoning increment is emitted immediately as a partial
  response (``done=False``) carrying only that increment;
- tool-call deltas are accumulated per remote ``index`` (a delta without one
  opens a new call when it brings a new id); argument fragments are
  concatenated and parsed once, when the stream completes;
- the ``[DONE]`` sentinel, or the end of input without one, emits exactly one
  terminal response (``done=True``) built from the accumulated buffers.

A read failure raises ``StreamReadError`` and a sink failure propagates
unchanged; neither emits a terminal response. Partials already delivered are
never retracted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, List, Optional, Union

from pydantic import ValidationError

from ..base.cancellation import CancellationToken, CancelledError
from ..base.constants import DEFAULT_DONE_REASON, REMOTE_PROVIDER_LABEL, STREAM_DONE_SENTINEL
from ..base.errors import StreamReadError
from ..base.logging import LogContext, get_logger, log_event, normalized_log_event
from ..base.models import ChatResponse, Message, Role, ToolCall, ToolCallFunction
from ..base.wire import ChatCompletionChunk, ToolCallDelta, Usage
from .response import parse_tool_arguments, timestamp_from_epoch
from .sse import iter_sse_data

Sink = Callable[[ChatResponse], None]


@dataclass
class ToolCallSlot:
    """A tool call under construction for one remote delta index."""

    index: int
    id: str = ""
    name: str = ""
    fragments: List[str] = field(default_factory=list)

    def apply(self, delta: ToolCallDelta) -> None:
        if delta.id and not self.id:
            self.id = delta.id
        if delta.function is None:
            return
        if delta.function.name:
            self.name = delta.function.name
        if delta.function.arguments:
            self.fragments.append(delta.function.arguments)

    @property
    def raw_arguments(self) -> str:
        return "".join(self.fragments)


@dataclass
class StreamAccumulator:
    """Per-call streaming state; never shared between calls."""

    content: List[str] = field(default_factory=list)
    reasoning: List[str] = field(default_factory=list)
    tool_calls: Dict[int, ToolCallSlot] = field(default_factory=dict)
    finish_reason: Optional[str] = None
    usage: Optional[Usage] = None
    last_index: Optional[int] = None

    def _implicit_index(self, delta: ToolCallDelta) -> int:
        # No index on the wire: a new non-empty id opens a new call, anything
        # else extends the most recent one.
        last = self.tool_calls.get(self.last_index) if self.last_index is not None else None
        if last is None or (delta.id and last.id and delta.id != last.id):
            return max(self.tool_calls, default=-1) + 1
        return last.index

    def add_tool_delta(self, delta: ToolCallDelta) -> None:
        index = delta.index if delta.index is not None else self._implicit_index(delta)
        slot = self.tool_calls.get(index)
        if slot is None:
            slot = self.tool_calls[index] = ToolCallSlot(index=index)
        slot.apply(delta)
        self.last_index = index

    def slots(self) -> List[ToolCallSlot]:
        """Slots in ascending index order."""
        return [self.tool_calls[i] for i in sorted(self.tool_calls)]

    @property
    def text(self) -> str:
        return "".join(self.content)

    @property
    def thinking(self) -> str:
        return "".join(self.reasoning)


class StreamTranscoder:
    """Consume SSE payloads for one call and feed canonical responses to ``sink``.

    Parameters:
        sink: Receives each canonical response; raising stops the stream.
        model: Canonical model name reported on the terminal response (and on
            partials when a chunk does not name its model).
        logger: Optional logger; defaults to ``bridge.stream``.
        cancellation_token: Checked before every read and every sink call.
        ctx: Optional log context shared with the transport.
    """

    def __init__(
        self,
        sink: Sink,
        *,
        model: str = "",
        logger: Optional[logging.Logger] = None,
        cancellation_token: Optional[CancellationToken] = None,
        ctx: Optional[LogContext] = None,
    ) -> None:
        self._sink = sink
        self.model = model
        self._logger = logger or get_logger("bridge.stream")
        self._token = cancellation_token
        self._ctx = ctx or LogContext(provider=REMOTE_PROVIDER_LABEL, model=model)
        self.accumulator = StreamAccumulator()
        self.emitted = 0
        self.finished = False

    def _raise_if_cancelled(self) -> None:
        if self._token is not None:
            self._token.raise_if_cancelled()

    def _emit(self, response: ChatResponse) -> None:
        self._raise_if_cancelled()
        self._sink(response)
        self.emitted += 1

    def _partial(self, chunk: ChatCompletionChunk, *, content: str = "", thinking: Optional[str] = None) -> ChatResponse:
        return ChatResponse(
            model=chunk.model or self.model,
            created_at=timestamp_from_epoch(chunk.created),
            message=Message(role=Role.ASSISTANT, content=content, thinking=thinking),
            done=False,
        )

    def feed(self, data: str) -> bool:
        """Handle one ``data:`` payload; return True once the sentinel is seen."""
        if self.finished:
            return True
        if data.strip() == STREAM_DONE_SENTINEL:
            self.finish()
            return True
        try:
            chunk = ChatCompletionChunk.model_validate_json(data)
        except ValidationError as exc:
            log_event(
                self._logger,
                "stream.decode_error",
                self._ctx,
                level=logging.WARNING,
                error=str(exc),
                data=data[:200],
            )
            return False

        acc = self.accumulator
        if chunk.usage is not None:
            acc.usage = chunk.usage
        if not chunk.choices:
            return False
        choice = chunk.choices[0]
        delta = choice.delta
        if delta.content:
            acc.content.append(delta.content)
            self._emit(self._partial(chunk, content=delta.content))
        if delta.reasoning:
            acc.reasoning.append(delta.reasoning)
            self._emit(self._partial(chunk, thinking=delta.reasoning))
        for tool_delta in delta.tool_calls or []:
            acc.add_tool_delta(tool_delta)
        if choice.finish_reason:
            acc.finish_reason = choice.finish_reason
        return False

    def _completed_tool_calls(self) -> List[ToolCall]:
        out: List[ToolCall] = []
        for slot in self.accumulator.slots():
            try:
                arguments = parse_tool_arguments(slot.raw_arguments)
            except ValueError as exc:
                log_event(
                    self._logger,
                    "stream.tool_call_dropped",
                    self._ctx,
                    level=logging.WARNING,
                    index=slot.index,
                    tool_call_id=slot.id,
                    tool_name=slot.name,
                    error=str(exc),
                )
                continue
            out.append(
                ToolCall(
                    id=slot.id,
                    function=ToolCallFunction(name=slot.name, arguments=arguments),
                    index=slot.index,
                )
            )
        return out

    def terminal_response(self, done_reason: Optional[str] = None) -> ChatResponse:
        """Build the terminal response from the accumulated state.

        ``done_reason`` overrides the last recorded finish reason.
        """
        acc = self.accumulator
        usage = acc.usage
        return ChatResponse(
            model=self.model,
            created_at=datetime.now(timezone.utc),
            message=Message(
                role=Role.ASSISTANT,
                content=acc.text,
                thinking=acc.thinking or None,
                tool_calls=self._completed_tool_calls(),
            ),
            done=True,
            done_reason=done_reason or acc.finish_reason or DEFAULT_DONE_REASON,
            prompt_eval_count=usage.prompt_tokens if usage else None,
            eval_count=usage.completion_tokens if usage else None,
        )

    def finish(self, done_reason: Optional[str] = None) -> None:
        """Emit the terminal response; later calls are no-ops."""
        if self.finished:
            return
        self.finished = True
        response = self.terminal_response(done_reason)
        self._emit(response)
        normalized_log_event(
            self._logger,
            "stream.finalize",
            self._ctx,
            phase="finalize",
            attempt=None,
            error_code=None,
            emitted=self.emitted,
            tokens={"prompt": response.prompt_eval_count, "completion": response.eval_count},
            done_reason=response.done_reason,
            tool_calls=len(response.message.tool_calls),
        )

    def run(self, lines: Iterable[Union[str, bytes]]) -> None:
        """Drive the whole stream from raw body ``lines``.

        Raises:
            StreamReadError: Reading ``lines`` failed.
            CancelledError: The token was cancelled.
        """
        payloads = iter_sse_data(lines)
        while True:
            self._raise_if_cancelled()
            try:
                data = next(payloads)
            except StopIteration:
                break
            except Exception as exc:
                # The body may be closed under us by a cancel callback.
                if self._token is not None and self._token.cancelled:
                    raise CancelledError(self._token.reason or "operation cancelled") from exc
                raise StreamReadError(message=f"error reading stream: {exc}", raw=exc) from exc
            if self.feed(data):
                return
        # Remote closed the body without a sentinel: a normal closure.
        self.finish(done_reason=DEFAULT_DONE_REASON)


__all__ = ["Sink", "ToolCallSlot", "StreamAccumulator", "StreamTranscoder"]
