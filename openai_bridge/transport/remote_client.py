"""
Transport for OpenAI-compatible chat-completions remotes.

Summary:
- One outbound POST per logical call via a pooled ``httpx.Client``.
- Dispatches on ``request.stream`` to the streaming or non-streaming
  transcoder; the caller's sink receives every canonical response.
- No retries: a failed attempt is surfaced to the caller as-is.
- With a cancellation token, the wait for response headers runs on a worker
  thread the token can abandon; once a response exists, cancelling closes it
  to interrupt the body read.

Timeouts:
- ``get_timeout_config()`` supplies the multi-minute per-operation limit (each
  read, write or pool wait) and the connect timeout; ``timeout_seconds``
  overrides that limit per client. Total call length is bounded only by the
  remote and by cancellation.

Errors & Observability:
- Non-2xx -> ``RemoteAPIError`` with the exact body text.
- No response at all -> ``RemoteConnectionError``; body read failure ->
  ``StreamReadError``; cancellation -> ``CancelledError``.
- Structured ``chat.start`` / ``chat.end`` / ``chat.error`` events (plus
  ``stream.cancelled`` / ``stream.error``) share the normalized schema.
"""

from __future__ import annotations

import logging
import threading
import time
import uuid
from typing import Callable, Dict, Optional

import httpx

from ..base.cancellation import CancellationToken, CancelledError
from ..base.constants import CHAT_COMPLETIONS_PATH, REMOTE_PROVIDER_LABEL
from ..base.errors import (
    ConversionError,
    ErrorCode,
    RemoteAPIError,
    RemoteConnectionError,
    StreamReadError,
    classify_exception,
)
from ..base.http import get_httpx_client
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import ChatRequest
from ..base.timeouts import get_timeout_config
from ..transcode.request import to_wire_request
from ..transcode.response import from_wire_response, parse_completion
from ..transcode.streaming import Sink, StreamTranscoder


def resolve_chat_completions_url(base_url: str) -> str:
    """Return ``base_url`` with the chat-completions path appended.

    A trailing slash is removed first; the suffix is not doubled when the path
    already ends with it. Query strings are preserved.

    Raises:
        ConversionError: ``base_url`` is not an absolute http(s) URL.
    """
    try:
        url = httpx.URL(base_url)
    except (httpx.InvalidURL, TypeError) as exc:
        raise ConversionError(message=f"invalid remote base URL {base_url!r}: {exc}", raw=exc) from exc
    if url.scheme not in ("http", "https") or not url.host:
        raise ConversionError(message=f"remote base URL must be absolute http(s), got {base_url!r}")
    path = url.path.rstrip("/")
    if not path.endswith(CHAT_COMPLETIONS_PATH):
        path += CHAT_COMPLETIONS_PATH
    return str(url.copy_with(path=path))


class RemoteChatClient:
    """Chat client for one OpenAI-compatible remote.

    Parameters:
        base_url: Remote base URL (``https://host`` or ``https://host/prefix``).
        api_key: Pre-resolved credential; when empty no ``Authorization``
            header is sent.
        http_client: Explicit ``httpx.Client``; defaults to the shared pool.
        timeout_seconds: Per-client override of the per-operation remote timeout.
        remote_model: Default remote model alias, used when ``send`` is not
            given one; ``None`` forwards the canonical model name.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str = "",
        http_client: Optional[httpx.Client] = None,
        timeout_seconds: Optional[float] = None,
        remote_model: Optional[str] = None,
    ) -> None:
        self.base_url = base_url
        self.url = resolve_chat_completions_url(base_url)
        self._api_key = api_key or ""
        self._http_client = http_client
        self._timeout_seconds = timeout_seconds
        self.remote_model = remote_model
        self._logger = get_logger("bridge.transport")

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    def _timeout(self) -> httpx.Timeout:
        cfg = get_timeout_config()
        remote = self._timeout_seconds or cfg.remote_timeout_seconds
        return httpx.Timeout(remote, connect=min(cfg.connect_timeout_seconds, remote))

    def _client(self) -> httpx.Client:
        return self._http_client or get_httpx_client("chat")

    def send(
        self,
        request: ChatRequest,
        sink: Sink,
        *,
        remote_model: Optional[str] = None,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> None:
        """Forward ``request`` and deliver canonical responses to ``sink``.

        Streaming requests deliver zero or more partials followed by one
        terminal response; non-streaming requests deliver exactly one terminal
        response.

        Raises:
            ConversionError: The request cannot be expressed on the wire.
            RemoteAPIError: The remote answered with a non-2xx status.
            RemoteConnectionError: No response could be obtained.
            StreamReadError: The response body could not be read.
            MalformedResponseError: A 2xx body does not fit the wire schema
                (``EmptyChoiceError`` when it reports zero choices).
            CancelledError: ``cancellation_token`` was cancelled.
            Exception: Whatever ``sink`` raised, unchanged.
        """
        if cancellation_token is not None:
            cancellation_token.raise_if_cancelled()
        wire = to_wire_request(request, remote_model or self.remote_model)
        ctx = LogContext(
            provider=REMOTE_PROVIDER_LABEL,
            model=wire.model,
            request_id=uuid.uuid4().hex,
        )
        normalized_log_event(
            self._logger,
            "chat.start",
            ctx,
            phase="start",
            attempt=1,
            emitted=0,
            tokens=None,
            stream=wire.stream,
            url=self.url,
            messages=len(wire.messages),
        )
        started = time.monotonic()
        counter = _CountingSink(sink)
        try:
            self._send(request, wire.to_payload(), counter, ctx, cancellation_token)
        except Exception as exc:
            self._log_failure(exc, ctx, counter.count, started)
            raise
        normalized_log_event(
            self._logger,
            "chat.end",
            ctx,
            phase="finalize",
            attempt=1,
            emitted=counter.count,
            tokens=counter.tokens(),
            duration_ms=int((time.monotonic() - started) * 1000),
        )

    def _send(
        self,
        request: ChatRequest,
        payload: Dict,
        sink: "_CountingSink",
        ctx: LogContext,
        token: Optional[CancellationToken],
    ) -> None:
        client = self._client()
        http_request = client.build_request(
            "POST",
            self.url,
            json=payload,
            headers=self._headers(),
            timeout=self._timeout(),
        )
        if token is None:
            response = self._open(client, http_request)
        else:
            response = _PendingResponse(lambda: self._open(client, http_request)).wait(token)

        # Closing the response from the cancelling thread interrupts a blocked read.
        unregister = token.add_callback(response.close) if token is not None else None
        try:
            if not response.is_success:
                body = _read_body(response, token)
                raise RemoteAPIError(
                    message=f"remote API returned status {response.status_code}",
                    status_code=response.status_code,
                    body=body.decode("utf-8", errors="replace"),
                )
            if request.stream:
                StreamTranscoder(
                    sink,
                    model=request.model,
                    logger=get_logger("bridge.stream"),
                    cancellation_token=token,
                    ctx=ctx,
                ).run(response.iter_lines())
                return
            body = _read_body(response, token)
            chat_response = from_wire_response(parse_completion(body), model=request.model)
            if token is not None:
                token.raise_if_cancelled()
            sink(chat_response)
        finally:
            if unregister is not None:
                unregister()
            response.close()

    def _open(self, client: httpx.Client, http_request: httpx.Request) -> httpx.Response:
        try:
            return client.send(http_request, stream=True)
        except httpx.TimeoutException as exc:
            raise RemoteConnectionError(
                message=f"timed out waiting for {self.url}: {exc}", code=ErrorCode.TIMEOUT, raw=exc
            ) from exc
        except httpx.HTTPError as exc:
            raise RemoteConnectionError(message=f"request to {self.url} failed: {exc}", raw=exc) from exc

    def _log_failure(self, exc: Exception, ctx: LogContext, emitted: int, started: float) -> None:
        if isinstance(exc, CancelledError):
            event, level = "stream.cancelled", logging.INFO
        elif isinstance(exc, StreamReadError):
            event, level = "stream.error", logging.ERROR
        else:
            event, level = "chat.error", logging.ERROR
        normalized_log_event(
            self._logger,
            event,
            ctx,
            phase="finalize",
            attempt=1,
            error_code=classify_exception(exc).value,
            emitted=emitted,
            tokens=None,
            level=level,
            error=str(exc),
            status_code=getattr(exc, "status_code", None),
            duration_ms=int((time.monotonic() - started) * 1000),
        )


class _CountingSink:
    """Sink wrapper tracking emissions and the terminal usage for logging."""

    def __init__(self, sink: Sink) -> None:
        self._sink = sink
        self.count = 0
        self.last = None

    def __call__(self, response) -> None:
        self._sink(response)
        self.count += 1
        self.last = response

    def tokens(self) -> Optional[Dict[str, Optional[int]]]:
        if self.last is None or not self.last.done:
            return None
        return {"prompt": self.last.prompt_eval_count, "completion": self.last.eval_count}


class _PendingResponse:
    """Wait for response headers on a worker thread so cancellation can abandon it.

    ``httpx.Client.send`` blocks until the remote answers, which for a
    non-streaming call spans the whole generation. The caller waits on an
    event that either the worker or the cancellation token sets. A response
    that arrives after the caller gave up is closed by the worker.
    """

    def __init__(self, opener: Callable[[], httpx.Response]) -> None:
        self._opener = opener
        self._ready = threading.Event()
        self._lock = threading.Lock()
        self._abandoned = False
        self._response: Optional[httpx.Response] = None
        self._error: Optional[BaseException] = None

    def _run(self) -> None:
        try:
            response = self._opener()
        except Exception as exc:
            self._error = exc
        else:
            with self._lock:
                stale = self._abandoned
                if not stale:
                    self._response = response
            if stale:
                response.close()
        finally:
            self._ready.set()

    def wait(self, token: CancellationToken) -> httpx.Response:
        """Return the response, or raise ``CancelledError`` once ``token`` fires."""
        unregister = token.add_callback(self._ready.set)
        try:
            if not token.cancelled:
                threading.Thread(target=self._run, name="bridge-send", daemon=True).start()
            self._ready.wait()
        finally:
            unregister()
        with self._lock:
            cancelled = token.cancelled
            if cancelled:
                self._abandoned = True
                stale, self._response = self._response, None
        if cancelled:
            if stale is not None:
                stale.close()
            raise CancelledError(token.reason or "operation cancelled")
        if self._error is not None:
            raise self._error
        return self._response


def _read_body(response: httpx.Response, token: Optional[CancellationToken]) -> bytes:
    try:
        return response.read()
    except Exception as exc:
        if token is not None and token.cancelled:
            raise CancelledError(token.reason or "operation cancelled") from exc
        raise StreamReadError(message=f"error reading response body: {exc}", raw=exc) from exc


def send(
    request: ChatRequest,
    credential: str,
    base_url: str,
    sink: Sink,
    *,
    remote_model: Optional[str] = None,
    cancellation_token: Optional[CancellationToken] = None,
    http_client: Optional[httpx.Client] = None,
) -> None:
    """Forward one chat request to ``base_url`` (single-call convenience).

    Equivalent to ``RemoteChatClient(base_url, credential).send(request, sink)``.
    """
    client = RemoteChatClient(base_url, api_key=credential, http_client=http_client)
    client.send(request, sink, remote_model=remote_model, cancellation_token=cancellation_token)


__all__ = ["RemoteChatClient", "resolve_chat_completions_url", "send"]
