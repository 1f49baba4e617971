"""``httpx`` transport that routes SDK traffic through :class:`FetchAdapter`.

The ``openai`` SDK talks to an ``httpx.Client``; substituting this transport
on that client is how the factory swaps the default network stack for the
adapter. Each ``handle_request`` call converts the ``httpx.Request`` into a
:class:`RequestDescriptor`, lets the adapter dispatch it, and converts the
:class:`ResponseDescriptor` back into an ``httpx.Response``.

Body handling:
    - Buffered bodies become ``httpx.Response(content=...)``.
    - Streamed bodies are wrapped in :class:`RawStream`, a pull-based
      ``httpx.SyncByteStream`` over the raw handle. Closing the ``httpx``
      response (or cancelling the request token) closes the handle and
      releases its connection.
    - ``requests`` hands back decoded payloads, so ``Content-Encoding`` and
      ``Content-Length`` are not forwarded to ``httpx``.

Cancellation:
    The token is taken from ``request.extensions["cancel_token"]`` when the
    caller set one, otherwise from the transport-level token.
"""
from __future__ import annotations

import contextlib
from typing import Any, Iterator, Mapping, Optional, Tuple

import httpx

from ..cancellation import CancellationToken, CancelledError
from ..dto import Credentials, RequestDescriptor, ResponseDescriptor, StreamingBody
from .adapter import FetchAdapter

_READ_SIZE = 8192

# Recomputed by requests from the outgoing URL and body.
_REQUEST_SKIP_HEADERS = frozenset({"host", "content-length", "transfer-encoding", "connection"})
# Describe the encoded payload; the payload handed to httpx is already decoded.
_RESPONSE_SKIP_HEADERS = frozenset({"content-encoding", "content-length", "transfer-encoding"})


def _timeout_from_extensions(timeout: Optional[Mapping[str, Any]]) -> Optional[Tuple[Optional[float], Optional[float]]]:
    """Map ``httpx``'s timeout extension to the ``(connect, read)`` pair of ``requests``."""
    if not timeout:
        return None
    return (timeout.get("connect"), timeout.get("read"))


class RawStream(httpx.SyncByteStream):
    """Pull-based byte stream over a raw ``urllib3`` response handle."""

    def __init__(self, handle: Any, cancel_token: Optional[CancellationToken] = None) -> None:
        self._handle = handle
        self._token = cancel_token
        self._closed = False
        self._unregister = cancel_token.on_cancel(self.close) if cancel_token is not None else None

    def __iter__(self) -> Iterator[bytes]:
        try:
            while True:
                # read1 returns what is available instead of waiting for a full block.
                chunk = self._handle.read1(_READ_SIZE, decode_content=True)
                if self._token is not None:
                    self._token.raise_if_cancelled()
                if not chunk:
                    return
                yield chunk
        except CancelledError:
            self.close()
            raise
        except Exception as exc:
            if self._token is not None and self._token.cancelled:
                raise CancelledError(self._token.reason or "request cancelled") from exc
            raise

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._unregister is not None:
            self._unregister()
        self._handle.close()
        release = getattr(self._handle, "release_conn", None)
        if release is not None:
            with contextlib.suppress(Exception):  # nosec B110 - connection may already be gone
                release()


class FetchTransport(httpx.BaseTransport):
    """``httpx`` transport delegating every request to a :class:`FetchAdapter`.

    Parameters:
        adapter: The adapter that performs the call.
        cancel_token: Default cancellation token for requests that carry none.
        credentials: Pre-extracted credentials; when ``None`` the adapter
            extracts them from each request URL.
    """

    def __init__(
        self,
        adapter: FetchAdapter,
        *,
        cancel_token: Optional[CancellationToken] = None,
        credentials: Optional[Credentials] = None,
    ) -> None:
        self._adapter = adapter
        self._cancel_token = cancel_token
        self._credentials = credentials

    @property
    def adapter(self) -> FetchAdapter:
        return self._adapter

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        token = request.extensions.get("cancel_token") or self._cancel_token
        descriptor = RequestDescriptor(
            url=url,
            method=request.method,
            headers=tuple(
                (name, value)
                for name, value in request.headers.multi_items()
                if name.lower() not in _REQUEST_SKIP_HEADERS
            ),
            body=request.read() or None,
            cancel_token=token,
            timeout=_timeout_from_extensions(request.extensions.get("timeout")),
        )
        response = self._adapter.adapt(url, descriptor, self._credentials)
        return self._to_httpx(response, token)

    @staticmethod
    def _to_httpx(response: ResponseDescriptor, token: Optional[CancellationToken]) -> httpx.Response:
        headers = [(k, v) for k, v in response.headers if k.lower() not in _RESPONSE_SKIP_HEADERS]
        extensions = {"reason_phrase": response.status_text.encode("ascii", errors="replace")}
        if isinstance(response.body, StreamingBody):
            return httpx.Response(
                response.status,
                headers=headers,
                stream=RawStream(response.body.handle, token),
                extensions=extensions,
            )
        return httpx.Response(
            response.status,
            headers=headers,
            content=response.body.content,
            extensions=extensions,
        )


__all__ = ["FetchTransport", "RawStream"]
