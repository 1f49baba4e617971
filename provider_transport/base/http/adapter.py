"""Fetch adapter: dispatch a request descriptor through ``requests``.

Purpose:
    Execute one outbound call for an SDK client whose default transport
    cannot express the endpoint's needs, and hand back a response in the
    contract the client expects.

Per-call algorithm:
    1. Split userinfo off the URL. Credentials supplied by the caller win
       over embedded ones; the URL given to ``requests`` never carries
       userinfo either way.
    2. With credentials present, drop every ``Authorization`` header
       (any casing) and send the pair through ``requests``' ``auth=``.
    3. ``Accept: text/event-stream`` selects ``stream=True``; anything else
       is fully buffered.
    4. ``https`` targets resolve the configured CA into a trust context
       (``ConfigurationError`` before any I/O if the file is unusable).
    5. Dispatch, then translate:
       - 2xx/3xx -> :class:`Delivered`
       - server answered non-2xx -> :class:`UpstreamResponse`
       - no response (refused, timeout, cancelled) -> :class:`TransportFailure`

Cancellation:
    With a token on the request, the blocking part of the call (waiting
    for headers and reading a buffered body) runs through
    :func:`call_cancellable`. Cancelling the token makes the call return
    :class:`CancelledError` at once; the abandoned response is closed when
    it eventually arrives.

Failure semantics:
    :meth:`FetchAdapter.adapt` returns a :class:`ResponseDescriptor` for both
    answered outcomes and re-raises ``TransportFailure.cause`` unchanged.
    The adapter performs no retries.

Logging:
    ``transport.dispatch``/``transport.response`` at DEBUG, upstream error
    statuses at INFO and transport failures at WARNING. Userinfo is never
    logged; events name the host only.
"""
from __future__ import annotations

import functools
import logging
import ssl
from typing import Any, Callable, Iterable, Optional, Tuple
from urllib.parse import urlsplit

import requests

from ..cancellation import CancelledError
from ..dto import (
    BufferedBody,
    Credentials,
    Delivered,
    DispatchResult,
    RequestDescriptor,
    ResponseDescriptor,
    StreamingBody,
    TransportFailure,
    TransportSettings,
    UpstreamResponse,
)
from ..dto.request_descriptor import HeaderPairs
from ..errors import classify_exception, classify_status
from ..logging import LogContext, get_logger, log_event
from ..timeouts import get_timeout_config
from .cancellable import call_cancellable
from .client import get_requests_session
from .credentials import extract_credentials
from .tls import TrustStore, get_trust_store

SessionProvider = Callable[[Optional[ssl.SSLContext]], requests.Session]


def strip_authorization(headers: HeaderPairs) -> HeaderPairs:
    """Return ``headers`` without any ``Authorization`` entry (any casing)."""
    return tuple((k, v) for k, v in headers if k.lower() != "authorization")


def expand_headers(source: Any) -> HeaderPairs:
    """Rebuild a header mapping entry by entry.

    Multi-valued sources (``urllib3``'s ``HTTPHeaderDict``) and list-valued
    entries expand to repeated ``(name, value)`` pairs.
    """
    items: Iterable[Tuple[str, Any]]
    items = source.iteritems() if hasattr(source, "iteritems") else source.items()
    pairs = []
    for name, value in items:
        if isinstance(value, (list, tuple)):
            pairs.extend((str(name), str(v)) for v in value)
        else:
            pairs.append((str(name), str(value)))
    return tuple(pairs)


def _request_headers(headers: HeaderPairs) -> dict:
    """Fold header pairs into the mapping ``requests`` accepts.

    Repeated names are joined with ``", "`` as HTTP allows.
    """
    folded: dict = {}
    index: dict = {}
    for name, value in headers:
        key = name.lower()
        if key in index:
            original = index[key]
            folded[original] = f"{folded[original]}, {value}"
        else:
            index[key] = name
            folded[name] = value
    return folded


def _close_response(response: requests.Response) -> None:
    response.close()


def to_response_descriptor(response: requests.Response, *, streaming: bool) -> ResponseDescriptor:
    """Translate a ``requests`` response into a :class:`ResponseDescriptor`.

    Streaming responses keep the raw handle untouched; buffered ones read
    the (decoded) content.
    """
    raw_headers = getattr(response.raw, "headers", None)
    headers = expand_headers(raw_headers if raw_headers is not None else response.headers)
    body = StreamingBody(handle=response.raw) if streaming else BufferedBody(content=response.content or b"")
    return ResponseDescriptor(
        status=int(response.status_code),
        status_text=response.reason or "",
        headers=headers,
        body=body,
    )


class FetchAdapter:
    """Forward request descriptors through ``requests`` and map the outcome.

    Instances hold no per-request state and may be shared across threads.
    """

    def __init__(
        self,
        settings: Optional[TransportSettings] = None,
        *,
        trust_store: Optional[TrustStore] = None,
        session_provider: SessionProvider = get_requests_session,
        provider: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._settings = settings or TransportSettings()
        self._trust_store = trust_store or get_trust_store()
        self._session_provider = session_provider
        self._provider = provider
        self._logger = logger or get_logger("transport.fetch")

    @property
    def settings(self) -> TransportSettings:
        return self._settings

    def adapt(
        self,
        url: str,
        request: RequestDescriptor,
        credentials: Optional[Credentials] = None,
    ) -> ResponseDescriptor:
        """Dispatch ``request`` to ``url`` and return the response contract.

        Raises:
            ConfigurationError: the configured CA file is unusable.
            requests.RequestException / CancelledError: no response was
                obtained; the original exception, unchanged.
        """
        result = self.dispatch(url, request, credentials)
        if isinstance(result, TransportFailure):
            raise result.cause
        return result.response

    def dispatch(
        self,
        url: str,
        request: RequestDescriptor,
        credentials: Optional[Credentials] = None,
    ) -> DispatchResult:
        """Dispatch ``request`` and return an explicit :class:`DispatchResult`."""
        target, embedded = extract_credentials(url)
        if credentials is None:
            credentials = embedded

        headers = request.headers
        if credentials is not None:
            headers = strip_authorization(headers)

        streaming = request.wants_event_stream()
        parts = urlsplit(target)
        trust_context = self._trust_store.resolve(
            self._settings.ca_certificate_path,
            parts.scheme,
            validation_disabled=self._settings.tls_validation_disabled,
        )

        method = (request.method or "GET").upper()
        ctx = LogContext(provider=self._provider, host=parts.hostname, method=method)
        log_event(
            self._logger,
            "transport.dispatch",
            ctx,
            level=logging.DEBUG,
            path=parts.path or "/",
            streaming=streaming,
            authenticated=credentials is not None,
            custom_ca=trust_context is not None,
        )

        token = request.cancel_token
        try:
            if token is not None:
                token.raise_if_cancelled()
            session = self._session_provider(trust_context)
            send = functools.partial(
                session.request,
                method,
                target,
                headers=_request_headers(headers),
                data=request.body,
                auth=credentials.as_auth() if credentials is not None else None,
                stream=streaming,
                timeout=request.timeout if request.timeout is not None else get_timeout_config().as_requests_timeout(),
            )
            response = send() if token is None else call_cancellable(send, token, _close_response)
        except requests.RequestException as exc:
            if exc.response is not None:
                return self._answered(exc.response, streaming, ctx)
            return self._failed(exc, ctx)
        except CancelledError as exc:
            return self._failed(exc, ctx)

        if token is not None and token.cancelled:
            response.close()
            return self._failed(CancelledError(token.reason or "request cancelled"), ctx)
        return self._answered(response, streaming, ctx)

    def _answered(
        self,
        response: requests.Response,
        streaming: bool,
        ctx: LogContext,
    ) -> DispatchResult:
        descriptor = to_response_descriptor(response, streaming=streaming)
        if 200 <= descriptor.status < 400:
            log_event(self._logger, "transport.response", ctx, level=logging.DEBUG, status=descriptor.status)
            return Delivered(descriptor)
        log_event(
            self._logger,
            "transport.response",
            ctx,
            level=logging.INFO,
            status=descriptor.status,
            error_code=classify_status(descriptor.status).value,
        )
        return UpstreamResponse(descriptor)

    def _failed(self, exc: BaseException, ctx: LogContext) -> TransportFailure:
        log_event(
            self._logger,
            "transport.failure",
            ctx,
            level=logging.WARNING,
            error_code=classify_exception(exc).value,
            error_type=type(exc).__name__,
        )
        return TransportFailure(exc)


__all__ = [
    "FetchAdapter",
    "expand_headers",
    "strip_authorization",
    "to_response_descriptor",
]
