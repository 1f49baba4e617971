"""Shared ``requests`` session pool for the HTTP adapter.

Purpose:
    Provide a centralized, thread-safe pool of reusable ``requests.Session``
    instances so the adapter does not pay a new connection pool per call.
    Connection reuse itself is entirely ``requests``/``urllib3`` behavior;
    this module only decides which session a call uses.

External dependencies:
    - ``requests`` (with ``urllib3``) as the general-purpose HTTP client.

Keys:
    - Sessions are cached by ``(trust_context, purpose)``. Calls without a
      custom trust context share the ``None`` key. A session for a custom
      context mounts :class:`TrustContextAdapter` on ``https://`` so every
      TLS handshake it performs verifies against that context.
    - Sessions are never mutated after creation; per-call settings (auth,
      headers, timeout, stream) travel as request arguments.

Lifecycle & cleanup:
    - All sessions are closed at interpreter exit via ``atexit``. Tests may
      call :func:`close_all_sessions` explicitly.
"""

from __future__ import annotations

import atexit
import contextlib
import ssl
import threading
from typing import Any, Dict, Optional, Tuple

import requests
from requests.adapters import HTTPAdapter

_SESSIONS: Dict[Tuple[Optional[ssl.SSLContext], str], requests.Session] = {}
_LOCK = threading.RLock()


class TrustContextAdapter(HTTPAdapter):
    """``HTTPAdapter`` whose pool managers verify peers with a fixed ``SSLContext``."""

    def __init__(self, ssl_context: ssl.SSLContext, **kwargs: Any) -> None:
        self._ssl_context = ssl_context
        super().__init__(**kwargs)

    def init_poolmanager(self, *args: Any, **pool_kwargs: Any) -> None:
        pool_kwargs["ssl_context"] = self._ssl_context
        super().init_poolmanager(*args, **pool_kwargs)

    def proxy_manager_for(self, proxy: str, **proxy_kwargs: Any):
        proxy_kwargs["ssl_context"] = self._ssl_context
        return super().proxy_manager_for(proxy, **proxy_kwargs)


def _new_session(trust_context: Optional[ssl.SSLContext]) -> requests.Session:
    session = requests.Session()
    if trust_context is not None:
        session.mount("https://", TrustContextAdapter(trust_context))
    return session


def get_requests_session(trust_context: Optional[ssl.SSLContext] = None, purpose: str = "fetch") -> requests.Session:
    """Return a pooled ``requests.Session`` for ``trust_context`` and ``purpose``.

    Parameters:
        trust_context: Custom CA context, or ``None`` for the default trust
            store of ``requests``.
        purpose: Short string discriminating separate pools. Keep stable to
            maximize reuse.

    Thread-safety:
        Safe for concurrent use; per-key creation is guarded by a re-entrant lock.
    """
    key = (trust_context, purpose)
    session = _SESSIONS.get(key)
    if session is not None:
        return session

    with _LOCK:
        session = _SESSIONS.get(key)
        if session is None:
            session = _new_session(trust_context)
            _SESSIONS[key] = session
        return session


def close_all_sessions() -> None:
    """Close and clear all pooled sessions."""
    with _LOCK:
        for session in _SESSIONS.values():
            with contextlib.suppress(Exception):  # nosec B110 - best-effort shutdown
                session.close()
        _SESSIONS.clear()


atexit.register(close_all_sessions)

__all__ = ["TrustContextAdapter", "close_all_sessions", "get_requests_session"]
