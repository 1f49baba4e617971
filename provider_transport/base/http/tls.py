"""Custom certificate-authority trust for self-signed TLS endpoints.

Purpose:
    Turn a configured CA certificate file into an ``ssl.SSLContext`` that
    trusts exactly that authority, for ``https`` targets only.

Behavior:
    - ``http`` targets and unconfigured paths resolve to ``None`` without
      touching the filesystem.
    - The file is read as bytes; PEM text and DER bytes are both accepted.
      Any failure to read or load it raises :class:`ConfigurationError`
      naming the path and the cause. Nothing is sent over the network first.
    - When certificate validation is disabled process-wide while a custom CA
      is configured, a single warning event is logged per successful
      resolution and the custom context is still used. A CA file that fails
      to load raises without the warning.

Caching:
    Contexts are built once per CA path and shared read-only across threads.
    :meth:`TrustStore.clear` drops the cache; rebuilding from the same file
    yields an equivalent context.
"""
from __future__ import annotations

import logging
import os
import ssl
import threading
from pathlib import Path
from typing import Callable, Dict, Optional

from ..errors import ConfigurationError
from ..logging import get_logger, log_event

ContextFactory = Callable[[bytes], ssl.SSLContext]
Reader = Callable[[str], bytes]

_PEM_MARKER = b"-----BEGIN"


def build_trust_context(data: bytes) -> ssl.SSLContext:
    """Return a client ``SSLContext`` trusting only the certificate(s) in ``data``."""
    cadata: str | bytes = data.decode("ascii") if _PEM_MARKER in data else data
    return ssl.create_default_context(ssl.Purpose.SERVER_AUTH, cadata=cadata)


def _read_ca_file(path: str) -> bytes:
    return Path(path).read_bytes()


class TrustStore:
    """Resolve and cache trust contexts keyed by CA file path."""

    def __init__(
        self,
        *,
        context_factory: ContextFactory = build_trust_context,
        reader: Reader = _read_ca_file,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._context_factory = context_factory
        self._reader = reader
        self._logger = logger or get_logger("transport.tls")
        self._contexts: Dict[str, ssl.SSLContext] = {}
        self._lock = threading.RLock()

    def resolve(
        self,
        ca_path: Optional[str],
        scheme: str,
        *,
        validation_disabled: bool = False,
    ) -> Optional[ssl.SSLContext]:
        """Return the trust context for a request, or ``None``.

        Parameters:
            ca_path: Configured CA file path; ``None``/empty disables custom trust.
            scheme: Scheme of the target URL. Only ``https`` consults the file.
            validation_disabled: Whether the environment disables certificate
                validation; only used to warn about the contradiction.

        Raises:
            ConfigurationError: the CA file cannot be read or loaded.
        """
        if not ca_path or scheme.lower() != "https":
            return None
        key = os.path.expanduser(ca_path)
        context = self._contexts.get(key)
        if context is None:
            with self._lock:
                context = self._contexts.get(key)
                if context is None:
                    context = self._load(key)
                    self._contexts[key] = context
        if validation_disabled:
            log_event(
                self._logger,
                "tls.insecure_override",
                level=logging.WARNING,
                ca_path=ca_path,
                detail="certificate validation is disabled in the environment but a custom CA is configured; using the custom CA",
            )
        return context

    def _load(self, path: str) -> ssl.SSLContext:
        try:
            data = self._reader(path)
        except OSError as exc:
            reason = exc.strerror or str(exc)
            raise ConfigurationError(
                message=f"unable to read CA certificate file {path!r}: {reason}",
                path=path,
                raw=exc,
            ) from exc
        try:
            return self._context_factory(data)
        except (ssl.SSLError, ValueError) as exc:
            raise ConfigurationError(
                message=f"unable to load CA certificate file {path!r}: {exc}",
                path=path,
                raw=exc,
            ) from exc

    def clear(self) -> None:
        """Drop cached contexts; the next resolution re-reads the file."""
        with self._lock:
            self._contexts.clear()


_DEFAULT_STORE: Optional[TrustStore] = None
_DEFAULT_LOCK = threading.Lock()


def get_trust_store() -> TrustStore:
    """Return the process-wide :class:`TrustStore`."""
    global _DEFAULT_STORE  # noqa: PLW0603 - documented module cache
    if _DEFAULT_STORE is None:
        with _DEFAULT_LOCK:
            if _DEFAULT_STORE is None:
                _DEFAULT_STORE = TrustStore()
    return _DEFAULT_STORE


__all__ = ["TrustStore", "build_trust_context", "get_trust_store"]
