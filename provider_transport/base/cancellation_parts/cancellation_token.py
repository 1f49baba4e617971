"""Cooperative cancellation token implementation.

Exposes the ``CancellationToken`` class used by the HTTP adapter to abandon
in-flight requests. Cancellation is cooperative: the adapter polls the token
at dispatch boundaries and per streamed chunk, and release callbacks
registered through :meth:`CancellationToken.on_cancel` close live resources
(e.g., a streamed response body) as soon as cancellation is requested.
"""

from __future__ import annotations

import contextlib
from threading import Lock
from typing import Callable, List

from .state import State
from .cancelled_error import CancelledError


class CancellationToken:
    """A cooperative cancellation token with optional cascading semantics.

    Thread-safe for ``cancel``, ``on_cancel`` and ``raise_if_cancelled``.
    Child tokens inherit cancellation when the parent is cancelled.
    """

    def __init__(self, *, parent: "CancellationToken | None" = None) -> None:
        self._state = State()
        self._lock = Lock()
        self._children: List[CancellationToken] = []
        if parent is not None:
            parent.link_child(self)

    @property
    def cancelled(self) -> bool:  # noqa: D401 - short form
        """Whether cancellation has been requested."""
        return self._state.cancelled

    @property
    def reason(self) -> str | None:  # noqa: D401 - short form
        """Reason string supplied at cancel time (if any)."""
        return self._state.reason

    def cancel(self, reason: str | None = None) -> None:
        """Request cancellation, run release callbacks, cascade to children."""
        with self._lock:
            if self._state.cancelled:
                return
            self._state.cancelled = True
            self._state.reason = reason
            callbacks = list(self._state.callbacks)
            self._state.callbacks.clear()
            children = list(self._children)
        for callback in callbacks:
            # Release hooks close sockets that may already be closed.
            with contextlib.suppress(Exception):  # nosec B110
                callback()
        for child in children:
            child.cancel(reason)

    def on_cancel(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Register ``callback`` to run once when the token is cancelled.

        Runs immediately when the token is already cancelled. Returns a
        function that unregisters the callback (a no-op after it ran).
        """
        with self._lock:
            already = self._state.cancelled
            if not already:
                self._state.callbacks.append(callback)
        if already:
            with contextlib.suppress(Exception):  # nosec B110
                callback()

        def _unregister() -> None:
            with self._lock:
                if callback in self._state.callbacks:
                    self._state.callbacks.remove(callback)

        return _unregister

    def link_child(self, token: "CancellationToken") -> "CancellationToken":
        """Link a child token so parent cancellation cascades (returns child)."""
        with self._lock:
            self._children.append(token)
            should_cancel = self._state.cancelled
            reason = self._state.reason
        if should_cancel:
            token.cancel(reason)
        return token

    def raise_if_cancelled(self) -> None:
        """Raise ``CancelledError`` if token is cancelled."""
        if self._state.cancelled:
            raise CancelledError(self._state.reason or "request cancelled")

    def child(self) -> "CancellationToken":
        """Create and link a child token (shortcut)."""
        return CancellationToken(parent=self)

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return (
            f"CancellationToken(cancelled={self._state.cancelled}, "
            f"reason={self._state.reason!r}, pending_callbacks={len(self._state.callbacks)})"
        )


__all__ = ["CancellationToken"]
