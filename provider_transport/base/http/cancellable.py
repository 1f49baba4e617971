"""Run a blocking HTTP call so a cancellation token can abandon it.

``requests`` offers no way to interrupt a call that is waiting for response
headers or reading a buffered body. :func:`call_cancellable` runs the call
on a daemon thread and waits for whichever comes first: the call finishing
or the token being cancelled. On cancellation the caller gets
:class:`CancelledError` immediately; the abandoned call keeps running until
the server answers or its timeout fires, and ``on_abandoned`` then releases
its result (for example by closing the response and its connection).
"""
from __future__ import annotations

import threading
from typing import Callable, Optional, TypeVar

from ..cancellation import CancellationToken, CancelledError

T = TypeVar("T")


class _Outcome:
    """Result slot shared between the caller and the worker thread."""

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.wake = threading.Event()
        self.finished = False
        self.abandoned = False
        self.value: object = None
        self.error: Optional[BaseException] = None


def call_cancellable(
    fn: Callable[[], T],
    token: CancellationToken,
    on_abandoned: Optional[Callable[[T], None]] = None,
    *,
    name: str = "transport-dispatch",
) -> T:
    """Return ``fn()`` unless ``token`` is cancelled first.

    Exceptions raised by ``fn`` are re-raised in the calling thread as the
    same object.

    Raises:
        CancelledError: the token was cancelled before ``fn`` finished.
    """
    outcome = _Outcome()

    def _worker() -> None:
        value = None
        error: Optional[BaseException] = None
        try:
            value = fn()
        except Exception as exc:  # re-raised in the calling thread
            error = exc
        with outcome.lock:
            outcome.finished = True
            outcome.value = value
            outcome.error = error
            abandoned = outcome.abandoned
        outcome.wake.set()
        if abandoned and error is None and on_abandoned is not None:
            on_abandoned(value)  # type: ignore[arg-type]

    unregister = token.on_cancel(outcome.wake.set)
    threading.Thread(target=_worker, name=name, daemon=True).start()
    try:
        outcome.wake.wait()
    finally:
        unregister()

    with outcome.lock:
        if not outcome.finished:
            outcome.abandoned = True
            raise CancelledError(token.reason or "request cancelled")
    if outcome.error is not None:
        raise outcome.error
    return outcome.value  # type: ignore[return-value]


__all__ = ["call_cancellable"]
