"""Unit tests for the cooperative cancellation token."""
from __future__ import annotations

import pytest

from provider_transport.base.cancellation import CancellationToken, CancelledError


def test_cancel_sets_state_and_reason():
    token = CancellationToken()
    assert token.cancelled is False
    token.cancel("stop")
    assert token.cancelled is True
    assert token.reason == "stop"
    with pytest.raises(CancelledError, match="stop"):
        token.raise_if_cancelled()


def test_cancel_is_idempotent_and_keeps_first_reason():
    token = CancellationToken()
    token.cancel("first")
    token.cancel("second")
    assert token.reason == "first"


def test_callbacks_run_once_and_errors_are_contained():
    token = CancellationToken()
    calls = []

    def broken():
        raise OSError("socket already closed")

    token.on_cancel(broken)
    token.on_cancel(lambda: calls.append("released"))
    token.cancel()
    token.cancel()
    assert calls == ["released"]


def test_unregistered_callback_does_not_run():
    token = CancellationToken()
    calls = []
    unregister = token.on_cancel(lambda: calls.append("x"))
    unregister()
    token.cancel()
    assert calls == []


def test_callback_on_cancelled_token_runs_immediately():
    token = CancellationToken()
    token.cancel()
    calls = []
    token.on_cancel(lambda: calls.append("now"))
    assert calls == ["now"]


def test_parent_cancellation_cascades():
    parent = CancellationToken()
    child = parent.child()
    grandchild = child.child()
    parent.cancel("shutdown")
    assert child.cancelled and grandchild.cancelled
    assert grandchild.reason == "shutdown"


def test_child_of_cancelled_parent_starts_cancelled():
    parent = CancellationToken()
    parent.cancel()
    assert parent.child().cancelled is True
