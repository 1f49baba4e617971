"""Cancellation error type.

Defines the public ``CancelledError`` raised when a request is abandoned
through its cancellation token before a response was obtained.
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when an in-flight request is cancelled cooperatively.

    Carries no response; callers treat it like any other transport failure
    where the server was never reached (or its answer was discarded).
    """

__all__ = ["CancelledError"]
