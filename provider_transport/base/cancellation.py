"""Cooperative cancellation primitives (public API facade).

Purpose
-------
Expose stable cancellation constructs via the canonical
``provider_transport.base.cancellation`` import path while the concrete
implementations live under ``cancellation_parts``.

Notes
-----
- ``CancellationToken`` is the cancellation signal a caller attaches to a
  request; the HTTP adapter forwards it to the dispatch and streaming stages.
- ``CancelledError`` is raised by a request that observes cancellation. It
  carries no response.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledError"]
