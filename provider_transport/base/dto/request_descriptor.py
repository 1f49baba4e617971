"""Transport-neutral description of one outbound request.

Built per call (by ``FetchTransport`` from an ``httpx.Request``, or directly
by callers of ``FetchAdapter``) and discarded when the call completes.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Mapping, Optional, Tuple, Union

from ..cancellation import CancellationToken

HeaderPairs = Tuple[Tuple[str, str], ...]
HeadersInput = Union[Mapping[str, str], Iterable[Tuple[str, str]], None]
TimeoutInput = Union[float, Tuple[float, float], None]

EVENT_STREAM = "text/event-stream"


def normalize_headers(headers: HeadersInput) -> HeaderPairs:
    """Coerce a mapping or an iterable of pairs into a tuple of pairs.

    Order and repeated keys are preserved.
    """
    if headers is None:
        return ()
    items = headers.items() if isinstance(headers, Mapping) else headers
    return tuple((str(k), str(v)) for k, v in items)


@dataclass(frozen=True)
class RequestDescriptor:
    """Method, URL, headers, body, cancellation token and timeout of a call.

    ``method`` may be ``None``; the adapter then dispatches a ``GET``.
    Header names are matched case-insensitively by the helpers below.
    """

    url: str
    method: Optional[str] = None
    headers: HeaderPairs = field(default_factory=tuple)
    body: Optional[bytes] = None
    cancel_token: Optional[CancellationToken] = None
    timeout: TimeoutInput = None

    def __post_init__(self) -> None:
        if not isinstance(self.headers, tuple) or any(not isinstance(p, tuple) for p in self.headers):
            object.__setattr__(self, "headers", normalize_headers(self.headers))

    def header(self, name: str) -> Optional[str]:
        """Return the first value of header ``name`` (case-insensitive)."""
        wanted = name.lower()
        for key, value in self.headers:
            if key.lower() == wanted:
                return value
        return None

    def wants_event_stream(self) -> bool:
        """True when ``Accept`` equals ``text/event-stream`` (case-insensitive)."""
        accept = self.header("accept")
        return accept is not None and accept.strip().lower() == EVENT_STREAM


__all__ = [
    "EVENT_STREAM",
    "HeaderPairs",
    "HeadersInput",
    "RequestDescriptor",
    "normalize_headers",
]
