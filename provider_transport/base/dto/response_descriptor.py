"""Response contract returned by the HTTP adapter.

The body is a tagged union: :class:`BufferedBody` holds the complete payload,
:class:`StreamingBody` holds the live handle the HTTP client produced. Which
form is populated is decided by the request's ``Accept`` header, never by
inspecting the payload.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, Union

from .request_descriptor import HeaderPairs


@dataclass(frozen=True)
class BufferedBody:
    """Fully read response payload."""

    content: bytes

    def text(self, encoding: str = "utf-8") -> str:
        return self.content.decode(encoding, errors="replace")


@dataclass(frozen=True)
class StreamingBody:
    """Live, pull-based response stream.

    ``handle`` is the raw stream object returned by the HTTP client (a
    ``urllib3`` response when dispatching through ``requests``). Consuming
    and closing it is the caller's responsibility.
    """

    handle: Any


Body = Union[BufferedBody, StreamingBody]


@dataclass(frozen=True)
class ResponseDescriptor:
    """Status, reason phrase, headers and body of an HTTP response.

    ``headers`` is a tuple of ``(name, value)`` pairs; a header the server
    sent several times appears several times.
    """

    status: int
    status_text: str
    headers: HeaderPairs
    body: Body

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def is_streaming(self) -> bool:
        return isinstance(self.body, StreamingBody)

    def header(self, name: str) -> Optional[str]:
        values = self.header_values(name)
        return values[0] if values else None

    def header_values(self, name: str) -> List[str]:
        wanted = name.lower()
        return [value for key, value in self.headers if key.lower() == wanted]


__all__ = ["Body", "BufferedBody", "ResponseDescriptor", "StreamingBody"]
