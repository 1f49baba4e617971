"""Explicit outcome of a single dispatch through the HTTP client.

``Delivered`` and ``UpstreamResponse`` both carry a translated
:class:`ResponseDescriptor`; they differ only in whether the server accepted
the request. ``TransportFailure`` means no response was obtained at all and
carries the original exception unchanged.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .response_descriptor import Body, ResponseDescriptor
from .request_descriptor import HeaderPairs


@dataclass(frozen=True)
class Delivered:
    """The server answered with a success or redirect status."""

    response: ResponseDescriptor


@dataclass(frozen=True)
class UpstreamResponse:
    """The server answered with a non-2xx status."""

    response: ResponseDescriptor

    @property
    def status(self) -> int:
        return self.response.status

    @property
    def body(self) -> Body:
        return self.response.body

    @property
    def headers(self) -> HeaderPairs:
        return self.response.headers


@dataclass(frozen=True)
class TransportFailure:
    """No response was received (connection error, timeout, cancellation)."""

    cause: BaseException


DispatchResult = Union[Delivered, UpstreamResponse, TransportFailure]


__all__ = ["Delivered", "DispatchResult", "TransportFailure", "UpstreamResponse"]
