"""Test doubles for the ``requests`` side of the adapter.

``FakeSession`` records every ``request`` call and answers with a canned
``requests.Response`` (or raises a canned exception). ``FakeRaw`` mimics the
``urllib3`` response handle used for streamed bodies.
"""
from __future__ import annotations

import threading
import time
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

import requests
from requests.structures import CaseInsensitiveDict

CA_PATH = "/etc/ssl/private-ca.pem"
CA_BYTES = b"-----BEGIN CERTIFICATE-----\nMIIBfake\n-----END CERTIFICATE-----\n"


class FakeRaw:
    """Minimal stand-in for ``urllib3.response.HTTPResponse``."""

    def __init__(self, chunks: Iterable[bytes], headers: Any = None) -> None:
        self.chunks = list(chunks)
        self.headers = headers
        self.closed = False
        self.released = False
        self.read_calls: List[Dict[str, Any]] = []

    def read1(self, amt: Optional[int] = None, decode_content: Optional[bool] = None) -> bytes:
        self.read_calls.append({"amt": amt, "decode_content": decode_content})
        if self.closed:
            raise ValueError("I/O operation on closed file")
        if not self.chunks:
            return b""
        return self.chunks.pop(0)

    def close(self) -> None:
        self.closed = True

    def release_conn(self) -> None:
        self.released = True


def make_response(
    status: int = 200,
    body: bytes = b"",
    headers: Optional[Mapping[str, str]] = None,
    *,
    reason: str = "OK",
    raw: Any = None,
) -> requests.Response:
    """Build a real ``requests.Response`` without touching the network."""
    response = requests.Response()
    response.status_code = status
    response.reason = reason
    response.headers = CaseInsensitiveDict(headers or {})
    response.raw = raw
    if raw is None:
        response._content = body
        response._content_consumed = True
    return response


class FakeSession:
    """Records calls; returns ``response`` or raises ``error``."""

    def __init__(self, response: Optional[requests.Response] = None, error: Optional[BaseException] = None) -> None:
        self.response = response if response is not None else make_response()
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        self.calls.append({"method": method, "url": url, **kwargs})
        if self.error is not None:
            raise self.error
        return self.response

    @property
    def last_call(self) -> Dict[str, Any]:
        return self.calls[-1]


class SessionRecorder:
    """``session_provider`` double recording the trust context of each call."""

    def __init__(self, session: FakeSession) -> None:
        self.session = session
        self.contexts: List[Any] = []

    def __call__(self, trust_context: Any = None, purpose: str = "fetch") -> FakeSession:
        self.contexts.append(trust_context)
        return self.session


class FakeContext:
    """Stand-in for ``ssl.SSLContext`` built from CA bytes."""

    def __init__(self, data: bytes) -> None:
        self.data = data


class CountingReader:
    """CA file reader double counting reads per path."""

    def __init__(self, contents: Optional[Mapping[str, bytes]] = None) -> None:
        self.contents = dict(contents or {})
        self.reads: List[str] = []

    def __call__(self, path: str) -> bytes:
        self.reads.append(path)
        if path not in self.contents:
            raise FileNotFoundError(2, "No such file or directory", path)
        return self.contents[path]


class BlockingSession(FakeSession):
    """``FakeSession`` whose ``request`` waits until ``release`` is set."""

    def __init__(self, response: Optional[requests.Response] = None) -> None:
        super().__init__(response)
        self.entered = threading.Event()
        self.release = threading.Event()

    def request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        self.calls.append({"method": method, "url": url, **kwargs})
        self.entered.set()
        self.release.wait(10)
        return self.response


def wait_for(predicate: Callable[[], bool], timeout: float = 2.0) -> bool:
    """Poll ``predicate`` until it holds or ``timeout`` seconds pass."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()
