"""Adapter and transport against a loopback server.

These tests use real sockets: event delivery on a connection the server
keeps open, cancellation of a call still waiting for headers, and TLS
handshakes verified against a generated CA.
"""
from __future__ import annotations

import base64
import ssl
import threading
import time

import httpx
import pytest
import requests
import trustme

from provider_transport.base.cancellation import CancellationToken, CancelledError
from provider_transport.base.dto import RequestDescriptor, TransportSettings
from provider_transport.base.http import FetchAdapter, FetchTransport, TrustStore, get_requests_session
from provider_transport.tests.local_server import QuietHandler, serve


@pytest.fixture(autouse=True)
def no_proxy(monkeypatch):
    for name in ("HTTP_PROXY", "HTTPS_PROXY", "ALL_PROXY", "http_proxy", "https_proxy", "all_proxy"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("NO_PROXY", "127.0.0.1,localhost")


@pytest.fixture()
def ca():
    return trustme.CA()


@pytest.fixture()
def server_context(ca):
    context = ssl.create_default_context(ssl.Purpose.CLIENT_AUTH)
    ca.issue_cert("127.0.0.1").configure_cert(context)
    return context


@pytest.fixture()
def ca_file(ca, tmp_path):
    path = tmp_path / "local-ca.pem"
    ca.cert_pem.write_to_path(str(path))
    return str(path)


class ModelsHandler(QuietHandler):
    def do_GET(self):
        body = b'{"object": "list"}'
        self.send_response(200)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)


def test_first_event_arrives_while_connection_stays_open():
    release = threading.Event()
    seen = {}

    class EventHandler(QuietHandler):
        protocol_version = "HTTP/1.0"

        def do_GET(self):
            seen["path"] = self.path
            seen["authorization"] = self.headers.get("Authorization")
            self.send_response(200)
            self.send_header("Content-Type", "text/event-stream")
            self.end_headers()
            self.wfile.write(b"data: hello\n\n")
            self.wfile.flush()
            release.wait(5)

    adapter = FetchAdapter(trust_store=TrustStore())
    with serve(EventHandler) as base:
        url = base.replace("http://", "http://admin:secret@") + "/v1/events"
        try:
            with httpx.Client(transport=FetchTransport(adapter)) as client:
                started = time.monotonic()
                with client.stream("GET", url, headers={"Accept": "text/event-stream"}) as response:
                    first = next(response.iter_raw())
                    elapsed = time.monotonic() - started
                    held_open = not release.is_set()
        finally:
            release.set()

    assert first == b"data: hello\n\n"
    assert held_open
    assert elapsed < 4
    assert seen["path"] == "/v1/events"
    assert seen["authorization"] == "Basic " + base64.b64encode(b"admin:secret").decode("ascii")


def test_cancel_while_waiting_for_headers_returns_promptly():
    release = threading.Event()

    class SlowHandler(QuietHandler):
        def do_GET(self):
            release.wait(5)
            self.send_response(200)
            self.send_header("Content-Length", "0")
            self.end_headers()

    token = CancellationToken()
    adapter = FetchAdapter(trust_store=TrustStore())
    with serve(SlowHandler) as base:
        url = base + "/v1/models"
        timer = threading.Timer(0.2, token.cancel, args=("user abort",))
        timer.start()
        started = time.monotonic()
        try:
            with pytest.raises(CancelledError, match="user abort"):
                adapter.adapt(url, RequestDescriptor(url=url, cancel_token=token, timeout=(5.0, 10.0)))
            elapsed = time.monotonic() - started
        finally:
            release.set()
            timer.cancel()

    assert elapsed < 2


def test_custom_ca_verifies_local_tls_server(server_context, ca_file):
    context = TrustStore().resolve(ca_file, "https")
    with serve(ModelsHandler, server_context) as base:
        response = get_requests_session(context).get(base + "/v1/models", timeout=5)
    assert response.status_code == 200
    assert response.json() == {"object": "list"}


def test_adapter_with_configured_ca_reaches_tls_server(server_context, ca_file):
    adapter = FetchAdapter(TransportSettings(ca_certificate_path=ca_file), trust_store=TrustStore())
    with serve(ModelsHandler, server_context) as base:
        url = base.replace("https://", "https://admin:secret@") + "/v1/models"
        response = adapter.adapt(url, RequestDescriptor(url=url))
    assert response.status == 200
    assert response.body.content == b'{"object": "list"}'


def test_default_session_rejects_unknown_ca(server_context):
    with serve(ModelsHandler, server_context) as base:
        with pytest.raises(requests.exceptions.SSLError):
            get_requests_session(None).get(base + "/v1/models", timeout=5)
