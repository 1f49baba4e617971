"""Pytest configuration for the transport test suite.

Provides fakes for the ``requests`` session and the CA trust store so the
adapter can be exercised without sockets or real certificates.
"""

from __future__ import annotations

from typing import Iterator

import pytest

from provider_transport.base.http import TrustStore, close_all_sessions
from provider_transport.tests.helpers import CA_BYTES, CA_PATH, CountingReader, FakeContext, FakeSession, SessionRecorder


@pytest.fixture()
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture()
def session_recorder(fake_session: FakeSession) -> SessionRecorder:
    return SessionRecorder(fake_session)


@pytest.fixture()
def ca_reader() -> CountingReader:
    return CountingReader({CA_PATH: CA_BYTES})


@pytest.fixture()
def trust_store(ca_reader: CountingReader) -> TrustStore:
    """Trust store whose contexts are ``FakeContext`` objects built from the file bytes."""
    return TrustStore(context_factory=FakeContext, reader=ca_reader)


@pytest.fixture(autouse=True)
def clean_session_pool() -> Iterator[None]:
    close_all_sessions()
    yield
    close_all_sessions()


@pytest.fixture(autouse=True)
def clean_provider_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer environment variables out of configuration tests."""
    for name in (
        "OPENAI_API_KEY",
        "OPENAI_BASE_URL",
        "OLLAMA_BASE_URL",
        "OLLAMA_API_KEY",
        "AZURE_OPENAI_API_KEY",
        "AZURE_OPENAI_API_VERSION",
        "OPENAI_ORGANIZATION",
        "OPENAI_PROJECT",
        "OPENAI_TIMEOUT_MS",
        "PT_TIMEOUT_HTTP_SECONDS",
        "PT_TIMEOUT_CONNECT_SECONDS",
        "PROVIDERS_CONFIG_FILE",
        "PROVIDERS_CA_CERTIFICATE",
        "PROVIDERS_TLS_INSECURE",
        "PYTHONHTTPSVERIFY",
        "OPENAI_API_VERSION",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DOTENV_FILE", "/nonexistent/.env")
