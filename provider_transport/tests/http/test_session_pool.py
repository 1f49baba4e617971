"""Unit tests for the shared ``requests`` session pool.

Covers:
- Same key (trust context, purpose) returns the same instance.
- Different purpose or trust context yields different instances.
- Custom trust contexts are mounted on ``https://`` only.
"""
from __future__ import annotations

import ssl

from provider_transport.base.http import TrustContextAdapter, close_all_sessions, get_requests_session


def test_same_key_returns_same_instance():
    s1 = get_requests_session(None, purpose="fetch")
    s2 = get_requests_session(None, purpose="fetch")
    assert s1 is s2, "Expected pooled sessions to be identical for same key"


def test_different_purpose_returns_different_instances():
    s1 = get_requests_session(None, purpose="fetch")
    s2 = get_requests_session(None, purpose="stream")
    assert s1 is not s2, "Different purposes should not share a session"


def test_trust_context_gets_its_own_session():
    ctx = ssl.create_default_context()
    plain = get_requests_session(None)
    trusted = get_requests_session(ctx)
    assert plain is not trusted
    assert get_requests_session(ctx) is trusted
    adapter = trusted.get_adapter("https://secure-box/v1")
    assert isinstance(adapter, TrustContextAdapter)
    assert adapter.poolmanager.connection_pool_kw["ssl_context"] is ctx
    assert not isinstance(trusted.get_adapter("http://plain-box/v1"), TrustContextAdapter)


def test_close_all_sessions_clears_pool():
    s1 = get_requests_session(None)
    close_all_sessions()
    assert get_requests_session(None) is not s1
