"""HTTP layer of the transport package.

Exposes the credential extractor, the TLS trust resolver, the fetch adapter
and the ``httpx`` transport that plugs the adapter into SDK clients.
"""

from .cancellable import call_cancellable
from .adapter import FetchAdapter, expand_headers, strip_authorization, to_response_descriptor
from .client import TrustContextAdapter, close_all_sessions, get_requests_session
from .credentials import extract_credentials, has_embedded_credentials, redact_url
from .tls import TrustStore, build_trust_context, get_trust_store
from .transport import FetchTransport, RawStream

__all__ = [
    "FetchAdapter",
    "FetchTransport",
    "RawStream",
    "TrustContextAdapter",
    "TrustStore",
    "build_trust_context",
    "call_cancellable",
    "close_all_sessions",
    "expand_headers",
    "extract_credentials",
    "get_requests_session",
    "get_trust_store",
    "has_embedded_credentials",
    "redact_url",
    "strip_authorization",
    "to_response_descriptor",
]
