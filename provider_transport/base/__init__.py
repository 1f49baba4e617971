"""
Transport Base Package

Exports the adapter-layer contracts: DTOs, the error taxonomy, cancellation
primitives, the HTTP adapter and the client factory.
"""

from .cancellation import CancellationToken, CancelledError
from .dto import (
    BufferedBody,
    Credentials,
    Delivered,
    DispatchResult,
    ProviderConfig,
    RequestDescriptor,
    ResponseDescriptor,
    StreamingBody,
    TransportFailure,
    TransportSettings,
    UpstreamResponse,
)
from .errors import (
    ConfigurationError,
    CredentialDecodeError,
    ErrorCode,
    InvalidBaseURLError,
    ProviderError,
)
from .factory import ClientFactory, ClientHandle, TransportVariant, build_client, select_variant
from .http import FetchAdapter, FetchTransport, TrustStore, extract_credentials
from .timeouts import TimeoutConfig, get_timeout_config

__all__ = [
    # DTOs
    "BufferedBody",
    "Credentials",
    "Delivered",
    "DispatchResult",
    "ProviderConfig",
    "RequestDescriptor",
    "ResponseDescriptor",
    "StreamingBody",
    "TransportFailure",
    "TransportSettings",
    "UpstreamResponse",
    # Errors
    "ConfigurationError",
    "CredentialDecodeError",
    "ErrorCode",
    "InvalidBaseURLError",
    "ProviderError",
    # HTTP
    "FetchAdapter",
    "FetchTransport",
    "TrustStore",
    "extract_credentials",
    # Factory
    "ClientFactory",
    "ClientHandle",
    "TransportVariant",
    "build_client",
    "select_variant",
    # Timeouts & Cancellation
    "TimeoutConfig",
    "get_timeout_config",
    "CancellationToken",
    "CancelledError",
]
