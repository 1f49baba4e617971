"""provider_transport package

Provider-aware HTTP adapter layer for OpenAI-compatible SDK clients.

Purpose:
    Build the right SDK client for a configured provider and, when the
    endpoint needs it (credentials embedded in the base URL, a custom CA for
    a self-signed TLS endpoint, pass-through event streams), route its
    traffic through ``requests`` instead of the default ``httpx`` transport.

Public API (re-exported):
    - Version: ``__version__``
    - Factory: :func:`create_client`, :class:`ClientFactory`, :class:`ClientHandle`
    - Adapter: :class:`FetchAdapter`, :class:`FetchTransport`, :func:`extract_credentials`
    - Configuration: :func:`get_provider_config`, :func:`load_transport_settings`
    - Exceptions: :class:`ProviderError`, :class:`ConfigurationError`,
      :class:`InvalidBaseURLError`, :class:`CredentialDecodeError`
"""

from typing import Any, Optional

from .base.cancellation import CancellationToken, CancelledError
from .base.dto import ProviderConfig, RequestDescriptor, ResponseDescriptor, TransportSettings
from .base.errors import (
    ConfigurationError,
    CredentialDecodeError,
    ErrorCode,
    InvalidBaseURLError,
    ProviderError,
)
from .base.factory import ClientFactory, ClientHandle, TransportVariant, build_client
from .base.http import FetchAdapter, FetchTransport, extract_credentials
from .config import get_provider_config, load_transport_settings

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "CancellationToken",
    "CancelledError",
    "ClientFactory",
    "ClientHandle",
    "ConfigurationError",
    "CredentialDecodeError",
    "ErrorCode",
    "FetchAdapter",
    "FetchTransport",
    "InvalidBaseURLError",
    "ProviderConfig",
    "ProviderError",
    "RequestDescriptor",
    "ResponseDescriptor",
    "TransportSettings",
    "TransportVariant",
    "build_client",
    "create_client",
    "extract_credentials",
    "get_provider_config",
    "load_transport_settings",
]


def create_client(provider: str, *, overrides: Optional[dict] = None, **factory_kwargs: Any) -> ClientHandle:
    """Resolve ``provider``'s configuration and build its client.

    Parameters
    ----------
    provider:
        Provider identifier (for example, ``"ollama"``).
    overrides:
        Explicit configuration values; win over defaults, file and env.
    **factory_kwargs:
        Forwarded to :class:`ClientFactory` (``settings``, ``trust_store``...).

    Returns
    -------
    ClientHandle
        The built client with its resolved :class:`TransportVariant`.
    """
    config = get_provider_config(provider, overrides)
    return ClientFactory(**factory_kwargs).build(config)
