"""Client factory: build the SDK client a provider configuration calls for.

Purpose
-------
Decide once, at construction time, which of three client shapes a provider
needs and build it:

``TransportVariant.CLOUD``
    ``openai.AzureOpenAI`` with the fixed API-version parameter. The base URL
    is used verbatim; the cloud variant never goes through the adapter.
``TransportVariant.STANDARD_WITH_ADAPTER``
    ``openai.OpenAI`` whose ``httpx`` client uses :class:`FetchTransport`.
    Selected for the self-hosted provider when its base URL embeds userinfo.
    The base URL is passed with its credentials; the adapter strips them on
    every call.
``TransportVariant.STANDARD``
    ``openai.OpenAI`` with the default transport and the base URL unmodified.

Default headers always carry ``OpenAI-Organization``/``OpenAI-Project`` when
those are configured process-wide, in addition to the provider's headers.

Failure modes
-------------
- A malformed base URL raises :class:`InvalidBaseURLError` from the
  embedded-credential check; there is no silent fallback.
- An installed SDK whose ``DefaultHttpxClient`` is not an ``httpx.Client``
  raises :class:`ConfigurationError` before the adapter variant is built.
- SDK constructor errors propagate unchanged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional
from urllib.parse import urlsplit

import httpx
from openai import AzureOpenAI, DefaultHttpxClient, OpenAI

from .cancellation import CancellationToken
from .dto import ProviderConfig, TransportSettings
from .errors import ConfigurationError
from .http.adapter import FetchAdapter, SessionProvider
from .http.client import get_requests_session
from .http.credentials import has_embedded_credentials
from .http.tls import TrustStore
from .http.transport import FetchTransport
from .logging import LogContext, get_logger, log_event

CLOUD_PROVIDER = "azure"
SELF_HOSTED_PROVIDER = "ollama"


class TransportVariant(str, Enum):
    """Which client shape a provider configuration resolves to."""

    CLOUD = "cloud"
    STANDARD = "standard"
    STANDARD_WITH_ADAPTER = "standard_with_adapter"


@dataclass(frozen=True)
class ClientHandle:
    """A constructed SDK client together with the decision that produced it.

    Attributes:
        variant: The resolved :class:`TransportVariant`.
        client: ``openai.OpenAI`` or ``openai.AzureOpenAI`` instance.
        config: The configuration the client was built from.
        transport: The substituted transport, for the adapter variant only.
    """

    variant: TransportVariant
    client: Any
    config: ProviderConfig
    transport: Optional[FetchTransport] = None

    def close(self) -> None:
        """Release the client's HTTP resources."""
        self.client.close()


def select_variant(config: ProviderConfig) -> TransportVariant:
    """Resolve the client shape for ``config``.

    Raises:
        InvalidBaseURLError: a non-cloud base URL cannot be parsed.
    """
    if config.provider == CLOUD_PROVIDER:
        return TransportVariant.CLOUD
    embedded = bool(config.base_url) and has_embedded_credentials(config.base_url)
    if embedded and config.provider == SELF_HOSTED_PROVIDER:
        return TransportVariant.STANDARD_WITH_ADAPTER
    return TransportVariant.STANDARD


def build_default_headers(config: ProviderConfig, settings: TransportSettings) -> Dict[str, str]:
    """Provider headers plus the process-wide organization/project identifiers."""
    headers: Dict[str, str] = dict(config.headers)
    if settings.organization:
        headers["OpenAI-Organization"] = settings.organization
    if settings.project:
        headers["OpenAI-Project"] = settings.project
    return headers


def _require_httpx_client() -> None:
    """Fail fast when the installed SDK no longer builds on ``httpx.Client``.

    :class:`FetchTransport` is an ``httpx`` transport; an SDK whose HTTP
    client comes from another library would accept it and then fail on the
    first request.
    """
    if not (isinstance(DefaultHttpxClient, type) and issubclass(DefaultHttpxClient, httpx.Client)):
        raise ConfigurationError(
            message=(
                "the installed openai SDK does not build its HTTP client on httpx.Client; "
                "the credential-bearing base URL needs openai>=1.40,<2"
            ),
        )


class ClientFactory:
    """Build SDK clients for provider configurations.

    Parameters
    ----------
    settings:
        Process-wide :class:`TransportSettings`. Loaded from the environment
        when omitted.
    trust_store / session_provider:
        Passed to the :class:`FetchAdapter` of adapter-variant clients.
    cancel_token:
        Default cancellation token for adapter-variant clients.
    """

    def __init__(
        self,
        settings: Optional[TransportSettings] = None,
        *,
        trust_store: Optional[TrustStore] = None,
        session_provider: SessionProvider = get_requests_session,
        cancel_token: Optional[CancellationToken] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if settings is None:
            # Local import: config depends on base DTOs.
            from ..config.env import load_transport_settings

            settings = load_transport_settings()
        self._settings = settings
        self._trust_store = trust_store
        self._session_provider = session_provider
        self._cancel_token = cancel_token
        self._logger = logger or get_logger("transport.factory")

    @property
    def settings(self) -> TransportSettings:
        return self._settings

    def build(self, config: ProviderConfig) -> ClientHandle:
        """Construct the client ``config`` resolves to."""
        variant = select_variant(config)
        headers = build_default_headers(config, self._settings)
        common: Dict[str, Any] = {
            "api_key": config.api_key,
            "base_url": config.base_url,
            "timeout": config.timeout_seconds,
            "default_headers": headers,
        }
        if config.max_retries is not None:
            common["max_retries"] = config.max_retries

        transport: Optional[FetchTransport] = None
        if variant is TransportVariant.CLOUD:
            api_version = config.api_version or self._settings.azure_api_version
            client: Any = AzureOpenAI(api_version=api_version, **common)
        elif variant is TransportVariant.STANDARD_WITH_ADAPTER:
            adapter = FetchAdapter(
                self._settings,
                trust_store=self._trust_store,
                session_provider=self._session_provider,
                provider=config.provider,
            )
            _require_httpx_client()
            transport = FetchTransport(adapter, cancel_token=self._cancel_token)
            # Proxy environment variables are honored by requests; httpx must not mount its own.
            client = OpenAI(http_client=DefaultHttpxClient(transport=transport, trust_env=False), **common)
        else:
            client = OpenAI(**common)

        host = urlsplit(config.base_url).hostname if config.base_url else None
        log_event(
            self._logger,
            "client.build",
            LogContext(provider=config.provider, host=host),
            level=logging.DEBUG,
            variant=variant.value,
        )
        return ClientHandle(variant=variant, client=client, config=config, transport=transport)


def build_client(config: ProviderConfig, settings: Optional[TransportSettings] = None, **kwargs: Any) -> ClientHandle:
    """Compatibility helper: ``ClientFactory(settings, **kwargs).build(config)``."""
    return ClientFactory(settings, **kwargs).build(config)


__all__ = [
    "ClientFactory",
    "ClientHandle",
    "TransportVariant",
    "build_client",
    "build_default_headers",
    "select_variant",
]
