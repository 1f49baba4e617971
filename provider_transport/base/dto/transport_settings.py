"""Process-level transport settings, loaded once at the configuration boundary.

The adapter and the TLS resolver receive this object explicitly instead of
reading the environment at call time. See
``provider_transport.config.env.load_transport_settings`` for the loader.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class TransportSettings:
    """Environment-sourced settings shared by every client in the process.

    Attributes:
        ca_certificate_path: Custom CA certificate file for ``https`` targets.
        tls_validation_disabled: The environment disables certificate
            validation process-wide. Informational only.
        organization: Value for the ``OpenAI-Organization`` default header.
        project: Value for the ``OpenAI-Project`` default header.
        azure_api_version: API version used by the cloud variant client.
    """

    ca_certificate_path: Optional[str] = None
    tls_validation_disabled: bool = False
    organization: Optional[str] = None
    project: Optional[str] = None
    azure_api_version: Optional[str] = None


__all__ = ["TransportSettings"]
