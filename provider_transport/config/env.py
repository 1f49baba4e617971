"""provider_transport.config.env
==============================

Environment variable conventions for provider credentials and the
process-wide transport settings.

Purpose
-------
- Map provider identifiers to their API-key environment variables
  (canonical names and aliases).
- Load :class:`TransportSettings` once at the configuration boundary so the
  HTTP adapter never reads the environment at call time.

Transport variables
-------------------
``PROVIDERS_CA_CERTIFICATE``
    Path to a custom CA certificate trusted for ``https`` targets.
``PYTHONHTTPSVERIFY=0`` / ``PROVIDERS_TLS_INSECURE=1``
    Certificate validation is disabled process-wide (informational).
``OPENAI_ORGANIZATION`` / ``OPENAI_PROJECT``
    Default header values added to every client.
``AZURE_OPENAI_API_VERSION``
    API version for the cloud variant.

Failure Modes
-------------
Lookups return ``None`` for unknown providers or unset variables; callers
decide how to proceed.
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Mapping, Optional, Tuple

from ..base.dto.transport_settings import TransportSettings
from .defaults import AZURE_OPENAI_DEFAULT_API_VERSION

# Canonical provider -> env var mapping
ENV_MAP: Dict[str, str] = {
    "openai": "OPENAI_API_KEY",
    "azure": "AZURE_OPENAI_API_KEY",
    "ollama": "OLLAMA_API_KEY",
    "openrouter": "OPENROUTER_API_KEY",
    "gemini": "GEMINI_API_KEY",
    "mistral": "MISTRAL_API_KEY",
    "deepseek": "DEEPSEEK_API_KEY",
    "xai": "XAI_API_KEY",
    "groq": "GROQ_API_KEY",
}

# Provider -> ordered tuple of acceptable env var names (canonical first)
ENV_ALIASES: Dict[str, Tuple[str, ...]] = {
    "gemini": ("GEMINI_API_KEY", "GOOGLE_API_KEY"),
}

CA_CERTIFICATE_ENV = "PROVIDERS_CA_CERTIFICATE"
TLS_INSECURE_ENV = "PROVIDERS_TLS_INSECURE"
PYTHON_HTTPS_VERIFY_ENV = "PYTHONHTTPSVERIFY"

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the value looks like a placeholder/test value.

    Heuristics: contains 'placeholder', 'changeme', 'example', or starts with
    'test_'. Case-insensitive.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return "placeholder" in v or "changeme" in v or "example" in v or v.startswith("test_")


def get_env_var_name(provider: str) -> Optional[str]:
    """Return the canonical API-key environment variable for a provider."""
    return ENV_MAP.get(provider.lower()) if provider else None


def get_env_var_candidates(provider: str) -> Iterable[str]:
    """Yield acceptable environment variable names, canonical first."""
    p = (provider or "").lower()
    canonical = ENV_MAP.get(p)
    if canonical:
        yield canonical
    for alias in ENV_ALIASES.get(p, ()):
        if alias != canonical:
            yield alias


def resolve_provider_key(provider: str, environ: Optional[Mapping[str, str]] = None) -> Tuple[Optional[str], Optional[str]]:
    """Resolve an API key for a provider from the environment.

    Returns:
        ``(value, env_var_used)`` for the first non-empty candidate, or
        ``(None, None)`` when nothing is set.
    """
    env = os.environ if environ is None else environ
    for name in get_env_var_candidates(provider):
        if val := env.get(name):
            return val, name
    return None, None


def _validation_disabled(env: Mapping[str, str]) -> bool:
    if env.get(PYTHON_HTTPS_VERIFY_ENV, "").strip() == "0":
        return True
    return env.get(TLS_INSECURE_ENV, "").strip().lower() in _TRUTHY


def load_transport_settings(environ: Optional[Mapping[str, str]] = None) -> TransportSettings:
    """Read :class:`TransportSettings` from ``environ`` (default: ``os.environ``).

    Call once per process or session and pass the result explicitly.
    """
    env = os.environ if environ is None else environ
    return TransportSettings(
        ca_certificate_path=env.get(CA_CERTIFICATE_ENV) or None,
        tls_validation_disabled=_validation_disabled(env),
        organization=env.get("OPENAI_ORGANIZATION") or None,
        project=env.get("OPENAI_PROJECT") or None,
        azure_api_version=env.get("AZURE_OPENAI_API_VERSION") or AZURE_OPENAI_DEFAULT_API_VERSION,
    )


__all__ = [
    "CA_CERTIFICATE_ENV",
    "ENV_ALIASES",
    "ENV_MAP",
    "TLS_INSECURE_ENV",
    "get_env_var_candidates",
    "get_env_var_name",
    "is_placeholder",
    "load_transport_settings",
    "resolve_provider_key",
]
