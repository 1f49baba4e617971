"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `provider_transport.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .provider_error import (
    ConfigurationError,
    CredentialDecodeError,
    InvalidBaseURLError,
    ProviderError,
)
from .classification import classify_exception, classify_status

__all__ = [
    "ErrorCode",
    "ProviderError",
    "ConfigurationError",
    "InvalidBaseURLError",
    "CredentialDecodeError",
    "classify_exception",
    "classify_status",
]
