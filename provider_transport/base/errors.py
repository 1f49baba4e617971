"""Unified transport error taxonomy public surface.

Re-exports the implementations under
``provider_transport.base.errors_parts`` to keep a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import (
    ConfigurationError,
    CredentialDecodeError,
    InvalidBaseURLError,
    ProviderError,
)
from .errors_parts.classification import classify_exception, classify_status

__all__ = [
    "ErrorCode",
    "ProviderError",
    "ConfigurationError",
    "InvalidBaseURLError",
    "CredentialDecodeError",
    "classify_exception",
    "classify_status",
]
