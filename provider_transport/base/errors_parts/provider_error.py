"""
Structured provider error exception types.

`ProviderError` carries a normalized `ErrorCode`. The configuration-time
failures raised by the adapter layer specialise it with a fixed code so
callers can catch either the family or the specific failure.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .error_code import ErrorCode


@dataclass
class ProviderError(Exception):
    """Represents a structured provider error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        provider: Provider key where the error originated (e.g., ``"ollama"``).
        raw: Optional original exception for diagnostics.
    """

    code: ErrorCode
    message: str
    provider: str = "-"
    raw: Optional[BaseException] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining provider, code, and message."""
        return f"{self.provider} {self.code.value}: {self.message}"


@dataclass
class ConfigurationError(ProviderError):
    """A configured file (CA certificate, provider config) could not be loaded,
    or the installed SDK cannot host the fetch adapter.

    CA failures are raised before any network I/O. ``path`` names the failing file.
    """

    code: ErrorCode = field(default=ErrorCode.CONFIGURATION)
    message: str = ""
    path: Optional[str] = None


@dataclass
class InvalidBaseURLError(ProviderError):
    """A provider base URL could not be parsed."""

    code: ErrorCode = field(default=ErrorCode.INVALID_URL)
    message: str = ""
    url: Optional[str] = None


@dataclass
class CredentialDecodeError(ProviderError):
    """URL userinfo contains malformed percent-encoding."""

    code: ErrorCode = field(default=ErrorCode.INVALID_URL)
    message: str = ""


__all__ = [
    "ProviderError",
    "ConfigurationError",
    "InvalidBaseURLError",
    "CredentialDecodeError",
]
