"""
Normalized transport error codes (taxonomy).

Values are lowercase snake_case and appear verbatim as ``error_code`` in
structured log events, so they are a stable public contract.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Failure categories for upstream statuses, transport failures and setup errors."""

    # Upstream answered with an error status.
    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    SERVER_ERROR = "server_error"
    UNAVAILABLE = "unavailable"

    # No response was obtained.
    TIMEOUT = "timeout"
    TRANSIENT = "transient"
    CANCELLED = "cancelled"

    # Raised before any request is sent.
    CONFIGURATION = "configuration"
    INVALID_URL = "invalid_url"

    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
