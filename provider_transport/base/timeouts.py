"""Timeout configuration for provider clients and the HTTP adapter.

Centralizes the request timeout handed to SDK clients at construction time
and the fallback timeout the adapter applies when a request arrives without
one. Values are parsed from the environment once and cached; the cache is
refreshed when the relevant variables change (tests adjust them at runtime).

Supported environment variables (all optional):
    OPENAI_TIMEOUT_MS           request timeout in milliseconds
    PT_TIMEOUT_HTTP_SECONDS     request timeout in seconds (wins over the above)
    PT_TIMEOUT_CONNECT_SECONDS  connect timeout in seconds
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Tuple

_ENV_NAMES = ("OPENAI_TIMEOUT_MS", "PT_TIMEOUT_HTTP_SECONDS", "PT_TIMEOUT_CONNECT_SECONDS")


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        http_timeout_seconds: Overall per-request timeout handed to SDK
            clients and used as the read timeout by the adapter.
        connect_timeout_seconds: Upper bound for establishing a connection.
    """

    http_timeout_seconds: float = 600.0
    connect_timeout_seconds: float = 10.0

    def as_requests_timeout(self) -> Tuple[float, float]:
        """Return the ``(connect, read)`` tuple understood by ``requests``."""
        return (min(self.connect_timeout_seconds, self.http_timeout_seconds), self.http_timeout_seconds)


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: Optional[float], *, scale: float = 1.0) -> Optional[float]:
    """Parse a positive float from environment variable ``name``.

    Returns ``default`` if the variable is unset, not a valid float, or not
    positive. ``scale`` converts units (e.g., milliseconds to seconds).
    """
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw) * scale
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached :class:`TimeoutConfig`.

    Precedence for the request timeout:
        1. PT_TIMEOUT_HTTP_SECONDS
        2. OPENAI_TIMEOUT_MS
        3. built-in default (600 seconds, the OpenAI SDK default)
    """
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join(os.getenv(name, "") for name in _ENV_NAMES)
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED

    defaults = TimeoutConfig()
    http = _parse_env_float(
        "PT_TIMEOUT_HTTP_SECONDS",
        _parse_env_float("OPENAI_TIMEOUT_MS", defaults.http_timeout_seconds, scale=0.001),
    )
    connect = _parse_env_float("PT_TIMEOUT_CONNECT_SECONDS", defaults.connect_timeout_seconds)

    _CACHED = TimeoutConfig(http_timeout_seconds=float(http), connect_timeout_seconds=float(connect))
    _ENV_GUARD = guard
    return _CACHED


__all__ = ["TimeoutConfig", "get_timeout_config"]
