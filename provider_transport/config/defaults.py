"""provider_transport.config.defaults
==================================

Small, stable default values for provider configuration. They can be
overridden through the environment or an external configuration file.

Only plain constants live here; this module imports nothing from the rest of
the package.
"""

from __future__ import annotations

from typing import Dict

# ---- Provider identities with special handling ----
# Cloud variant: built with a fixed API-version parameter.
AZURE_PROVIDER = "azure"
# Self-hosted provider whose base URL may embed userinfo.
OLLAMA_PROVIDER = "ollama"

# ---- Base URLs ----
OPENAI_DEFAULT_BASE_URL = "https://api.openai.com/v1"
OLLAMA_DEFAULT_BASE_URL = "http://localhost:11434/v1"
OPENROUTER_DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
GEMINI_DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai"
MISTRAL_DEFAULT_BASE_URL = "https://api.mistral.ai/v1"
DEEPSEEK_DEFAULT_BASE_URL = "https://api.deepseek.com"
XAI_DEFAULT_BASE_URL = "https://api.x.ai/v1"
GROQ_DEFAULT_BASE_URL = "https://api.groq.com/openai/v1"

DEFAULT_BASE_URLS: Dict[str, str] = {
    "openai": OPENAI_DEFAULT_BASE_URL,
    OLLAMA_PROVIDER: OLLAMA_DEFAULT_BASE_URL,
    "openrouter": OPENROUTER_DEFAULT_BASE_URL,
    "gemini": GEMINI_DEFAULT_BASE_URL,
    "mistral": MISTRAL_DEFAULT_BASE_URL,
    "deepseek": DEEPSEEK_DEFAULT_BASE_URL,
    "xai": XAI_DEFAULT_BASE_URL,
    "groq": GROQ_DEFAULT_BASE_URL,
}

# ---- Cloud variant ----
AZURE_OPENAI_DEFAULT_API_VERSION = "2025-03-01-preview"

# Ollama ignores the key but the SDK refuses to build a client without one.
OLLAMA_PLACEHOLDER_API_KEY = "ollama"

__all__ = [
    "AZURE_OPENAI_DEFAULT_API_VERSION",
    "AZURE_PROVIDER",
    "DEFAULT_BASE_URLS",
    "OLLAMA_PLACEHOLDER_API_KEY",
    "OLLAMA_PROVIDER",
    "OPENAI_DEFAULT_BASE_URL",
    "OLLAMA_DEFAULT_BASE_URL",
]
