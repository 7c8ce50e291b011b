"""
API key resolution and auth headers.

Resolves API keys from:
1. Explicit value
2. ``TYPED_LLM_API_KEY`` environment variable
3. ``OPENAI_API_KEY`` environment variable
"""

from __future__ import annotations

import os

_ENV_VARS = ("TYPED_LLM_API_KEY", "OPENAI_API_KEY")


def resolve_api_key(explicit_key: str | None = None) -> str | None:
    """Resolve the API key, or None if none is configured."""
    if explicit_key:
        return explicit_key
    for env_var in _ENV_VARS:
        key = os.getenv(env_var)
        if key:
            return key
    return None


def get_auth_header(auth_style: str, api_key: str | None = None) -> dict[str, str]:
    """Get the authentication header for the configured auth style.

    Args:
        auth_style: ``bearer`` or ``api-key``
        api_key: Optional explicit API key

    Returns:
        Dictionary with the auth header, empty if no key is available
    """
    key = resolve_api_key(api_key)
    if not key:
        return {}
    if auth_style == "api-key":
        return {"api-key": key}
    return {"Authorization": f"Bearer {key}"}
