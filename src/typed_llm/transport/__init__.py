"""
Transport layer - HTTP client for the model endpoint.
"""

from typed_llm.transport.auth import get_auth_header, resolve_api_key
from typed_llm.transport.http import HttpTransport

__all__ = [
    "HttpTransport",
    "get_auth_header",
    "resolve_api_key",
]
