"""
Transport layer - HTTP client for API communication.

Provides httpx-based transport with:
- API token resolution
- Tenant and authentication headers
- TLS public-key pinning
- Response classification and error mapping
"""

from eventline.transport.auth import get_auth_header, resolve_token
from eventline.transport.http import (
    DEFAULT_HOST,
    DEFAULT_PORT,
    DEFAULT_SCHEME,
    DEFAULT_TIMEOUT,
    PROJECT_ID_HEADER,
    Client,
    ClientOptions,
    Verb,
    classify_response,
    create_client,
)
from eventline.transport.pinning import (
    PUBLIC_KEY_PIN_SET,
    PinnedHTTPTransport,
    check_pin,
    create_ssl_context,
    public_key_fingerprint,
)

__all__ = [
    "Client",
    "ClientOptions",
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "DEFAULT_SCHEME",
    "DEFAULT_TIMEOUT",
    "PROJECT_ID_HEADER",
    "PUBLIC_KEY_PIN_SET",
    "PinnedHTTPTransport",
    "Verb",
    "check_pin",
    "classify_response",
    "create_client",
    "create_ssl_context",
    "get_auth_header",
    "public_key_fingerprint",
    "resolve_token",
]
