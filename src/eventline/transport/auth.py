"""
API token resolution utilities.

Resolves the API token from:
1. Explicit value
2. The EVCLI_API_KEY environment variable
"""

from __future__ import annotations

import os

TOKEN_ENV_VAR = "EVCLI_API_KEY"


def resolve_token(explicit_token: str | None = None) -> str | None:
    """Resolve the API token.

    Resolution order:
    1. Explicit token if provided
    2. Environment variable EVCLI_API_KEY

    Args:
        explicit_token: Explicitly provided token

    Returns:
        Resolved token or None if not found
    """
    if explicit_token:
        return explicit_token

    token = os.getenv(TOKEN_ENV_VAR)
    if token:
        return token

    return None


def get_auth_header(token: str | None) -> dict[str, str]:
    """Get the authentication header for a token.

    Returns:
        Dictionary with the Authorization header, empty without a token
    """
    if not token:
        return {}
    return {"Authorization": f"Bearer {token}"}
