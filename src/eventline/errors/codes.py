"""错误码：SDK 自身产生的请求错误码。

Error codes produced by the SDK itself.

Server-declared codes are passed through verbatim as plain strings; the
values below are the ones the transport emits on its own.
"""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Codes carried by RequestError when the failure originates client-side."""

    INCOMPLETE_RESPONSE = "incomplete_response"
    """Connection closed before the full response body was received."""

    INVALID_JSON = "invalid_json"
    """Response declared application/json but its body failed to parse."""

    UNKNOWN_ERROR = "unknown_error"
    """Failure status without a server-declared code."""

    TIMEOUT = "timeout"
    """The request deadline elapsed."""

    CONNECTION_ERROR = "connection_error"
    """The server could not be reached."""

    TLS_ERROR = "tls_error"
    """Standard certificate or hostname verification failed."""

    CERTIFICATE_PIN_MISMATCH = "certificate_pin_mismatch"
    """The peer public key is not in the pinned fingerprint set."""

    TRANSPORT_ERROR = "transport_error"
    """Any other failure of the underlying HTTP stack."""


TRANSPORT_ERROR_CODES: frozenset[str] = frozenset(
    {
        ErrorCode.TIMEOUT.value,
        ErrorCode.CONNECTION_ERROR.value,
        ErrorCode.TLS_ERROR.value,
        ErrorCode.CERTIFICATE_PIN_MISMATCH.value,
        ErrorCode.TRANSPORT_ERROR.value,
    }
)
"""Codes raised before any HTTP status is known."""
