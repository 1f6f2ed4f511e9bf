"""
TLS public-key pinning.

The peer's public key is checked against a fixed set of fingerprints right
after the TLS handshake, before any request byte is written. A fingerprint is
the base64-encoded SHA-256 digest of the DER SubjectPublicKeyInfo, the same
format used by HTTP Public Key Pinning.

The check lives in an httpcore network backend wrapper, so it runs once per
handshake and never on a connection that is merely reused.
"""

from __future__ import annotations

import base64
import hashlib
import ssl
from typing import TYPE_CHECKING, Any

import certifi
import httpcore
import httpx
from cryptography import x509
from cryptography.hazmat.primitives import serialization

from eventline.errors import ErrorCode, RequestError
from eventline.telemetry import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable

    from httpcore._backends.base import SOCKET_OPTION

logger = get_logger("eventline.transport.pinning")

PUBLIC_KEY_PIN_SET: tuple[str, ...] = (
    "gg3x7U4UrWfTUpYNy9wL2+GYOQhi3fg5UTn5pzA67gc=",
)
"""Fingerprints of the public keys trusted for the Eventline API."""


def public_key_fingerprint(der_certificate: bytes) -> str:
    """Compute the pin fingerprint of a DER-encoded certificate.

    Args:
        der_certificate: Certificate in DER form

    Returns:
        Base64-encoded SHA-256 digest of the SubjectPublicKeyInfo
    """
    certificate = x509.load_der_x509_certificate(der_certificate)
    spki = certificate.public_key().public_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return base64.b64encode(hashlib.sha256(spki).digest()).decode("ascii")


def check_pin(fingerprint: str, pins: Iterable[str]) -> bool:
    """Return True if the fingerprint belongs to the pin set."""
    return fingerprint in tuple(pins)


def create_ssl_context(ca_file: str | None = None) -> ssl.SSLContext:
    """Create the client SSL context.

    Certificate chain and hostname verification are always enabled.

    Args:
        ca_file: CA bundle path; the certifi bundle is used when omitted
    """
    return ssl.create_default_context(cafile=ca_file or certifi.where())


def verify_peer(ssl_object: Any, pins: tuple[str, ...], host: str | None) -> None:
    """Verify the public key of an established TLS session.

    Resumed sessions were verified during their original handshake and are
    accepted as-is.

    Raises:
        RequestError: With code ``certificate_pin_mismatch`` when the peer
            key is not pinned or no certificate is available
    """
    if ssl_object is None:
        raise RequestError(
            None,
            ErrorCode.CERTIFICATE_PIN_MISMATCH,
            {"host": host},
            "Certificate verification error: no TLS session to verify",
        )

    if ssl_object.session_reused:
        return

    der_certificate = ssl_object.getpeercert(binary_form=True)
    if not der_certificate:
        raise RequestError(
            None,
            ErrorCode.CERTIFICATE_PIN_MISMATCH,
            {"host": host},
            "Certificate verification error: peer sent no certificate",
        )

    fingerprint = public_key_fingerprint(der_certificate)
    if not check_pin(fingerprint, pins):
        logger.warning("Rejected unpinned public key", host=host, fingerprint=fingerprint)
        raise RequestError(
            None,
            ErrorCode.CERTIFICATE_PIN_MISMATCH,
            {"host": host, "fingerprint": fingerprint},
            f"Certificate verification error: the public key of '{host}' "
            "does not match any pinned fingerprints",
        )


class PinningStream(httpcore.AsyncNetworkStream):
    """Network stream that verifies the pinned key after each TLS upgrade."""

    def __init__(self, stream: httpcore.AsyncNetworkStream, pins: tuple[str, ...]) -> None:
        self._stream = stream
        self._pins = pins

    async def read(self, max_bytes: int, timeout: float | None = None) -> bytes:
        return await self._stream.read(max_bytes, timeout=timeout)

    async def write(self, buffer: bytes, timeout: float | None = None) -> None:
        await self._stream.write(buffer, timeout=timeout)

    async def aclose(self) -> None:
        await self._stream.aclose()

    async def start_tls(
        self,
        ssl_context: ssl.SSLContext,
        server_hostname: str | None = None,
        timeout: float | None = None,
    ) -> httpcore.AsyncNetworkStream:
        tls_stream = await self._stream.start_tls(
            ssl_context,
            server_hostname=server_hostname,
            timeout=timeout,
        )
        try:
            verify_peer(tls_stream.get_extra_info("ssl_object"), self._pins, server_hostname)
        except RequestError:
            await tls_stream.aclose()
            raise
        return tls_stream

    def get_extra_info(self, info: str) -> Any:
        return self._stream.get_extra_info(info)


class PinningBackend(httpcore.AsyncNetworkBackend):
    """Network backend whose streams enforce public-key pinning."""

    def __init__(
        self,
        pins: tuple[str, ...],
        backend: httpcore.AsyncNetworkBackend | None = None,
    ) -> None:
        self._pins = pins
        self._backend = backend or httpcore.AnyIOBackend()

    async def connect_tcp(
        self,
        host: str,
        port: int,
        timeout: float | None = None,
        local_address: str | None = None,
        socket_options: Iterable[SOCKET_OPTION] | None = None,
    ) -> httpcore.AsyncNetworkStream:
        stream = await self._backend.connect_tcp(
            host,
            port,
            timeout=timeout,
            local_address=local_address,
            socket_options=socket_options,
        )
        return PinningStream(stream, self._pins)

    async def connect_unix_socket(
        self,
        path: str,
        timeout: float | None = None,
        socket_options: Iterable[SOCKET_OPTION] | None = None,
    ) -> httpcore.AsyncNetworkStream:
        stream = await self._backend.connect_unix_socket(
            path, timeout=timeout, socket_options=socket_options
        )
        return PinningStream(stream, self._pins)

    async def sleep(self, seconds: float) -> None:
        await self._backend.sleep(seconds)


class PinnedHTTPTransport(httpx.AsyncHTTPTransport):
    """httpx transport holding a single connection with pinned TLS.

    Example:
        >>> transport = PinnedHTTPTransport(create_ssl_context(), PUBLIC_KEY_PIN_SET)
        >>> async with httpx.AsyncClient(transport=transport) as client:
        ...     response = await client.get("https://api.eventline.net/v0/org")
    """

    def __init__(
        self,
        ssl_context: ssl.SSLContext,
        pins: tuple[str, ...],
        *,
        network_backend: httpcore.AsyncNetworkBackend | None = None,
    ) -> None:
        # httpx has no network_backend option; the base initializer is skipped
        # and AsyncHTTPTransport only reads _pool when sending and closing.
        self._pool = httpcore.AsyncConnectionPool(
            ssl_context=ssl_context,
            max_connections=1,
            max_keepalive_connections=0,
            network_backend=PinningBackend(pins, network_backend),
        )
