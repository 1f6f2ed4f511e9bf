"""Tests for TLS public-key pinning."""

from __future__ import annotations

import base64
import hashlib
from typing import Any

import httpcore
import httpx
import pytest
from cryptography import x509
from cryptography.hazmat.primitives import serialization

from eventline.errors import RequestError
from eventline.transport import (
    PUBLIC_KEY_PIN_SET,
    Client,
    ClientOptions,
    PinnedHTTPTransport,
    check_pin,
    create_ssl_context,
    public_key_fingerprint,
)
from eventline.transport.pinning import PinningBackend, verify_peer

RESPONSE = (
    b"HTTP/1.1 200 OK\r\n"
    b"Content-Type: application/json\r\n"
    b"Content-Length: 11\r\n"
    b"\r\n"
    b'{"id":"o1"}'
)


class FakeSSLObject:
    """Stands in for ssl.SSLObject after a handshake."""

    def __init__(self, der_certificate: bytes | None, session_reused: bool = False) -> None:
        self._der_certificate = der_certificate
        self.session_reused = session_reused

    def getpeercert(self, binary_form: bool = False) -> bytes | None:
        assert binary_form
        return self._der_certificate

    def selected_alpn_protocol(self) -> str:
        return "http/1.1"


class FakeStream(httpcore.AsyncNetworkStream):
    """In-memory network stream recording every byte written."""

    def __init__(self, log: dict[str, Any], der_certificate: bytes, tls: bool = False) -> None:
        self._log = log
        self._der_certificate = der_certificate
        self._tls = tls
        self._pending = [RESPONSE]

    async def read(self, max_bytes: int, timeout: float | None = None) -> bytes:
        self._log["reads"] += 1
        if self._pending:
            return self._pending.pop(0)
        return b""

    async def write(self, buffer: bytes, timeout: float | None = None) -> None:
        self._log["written"] += buffer

    async def aclose(self) -> None:
        self._log["closed"] += 1

    async def start_tls(
        self,
        ssl_context: Any,
        server_hostname: str | None = None,
        timeout: float | None = None,
    ) -> httpcore.AsyncNetworkStream:
        self._log["server_hostname"] = server_hostname
        return FakeStream(self._log, self._der_certificate, tls=True)

    def get_extra_info(self, info: str) -> Any:
        if info == "ssl_object" and self._tls:
            return FakeSSLObject(self._der_certificate)
        return None


class FakeBackend(httpcore.AsyncNetworkBackend):
    """Network backend serving one canned HTTP response over fake TLS."""

    def __init__(self, der_certificate: bytes) -> None:
        self.der_certificate = der_certificate
        self.log: dict[str, Any] = {"written": b"", "reads": 0, "closed": 0, "connects": 0}

    async def connect_tcp(
        self,
        host: str,
        port: int,
        timeout: float | None = None,
        local_address: str | None = None,
        socket_options: Any = None,
    ) -> httpcore.AsyncNetworkStream:
        self.log["connects"] += 1
        return FakeStream(self.log, self.der_certificate)

    async def sleep(self, seconds: float) -> None:
        pass


def fingerprint_of(der_certificate: bytes) -> str:
    certificate = x509.load_der_x509_certificate(der_certificate)
    spki = certificate.public_key().public_bytes(
        serialization.Encoding.DER, serialization.PublicFormat.SubjectPublicKeyInfo
    )
    return base64.b64encode(hashlib.sha256(spki).digest()).decode()


class TestFingerprint:
    """Tests for public key fingerprints."""

    def test_matches_spki_digest(self, der_certificate: bytes) -> None:
        """Test the fingerprint is the base64 SHA-256 of the SPKI."""
        assert public_key_fingerprint(der_certificate) == fingerprint_of(der_certificate)

    def test_format(self, der_certificate: bytes) -> None:
        """Test the fingerprint has the length of a base64 SHA-256 digest."""
        fingerprint = public_key_fingerprint(der_certificate)
        assert len(fingerprint) == 44
        assert fingerprint.endswith("=")

    def test_distinct_keys(self, der_certificate: bytes, other_der_certificate: bytes) -> None:
        """Test different keys have different fingerprints."""
        assert public_key_fingerprint(der_certificate) != public_key_fingerprint(
            other_der_certificate
        )

    def test_default_pin_set(self) -> None:
        """Test the built-in pin set."""
        assert "gg3x7U4UrWfTUpYNy9wL2+GYOQhi3fg5UTn5pzA67gc=" in PUBLIC_KEY_PIN_SET


class TestCheckPin:
    """Tests for the pin decision."""

    def test_member(self) -> None:
        """Test a pinned fingerprint is accepted."""
        assert check_pin("abc=", ("xyz=", "abc="))

    def test_non_member(self) -> None:
        """Test an unknown fingerprint is rejected."""
        assert not check_pin("abc=", ("xyz=",))

    def test_empty_pin_set(self) -> None:
        """Test an empty pin set rejects everything."""
        assert not check_pin("abc=", ())

    def test_accepts_any_iterable(self) -> None:
        """Test pins can be given as a list."""
        assert check_pin("abc=", ["abc="])


class TestVerifyPeer:
    """Tests for post-handshake verification."""

    def test_pinned_key_accepted(self, der_certificate: bytes) -> None:
        """Test a pinned key passes."""
        pins = (public_key_fingerprint(der_certificate),)
        verify_peer(FakeSSLObject(der_certificate), pins, "api.eventline.net")

    def test_unpinned_key_rejected(self, der_certificate: bytes, other_der_certificate: bytes) -> None:
        """Test an unpinned key raises certificate_pin_mismatch."""
        pins = (public_key_fingerprint(other_der_certificate),)
        with pytest.raises(RequestError) as exc_info:
            verify_peer(FakeSSLObject(der_certificate), pins, "api.eventline.net")

        error = exc_info.value
        assert error.code == "certificate_pin_mismatch"
        assert error.status is None
        assert error.data["fingerprint"] == public_key_fingerprint(der_certificate)
        assert "api.eventline.net" in error.message

    def test_resumed_session_skipped(self, der_certificate: bytes) -> None:
        """Test a resumed session is not checked again."""
        verify_peer(FakeSSLObject(der_certificate, session_reused=True), (), "api.eventline.net")

    def test_missing_certificate(self) -> None:
        """Test a session without a peer certificate is rejected."""
        with pytest.raises(RequestError) as exc_info:
            verify_peer(FakeSSLObject(None), PUBLIC_KEY_PIN_SET, "api.eventline.net")
        assert exc_info.value.code == "certificate_pin_mismatch"

    def test_missing_session(self) -> None:
        """Test a stream without TLS information is rejected."""
        with pytest.raises(RequestError) as exc_info:
            verify_peer(None, PUBLIC_KEY_PIN_SET, "api.eventline.net")
        assert exc_info.value.code == "certificate_pin_mismatch"


class TestPinnedTransport:
    """Tests for the pinned httpx transport over a fake network."""

    def make_client(self, backend: FakeBackend, pins: tuple[str, ...]) -> Client:
        options = ClientOptions(project_id="p1", token="secret-token", pins=pins)
        transport = PinnedHTTPTransport(create_ssl_context(), pins, network_backend=backend)
        return Client(options, transport=transport)

    @pytest.mark.asyncio
    async def test_pinned_key_request_succeeds(self, der_certificate: bytes) -> None:
        """Test a request over a pinned connection."""
        backend = FakeBackend(der_certificate)
        client = self.make_client(backend, (public_key_fingerprint(der_certificate),))

        result = await client("GET", "/v0/org")

        assert result == {"id": "o1"}
        assert backend.log["server_hostname"] == "api.eventline.net"
        assert backend.log["written"].startswith(b"GET /v0/org HTTP/1.1\r\n")

    @pytest.mark.asyncio
    async def test_mismatch_rejected_before_request_sent(
        self, der_certificate: bytes, other_der_certificate: bytes
    ) -> None:
        """Test an unpinned key aborts the call before any byte is written."""
        backend = FakeBackend(der_certificate)
        client = self.make_client(backend, (public_key_fingerprint(other_der_certificate),))

        with pytest.raises(RequestError) as exc_info:
            await client("POST", "/v0/events", '{"name": "x"}')

        assert exc_info.value.code == "certificate_pin_mismatch"
        assert backend.log["written"] == b""
        assert backend.log["reads"] == 0
        assert backend.log["closed"] >= 1
        assert backend.log["connects"] == 1

    @pytest.mark.asyncio
    async def test_single_connection_pool(self) -> None:
        """Test the transport holds at most one connection."""
        transport = PinnedHTTPTransport(create_ssl_context(), PUBLIC_KEY_PIN_SET)
        assert isinstance(transport, httpx.AsyncHTTPTransport)
        assert isinstance(transport._pool, httpcore.AsyncConnectionPool)
        assert transport._pool._max_connections == 1
        assert transport._pool._max_keepalive_connections == 0
        assert isinstance(transport._pool._network_backend, PinningBackend)
        await transport.aclose()
