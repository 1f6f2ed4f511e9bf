"""Root pytest fixtures for eventline tests."""

from __future__ import annotations

import datetime
import os
from collections.abc import Callable
from typing import Any
from unittest.mock import patch

import httpx
import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import NameOID

from eventline.transport import Client, ClientOptions

Handler = Callable[[httpx.Request], Any]


@pytest.fixture(autouse=True)
def no_token_env() -> Any:
    """Keep a developer's EVCLI_API_KEY out of the tests."""
    with patch.dict(os.environ):
        os.environ.pop("EVCLI_API_KEY", None)
        yield


@pytest.fixture
def make_client() -> Callable[..., Client]:
    """Build a client whose requests are answered by a handler function."""

    def _make(handler: Handler, **fields: Any) -> Client:
        fields.setdefault("project_id", "p1")
        fields.setdefault("token", "tok")
        return Client(ClientOptions(**fields), transport=httpx.MockTransport(handler))

    return _make


def generate_certificate(common_name: str = "api.eventline.net") -> bytes:
    """Generate a self-signed certificate in DER form."""
    key = ec.generate_private_key(ec.SECP256R1())
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])
    now = datetime.datetime.now(datetime.timezone.utc)
    certificate = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - datetime.timedelta(days=1))
        .not_valid_after(now + datetime.timedelta(days=1))
        .sign(key, hashes.SHA256())
    )
    return certificate.public_bytes(serialization.Encoding.DER)


@pytest.fixture(scope="session")
def der_certificate() -> bytes:
    """A self-signed DER certificate."""
    return generate_certificate()


@pytest.fixture(scope="session")
def other_der_certificate() -> bytes:
    """A second certificate with a different key."""
    return generate_certificate()
