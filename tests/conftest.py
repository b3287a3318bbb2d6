#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Shared pytest fixtures and helpers for WalletPack tests."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from datetime import UTC, datetime, timedelta
import hashlib
from pathlib import Path
from typing import NamedTuple

from asn1crypto import cms
from cryptography import x509
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa
from cryptography.hazmat.primitives.serialization import pkcs12
from cryptography.x509.oid import NameOID
import provide.testkit  # noqa: F401 - Installs setproctitle blocker early
from provide.testkit.logger import reset_foundation_setup_for_testing
import pytest

BUNDLE_PASSWORD = "s3cret-passphrase"

PASS_JSON = b'{"formatVersion":1,"passTypeIdentifier":"pass.io.provide.test","generic":{}}'
ICON_PNG = b"\x89PNG\r\n\x1a\n" + b"icon" * 32
LOGO_PNG = b"\x89PNG\r\n\x1a\n" + b"logo" * 48


class SigningPKI(NamedTuple):
    """Throwaway CA (standing in for the trust chain) and a pass signer."""

    ca_certificate: x509.Certificate
    certificate: x509.Certificate
    private_key: rsa.RSAPrivateKey
    bundle: bytes
    password: str


def _name(common_name: str) -> x509.Name:
    return x509.Name(
        [
            x509.NameAttribute(NameOID.COMMON_NAME, common_name),
            x509.NameAttribute(NameOID.ORGANIZATION_NAME, "WalletPack Tests"),
        ]
    )


def _certificate(
    subject: x509.Name,
    issuer: x509.Name,
    public_key: rsa.RSAPublicKey,
    signing_key: rsa.RSAPrivateKey,
    ca: bool,
) -> x509.Certificate:
    now = datetime.now(UTC)
    return (
        x509.CertificateBuilder()
        .subject_name(subject)
        .issuer_name(issuer)
        .public_key(public_key)
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - timedelta(days=1))
        .not_valid_after(now + timedelta(days=365))
        .add_extension(x509.BasicConstraints(ca=ca, path_length=None), critical=True)
        .sign(signing_key, hashes.SHA256())
    )


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: fast tests without filesystem-heavy setup")
    config.addinivalue_line("markers", "integration: end-to-end packaging through the public API or CLI")


@pytest.fixture(autouse=True)
def reset_foundation_logging() -> Iterator[None]:
    """Reset foundation logging state before each test to avoid conflicts."""
    reset_foundation_setup_for_testing()
    yield
    reset_foundation_setup_for_testing()


@pytest.fixture(scope="session")
def pki() -> SigningPKI:
    """Session-wide CA, signer certificate and password-protected PKCS#12 bundle."""
    ca_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    ca_name = _name("WalletPack Test Intermediate CA")
    ca_certificate = _certificate(ca_name, ca_name, ca_key.public_key(), ca_key, ca=True)

    signer_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    certificate = _certificate(
        _name("Pass Type ID: pass.io.provide.test"),
        ca_name,
        signer_key.public_key(),
        ca_key,
        ca=False,
    )

    bundle = pkcs12.serialize_key_and_certificates(
        b"pass-signer",
        signer_key,
        certificate,
        None,
        serialization.BestAvailableEncryption(BUNDLE_PASSWORD.encode()),
    )
    return SigningPKI(ca_certificate, certificate, signer_key, bundle, BUNDLE_PASSWORD)


@pytest.fixture
def bundle_path(tmp_path: Path, pki: SigningPKI) -> Path:
    """The PKCS#12 bundle written to disk."""
    path = tmp_path / "identity.p12"
    path.write_bytes(pki.bundle)
    return path


@pytest.fixture
def pass_dir(tmp_path: Path) -> Path:
    """A pass directory with a descriptor and two images."""
    directory = tmp_path / "boarding"
    directory.mkdir()
    (directory / "pass.json").write_bytes(PASS_JSON)
    (directory / "icon.png").write_bytes(ICON_PNG)
    (directory / "logo.png").write_bytes(LOGO_PNG)
    return directory


def verify_detached_signature(
    signature: bytes,
    content: bytes,
    trust_chain: x509.Certificate | None = None,
) -> bool:
    """Independently verify a detached CMS signature over content.

    Checks that the content is not embedded, the messageDigest attribute
    matches, the signed attributes are signed by the embedded signer
    certificate and, when given, that the signer was issued by trust_chain.
    """
    info = cms.ContentInfo.load(signature)
    if info["content_type"].native != "signed_data":
        return False
    signed_data = info["content"]
    if signed_data["encap_content_info"]["content"].native is not None:
        return False

    signer_info = signed_data["signer_infos"][0]
    serial = signer_info["sid"].chosen["serial_number"].native
    signer_der = next(
        choice.chosen.dump()
        for choice in signed_data["certificates"]
        if choice.chosen.serial_number == serial
    )
    signer_certificate = x509.load_der_x509_certificate(signer_der)

    signed_attrs = signer_info["signed_attrs"]
    message_digest = next(
        attr["values"][0].native for attr in signed_attrs if attr["type"].native == "message_digest"
    )
    digest_name = signer_info["digest_algorithm"]["algorithm"].native
    if hashlib.new(digest_name, content).digest() != message_digest:
        return False

    # Signed attributes are signed as a SET, stored with an implicit [0] tag
    attrs_der = b"\x31" + signed_attrs.dump()[1:]
    hash_algorithm = {"sha256": hashes.SHA256(), "sha384": hashes.SHA384(), "sha512": hashes.SHA512()}[
        digest_name
    ]
    try:
        signer_certificate.public_key().verify(  # type: ignore[call-arg, union-attr]
            signer_info["signature"].native, attrs_der, padding.PKCS1v15(), hash_algorithm
        )
        if trust_chain is not None:
            signer_certificate.verify_directly_issued_by(trust_chain)
    except (InvalidSignature, ValueError, TypeError):
        return False
    return True


@pytest.fixture
def verify_signature() -> Callable[..., bool]:
    """Fixture exposing the independent CMS verifier."""
    return verify_detached_signature


# 🎫📦🔚
