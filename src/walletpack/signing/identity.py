#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Loading of the pass issuer identity from a PKCS#12 bundle."""

from __future__ import annotations

from pathlib import Path

from attrs import frozen
from cryptography import x509
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from cryptography.hazmat.primitives.serialization import pkcs12
from provide.foundation import logger

from walletpack.exceptions import BadCredentialsError, UnreadableFileError

SigningKey = rsa.RSAPrivateKey | ec.EllipticCurvePrivateKey


@frozen
class Identity:
    """Signer certificate and its private key."""

    certificate: x509.Certificate
    private_key: SigningKey

    @property
    def subject(self) -> str:
        return self.certificate.subject.rfc4514_string()


def _password_bytes(password: str | bytes | None) -> bytes | None:
    if password is None or password in ("", b""):
        return None
    if isinstance(password, str):
        return password.encode("utf-8")
    return password


def read_bundle(bundle: bytes | str | Path) -> bytes:
    """Return the raw bytes of an identity bundle given as bytes or a path."""
    if isinstance(bundle, bytes | bytearray):
        return bytes(bundle)
    path = Path(bundle)
    try:
        return path.read_bytes()
    except OSError as e:
        raise UnreadableFileError(f"Cannot read identity bundle '{path}': {e}") from e


def load_identity(bundle: bytes | str | Path, password: str | bytes | None) -> Identity:
    """Open a PKCS#12 identity bundle.

    The bundle is parsed on every call; nothing is cached.

    Args:
        bundle: PKCS#12 bytes, or the path of a .p12 file
        password: Passphrase protecting the bundle

    Returns:
        The signer Identity

    Raises:
        BadCredentialsError: If the passphrase is wrong, the bundle is malformed,
            or it lacks a certificate or a usable private key
        UnreadableFileError: If a bundle path cannot be read
    """
    data = read_bundle(bundle)

    try:
        private_key, certificate, _additional = pkcs12.load_key_and_certificates(
            data, _password_bytes(password)
        )
    except (ValueError, TypeError) as e:
        logger.error("Failed to open identity bundle", error=str(e))
        raise BadCredentialsError(
            "Could not open the identity bundle: wrong passphrase or malformed PKCS#12 data"
        ) from e

    if certificate is None or private_key is None:
        raise BadCredentialsError("Identity bundle must contain both a certificate and a private key")

    if not isinstance(private_key, rsa.RSAPrivateKey | ec.EllipticCurvePrivateKey):
        key_type = type(private_key).__name__
        raise BadCredentialsError(f"Incompatible key type {key_type}: PKCS#7 signing needs an RSA or EC key")

    identity = Identity(certificate=certificate, private_key=private_key)
    logger.debug("Loaded signing identity", subject=identity.subject)
    return identity


# 🎫📦🔚
