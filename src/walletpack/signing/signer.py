#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Detached PKCS#7 signing of the pass manifest."""

from __future__ import annotations

from email import policy
from email.parser import BytesParser

from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.serialization import pkcs7
from provide.foundation import logger

from walletpack.config.defaults import (
    DEFAULT_SIGNATURE_ENCODING,
    SIGNATURE_ENCODING_DER,
    SIGNATURE_ENCODING_SMIME,
)
from walletpack.exceptions import SignatureEncodingError
from walletpack.signing.identity import Identity

SIGNATURE_CONTENT_TYPES = frozenset({"application/pkcs7-signature", "application/x-pkcs7-signature"})

# Binary: sign the manifest bytes as-is, no CRLF canonicalization
SIGNATURE_OPTIONS = (pkcs7.PKCS7Options.DetachedSignature, pkcs7.PKCS7Options.Binary)


def _builder(
    manifest: bytes,
    identity: Identity,
    trust_chain: x509.Certificate,
    hash_algorithm: hashes.HashAlgorithm,
) -> pkcs7.PKCS7SignatureBuilder:
    return (
        pkcs7.PKCS7SignatureBuilder()
        .set_data(manifest)
        .add_signer(identity.certificate, identity.private_key, hash_algorithm)
        .add_certificate(trust_chain)
    )


def signature_from_smime(envelope: bytes) -> bytes:
    """Extract the DER signature from an S/MIME multipart/signed envelope.

    The envelope is parsed as MIME; the signature part is located by its
    content type and decoded from its transfer encoding.

    Raises:
        SignatureEncodingError: If the envelope has no signature part.
    """
    message = BytesParser(policy=policy.default).parsebytes(envelope)
    if message.get_content_type() != "multipart/signed":
        raise SignatureEncodingError(
            f"Expected a multipart/signed envelope, got {message.get_content_type()}"
        )

    for part in message.iter_parts():
        if part.get_content_type() in SIGNATURE_CONTENT_TYPES:
            payload = part.get_payload(decode=True)
            if not payload:
                raise SignatureEncodingError("Signature part of the S/MIME envelope is empty")
            return bytes(payload)

    raise SignatureEncodingError("No PKCS#7 signature part in the S/MIME envelope")


def validate_signature(signature: bytes, identity: Identity, trust_chain: x509.Certificate) -> None:
    """Check that a signature is DER PKCS#7 carrying both certificates.

    Raises:
        SignatureEncodingError: If the blob does not parse or lacks a certificate.
    """
    try:
        certificates = pkcs7.load_der_pkcs7_certificates(signature)
    except ValueError as e:
        raise SignatureEncodingError(f"Signature is not a DER PKCS#7 structure: {e}") from e

    if identity.certificate not in certificates:
        raise SignatureEncodingError("Signature does not embed the signer certificate")
    if trust_chain not in certificates:
        raise SignatureEncodingError("Signature does not embed the trust-chain certificate")


def sign_manifest(
    manifest: bytes,
    identity: Identity,
    trust_chain: x509.Certificate,
    *,
    encoding: str = DEFAULT_SIGNATURE_ENCODING,
    hash_algorithm: hashes.HashAlgorithm | None = None,
) -> bytes:
    """Produce a detached binary PKCS#7 signature over the manifest bytes.

    Args:
        manifest: Exact serialized manifest bytes stored in the archive
        identity: Signer certificate and key
        trust_chain: Intermediate certificate embedded next to the signer's
        encoding: "der" to take DER straight from the builder, "smime" to
            sign into an S/MIME envelope and extract the signature part
        hash_algorithm: Signer digest, SHA-256 unless given

    Returns:
        Raw DER signature bytes, without the manifest content

    Raises:
        SignatureEncodingError: If the signature cannot be produced or
            fails structural validation
    """
    try:
        builder = _builder(manifest, identity, trust_chain, hash_algorithm or hashes.SHA256())
        if encoding == SIGNATURE_ENCODING_DER:
            signature = builder.sign(serialization.Encoding.DER, list(SIGNATURE_OPTIONS))
        elif encoding == SIGNATURE_ENCODING_SMIME:
            envelope = builder.sign(serialization.Encoding.SMIME, list(SIGNATURE_OPTIONS))
            signature = signature_from_smime(envelope)
        else:
            raise SignatureEncodingError(f"Unknown signature encoding: {encoding}")
    except (ValueError, TypeError) as e:
        logger.error("Signing failed", error=str(e), encoding=encoding)
        raise SignatureEncodingError(f"Could not sign manifest: {e}") from e

    validate_signature(signature, identity, trust_chain)
    logger.debug("Signed manifest", encoding=encoding, signature_size=len(signature))
    return signature


# 🎫📦🔚
