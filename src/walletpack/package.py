#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Public API for building signed wallet passes."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from cryptography import x509
from provide.foundation import logger
from provide.foundation.file import atomic_write
from provide.foundation.file.directory import ensure_parent_dir

from walletpack.archive import pass_entries, write_archive
from walletpack.assets import PassAssets, assets_from_files, collect_assets
from walletpack.config.defaults import DEFAULT_SIGNATURE_ENCODING
from walletpack.exceptions import ArchiveWriteError
from walletpack.manifest import build_manifest
from walletpack.signing.identity import load_identity, read_bundle
from walletpack.signing.signer import sign_manifest
from walletpack.signing.trust_chain import check_certificate_expiry, load_trust_chain_certificate


class PassPackager:
    """Turns collected pass assets into a signed .pkpass archive.

    The identity bundle is opened fresh for every call, so one packager can
    be shared between threads and nothing about the signer is kept in
    process-wide state.
    """

    def __init__(
        self,
        identity_bundle: bytes | str | Path,
        password: str | bytes | None,
        trust_chain: x509.Certificate | None = None,
        signature_encoding: str = DEFAULT_SIGNATURE_ENCODING,
    ) -> None:
        self.identity_bundle = read_bundle(identity_bundle)
        self.password = password
        self.trust_chain = trust_chain or load_trust_chain_certificate()
        self.signature_encoding = signature_encoding

    def package(self, pass_assets: PassAssets) -> bytes:
        """Build the manifest, sign it and assemble the archive."""
        manifest = build_manifest(pass_assets)
        manifest_bytes = manifest.to_bytes()

        identity = load_identity(self.identity_bundle, self.password)
        check_certificate_expiry(self.trust_chain)
        signature = sign_manifest(
            manifest_bytes,
            identity,
            self.trust_chain,
            encoding=self.signature_encoding,
        )

        data = write_archive(pass_entries(pass_assets, manifest_bytes, signature))
        logger.info(
            "Packaged pass",
            entries=len(manifest) + 2,
            size=len(data),
            signer=identity.subject,
        )
        return data

    def package_directory(self, directory: str | Path) -> bytes:
        """Collect a pass directory and package it."""
        return self.package(collect_assets(directory))

    def package_files(self, files: Iterable[tuple[str, bytes]]) -> bytes:
        """Package in-memory (filename, content) pairs."""
        return self.package(assets_from_files(files))


def build_pass(
    directory: str | Path,
    identity_bundle: bytes | str | Path,
    password: str | bytes | None,
    trust_chain: x509.Certificate | None = None,
    signature_encoding: str = DEFAULT_SIGNATURE_ENCODING,
) -> bytes:
    """Build a signed .pkpass archive from a pass directory.

    Args:
        directory: Directory holding pass.json and its images
        identity_bundle: PKCS#12 bundle bytes or path of the pass type certificate
        password: Passphrase of the bundle
        trust_chain: Intermediate certificate, the embedded WWDR G4 by default
        signature_encoding: "der" (default) or "smime"

    Returns:
        The complete archive bytes

    Raises:
        DirectoryNotFoundError: If the directory does not exist
        MissingDescriptorError: If pass.json is missing
        UnreadableFileError: If an asset or the bundle cannot be read
        AssetConflictError: If two assets share an entry name
        BadCredentialsError: If the bundle cannot be opened
        SignatureEncodingError: If the signature is unusable
        ArchiveWriteError: If the archive cannot be assembled

    Example:
        ```python
        from pathlib import Path
        from walletpack import build_pass

        data = build_pass(Path("passes/boarding"), Path("certs/pass.p12"), "secret")
        Path("boarding.pkpass").write_bytes(data)
        ```
    """
    packager = PassPackager(identity_bundle, password, trust_chain, signature_encoding)
    return packager.package_directory(directory)


def build_pass_from_files(
    files: Iterable[tuple[str, bytes]],
    identity_bundle: bytes | str | Path,
    password: str | bytes | None,
    trust_chain: x509.Certificate | None = None,
    signature_encoding: str = DEFAULT_SIGNATURE_ENCODING,
) -> bytes:
    """Build a signed .pkpass archive from in-memory (filename, content) pairs."""
    packager = PassPackager(identity_bundle, password, trust_chain, signature_encoding)
    return packager.package_files(files)


def write_pass(
    directory: str | Path,
    output_path: str | Path,
    identity_bundle: bytes | str | Path,
    password: str | bytes | None,
    trust_chain: x509.Certificate | None = None,
    signature_encoding: str = DEFAULT_SIGNATURE_ENCODING,
) -> Path:
    """Build a pass and write it to output_path.

    The archive is built completely in memory and written atomically, so
    output_path is never left holding a partial archive.
    """
    data = build_pass(directory, identity_bundle, password, trust_chain, signature_encoding)

    output = Path(output_path)
    try:
        ensure_parent_dir(output)
        atomic_write(output, data)
    except OSError as e:
        logger.error("Failed to write pass", output=str(output), error=str(e))
        raise ArchiveWriteError(f"Could not write '{output}': {e}") from e

    logger.info("Wrote pass", output=str(output), size=len(data))
    return output


# 🎫📦🔚
