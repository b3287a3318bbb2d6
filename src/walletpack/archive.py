#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""ZIP assembly of the signed pass archive."""

from __future__ import annotations

from collections.abc import Iterable
import io
import stat
import zipfile

from attrs import field, frozen
from provide.foundation import logger

from walletpack.assets import PassAssets
from walletpack.config.defaults import (
    ARCHIVE_ENTRY_PERMS,
    ARCHIVE_ENTRY_TIMESTAMP,
    MANIFEST_NAME,
    PASS_DESCRIPTOR_NAME,
    SIGNATURE_NAME,
)
from walletpack.exceptions import ArchiveWriteError, AssetConflictError


@frozen
class ArchiveEntry:
    """A named entry of the pass archive."""

    name: str
    data: bytes = field(repr=lambda value: f"<{len(value)} bytes>")


def pass_entries(pass_assets: PassAssets, manifest: bytes, signature: bytes) -> list[ArchiveEntry]:
    """Lay out the archive: descriptor, manifest, signature, then the assets."""
    entries = [
        ArchiveEntry(PASS_DESCRIPTOR_NAME, pass_assets.descriptor),
        ArchiveEntry(MANIFEST_NAME, manifest),
        ArchiveEntry(SIGNATURE_NAME, signature),
    ]
    entries.extend(ArchiveEntry(asset.name, asset.content) for asset in pass_assets.assets)
    return entries


def _zip_info(name: str) -> zipfile.ZipInfo:
    info = zipfile.ZipInfo(name, date_time=ARCHIVE_ENTRY_TIMESTAMP)
    info.compress_type = zipfile.ZIP_DEFLATED
    info.external_attr = (stat.S_IFREG | ARCHIVE_ENTRY_PERMS) << 16
    return info


def write_archive(entries: Iterable[ArchiveEntry]) -> bytes:
    """Write entries, in order, into an in-memory ZIP archive.

    Nothing is returned unless every entry was written.

    Raises:
        AssetConflictError: If two entries share a name.
        ArchiveWriteError: If the archive cannot be written.
    """
    entries = list(entries)
    names = [entry.name for entry in entries]
    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
        raise AssetConflictError(f"Duplicate archive entries: {', '.join(duplicates)}")

    buffer = io.BytesIO()
    try:
        with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            for entry in entries:
                archive.writestr(_zip_info(entry.name), entry.data)
    except (OSError, zipfile.LargeZipFile, ValueError) as e:
        logger.error("Failed to write pass archive", error=str(e))
        raise ArchiveWriteError(f"Could not write pass archive: {e}") from e

    data = buffer.getvalue()
    logger.debug("Wrote pass archive", entry_count=len(entries), size=len(data))
    return data


def read_archive(data: bytes) -> dict[str, bytes]:
    """Read every entry of a pass archive, keyed by name in archive order."""
    with zipfile.ZipFile(io.BytesIO(data)) as archive:
        return {name: archive.read(name) for name in archive.namelist()}


# 🎫📦🔚
