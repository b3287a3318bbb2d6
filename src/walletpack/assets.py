#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Collection of pass assets from a directory or from in-memory files."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path, PurePath

from attrs import field, frozen
from provide.foundation import logger

from walletpack.config.defaults import PASS_DESCRIPTOR_NAME, RESERVED_ENTRY_NAMES
from walletpack.exceptions import (
    AssetConflictError,
    DirectoryNotFoundError,
    MissingDescriptorError,
    UnreadableFileError,
)


@frozen
class Asset:
    """A single auxiliary file of a pass, stored under its archive entry name."""

    name: str
    content: bytes = field(repr=lambda value: f"<{len(value)} bytes>")


@frozen
class PassAssets:
    """The raw pass descriptor plus every auxiliary asset, in archive order."""

    descriptor: bytes = field(repr=lambda value: f"<{len(value)} bytes>")
    assets: tuple[Asset, ...] = field(default=(), converter=tuple)

    @property
    def names(self) -> list[str]:
        """Entry names in manifest order, descriptor first."""
        return [PASS_DESCRIPTOR_NAME, *(asset.name for asset in self.assets)]


def asset_name(path: str | PurePath) -> str:
    """Map a source path to the flat archive entry name for it.

    Entry names must be portable: UTF-8 encodable and free of path
    separators, including backslashes that POSIX allows in filenames.

    Raises:
        AssetConflictError: If the path has no usable, portable basename.
    """
    name = PurePath(path).name
    if name in ("", ".", ".."):
        raise AssetConflictError(f"Cannot derive an archive entry name from '{path}'")
    if "/" in name or "\\" in name:
        raise AssetConflictError(f"'{name}' is not a portable archive entry name")
    try:
        name.encode("utf-8")
    except UnicodeEncodeError as e:
        raise AssetConflictError(f"{name!r} is not a portable archive entry name: not valid UTF-8") from e
    return name


def _check_name(name: str, seen: set[str]) -> None:
    if name in RESERVED_ENTRY_NAMES:
        raise AssetConflictError(f"Asset name '{name}' is reserved for a generated archive entry")
    if name in seen:
        raise AssetConflictError(f"Duplicate asset name '{name}'")
    seen.add(name)


def assets_from_files(files: Iterable[tuple[str, bytes]]) -> PassAssets:
    """Build a PassAssets from (filename, content) pairs.

    Filenames are reduced to their basename. Order is preserved.

    Raises:
        MissingDescriptorError: If no pass.json is among the files.
        AssetConflictError: If two files share an entry name or use a reserved name.
    """
    descriptor: bytes | None = None
    assets: list[Asset] = []
    seen: set[str] = set()

    for filename, content in files:
        name = asset_name(filename)
        if name == PASS_DESCRIPTOR_NAME:
            if descriptor is not None:
                raise AssetConflictError(f"Duplicate asset name '{name}'")
            descriptor = bytes(content)
            continue
        _check_name(name, seen)
        assets.append(Asset(name=name, content=bytes(content)))

    if descriptor is None:
        raise MissingDescriptorError(f"No {PASS_DESCRIPTOR_NAME} among the pass files")

    return PassAssets(descriptor=descriptor, assets=assets)


def _read_bytes(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as e:
        logger.error("Failed to read pass asset", path=str(path), error=str(e))
        raise UnreadableFileError(f"Cannot read '{path}': {e}") from e


def collect_assets(directory: str | Path) -> PassAssets:
    """Collect the descriptor and auxiliary assets of a pass directory.

    Only the direct entries of the directory are considered; subdirectories
    are skipped. Entries are taken in name order so the manifest and
    archive are reproducible.

    Args:
        directory: Directory containing pass.json and its assets

    Returns:
        PassAssets holding the descriptor bytes and the auxiliary assets

    Raises:
        DirectoryNotFoundError: If the directory does not exist
        MissingDescriptorError: If pass.json is absent
        UnreadableFileError: If any file cannot be read
    """
    root = Path(directory)
    if not root.is_dir():
        raise DirectoryNotFoundError(f"Pass directory not found: {root}")

    try:
        entries = sorted(root.iterdir(), key=lambda p: p.name)
    except OSError as e:
        raise UnreadableFileError(f"Cannot list '{root}': {e}") from e

    files: list[tuple[str, bytes]] = []
    for entry in entries:
        if entry.is_dir():
            logger.debug("Skipping subdirectory in pass directory", path=str(entry))
            continue
        files.append((asset_name(entry), _read_bytes(entry)))

    if not any(name == PASS_DESCRIPTOR_NAME for name, _ in files):
        raise MissingDescriptorError(f"No {PASS_DESCRIPTOR_NAME} found in {root}")

    pass_assets = assets_from_files(files)
    logger.debug("Collected pass assets", directory=str(root), asset_count=len(pass_assets.assets))
    return pass_assets


# 🎫📦🔚
