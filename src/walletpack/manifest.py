#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Manifest of asset digests covered by the pass signature."""

from __future__ import annotations

import hashlib
import json

from attrs import field, frozen
from provide.foundation import logger
from provide.foundation.serialization import json_loads

from walletpack.assets import PassAssets
from walletpack.config.defaults import (
    MANIFEST_DIGEST_ALGORITHM,
    MANIFEST_ENCODING,
    PASS_DESCRIPTOR_NAME,
)
from walletpack.exceptions import AssetConflictError


def compute_digest(data: bytes) -> str:
    """Return the lowercase hex manifest digest of data."""
    return hashlib.new(MANIFEST_DIGEST_ALGORITHM, data).hexdigest()


@frozen
class Manifest:
    """Mapping of archive entry name to content digest."""

    entries: dict[str, str] = field(factory=dict)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, name: object) -> bool:
        return name in self.entries

    def __getitem__(self, name: str) -> str:
        return self.entries[name]

    def to_bytes(self) -> bytes:
        """Serialize to compact JSON in insertion order.

        These are the exact bytes that get signed and stored as manifest.json.
        """
        return json.dumps(self.entries, separators=(",", ":"), ensure_ascii=False).encode(MANIFEST_ENCODING)

    @classmethod
    def from_bytes(cls, data: bytes) -> Manifest:
        """Parse a serialized manifest.

        Raises:
            ValidationError: If the data is not JSON.
            ValueError: If the data is not UTF-8 or not a JSON object.
        """
        entries = json_loads(data.decode(MANIFEST_ENCODING))
        if not isinstance(entries, dict):
            raise ValueError("Manifest must be a JSON object")
        return cls(entries={str(k): str(v) for k, v in entries.items()})


def build_manifest(pass_assets: PassAssets) -> Manifest:
    """Digest the descriptor and every auxiliary asset.

    The descriptor is always the first entry, followed by the assets in
    collection order.
    """
    entries = {PASS_DESCRIPTOR_NAME: compute_digest(pass_assets.descriptor)}
    for asset in pass_assets.assets:
        if asset.name in entries:
            raise AssetConflictError(f"Duplicate asset name '{asset.name}'")
        entries[asset.name] = compute_digest(asset.content)

    logger.debug("Built manifest", entry_count=len(entries))
    return Manifest(entries=entries)


# 🎫📦🔚
