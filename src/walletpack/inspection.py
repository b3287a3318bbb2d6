#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Read-only summary of a built .pkpass archive."""

from __future__ import annotations

from typing import Any
import zipfile

from provide.foundation.errors import ValidationError
from provide.foundation.serialization import json_loads

from walletpack.archive import read_archive
from walletpack.config.defaults import (
    MANIFEST_NAME,
    PASS_DESCRIPTOR_NAME,
    PASS_STYLES,
    SIGNATURE_NAME,
)
from walletpack.exceptions import WalletPackError
from walletpack.manifest import Manifest, compute_digest


def detect_pass_style(descriptor: bytes) -> str | None:
    """Return the pass style key present at the top level of pass.json, if any."""
    try:
        document = json_loads(descriptor.decode("utf-8"))
    except (ValidationError, UnicodeDecodeError):
        return None
    if not isinstance(document, dict):
        return None
    return next((style for style in PASS_STYLES if style in document), None)


def inspect_pass(data: bytes) -> dict[str, Any]:
    """Summarize a pass archive.

    Checks that manifest digests match the archived entries. The signature
    itself is not verified.

    Returns:
        Dictionary with keys:
            - 'entries' (list): entry names in archive order
            - 'manifest' (dict): parsed manifest.json, empty if absent
            - 'mismatched' (list): manifest entries whose digest does not match
            - 'unlisted' (list): archive entries missing from the manifest
            - 'digests_valid' (bool): no mismatched or unlisted entries
            - 'signature_size' (int): size of the signature entry, 0 if absent
            - 'style' (str | None): detected pass style
    """
    try:
        entries = read_archive(data)
    except zipfile.BadZipFile as e:
        raise WalletPackError(f"Not a pass archive: {e}") from e

    try:
        manifest = Manifest.from_bytes(entries[MANIFEST_NAME]) if MANIFEST_NAME in entries else Manifest()
    except (ValidationError, ValueError) as e:
        raise WalletPackError(f"Unreadable {MANIFEST_NAME}: {e}") from e
    mismatched = [
        name
        for name, digest in manifest.entries.items()
        if name not in entries or compute_digest(entries[name]) != digest
    ]
    unlisted = [name for name in entries if name not in (MANIFEST_NAME, SIGNATURE_NAME) and name not in manifest]

    return {
        "entries": list(entries),
        "manifest": dict(manifest.entries),
        "mismatched": mismatched,
        "unlisted": unlisted,
        "digests_valid": bool(manifest.entries) and not mismatched and not unlisted,
        "signature_size": len(entries.get(SIGNATURE_NAME, b"")),
        "style": detect_pass_style(entries.get(PASS_DESCRIPTOR_NAME, b"")),
    }


# 🎫📦🔚
