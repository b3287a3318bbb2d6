#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""WalletPack core package exports."""

from __future__ import annotations

from provide.foundation.utils import get_version

from walletpack.assets import Asset, PassAssets, assets_from_files, collect_assets
from walletpack.exceptions import (
    ArchiveWriteError,
    AssetConflictError,
    BadCredentialsError,
    DirectoryNotFoundError,
    MissingDescriptorError,
    SignatureEncodingError,
    UnreadableFileError,
    WalletPackError,
)
from walletpack.inspection import inspect_pass
from walletpack.manifest import Manifest, build_manifest
from walletpack.package import PassPackager, build_pass, build_pass_from_files, write_pass

__version__ = get_version("walletpack", caller_file=__file__)

__all__ = [
    "ArchiveWriteError",
    "Asset",
    "AssetConflictError",
    "BadCredentialsError",
    "DirectoryNotFoundError",
    "Manifest",
    "MissingDescriptorError",
    "PassAssets",
    "PassPackager",
    "SignatureEncodingError",
    "UnreadableFileError",
    "WalletPackError",
    "__version__",
    "assets_from_files",
    "build_manifest",
    "build_pass",
    "build_pass_from_files",
    "collect_assets",
    "inspect_pass",
    "write_pass",
]

# 🎫📦🔚
