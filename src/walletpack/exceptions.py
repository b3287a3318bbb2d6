#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Custom exceptions for WalletPack."""

from __future__ import annotations

from provide.foundation.errors import FoundationError


class WalletPackError(FoundationError):
    """Base exception for all walletpack errors."""

    pass


class CollectionError(WalletPackError):
    """Raised when pass assets cannot be collected."""

    pass


class DirectoryNotFoundError(CollectionError):
    """Raised when the pass directory does not exist or is not a directory."""

    pass


class UnreadableFileError(CollectionError):
    """Raised when an asset or identity bundle cannot be read."""

    pass


class MissingDescriptorError(CollectionError):
    """Raised when no pass.json is present among the assets."""

    pass


class AssetConflictError(CollectionError):
    """Raised when an asset has no portable entry name or two assets share one."""

    pass


class SigningError(WalletPackError):
    """Raised for errors while signing the manifest."""

    pass


class BadCredentialsError(SigningError):
    """Raised when the identity bundle cannot be opened with the passphrase."""

    pass


class SignatureEncodingError(SigningError):
    """Raised when the produced signature is not a usable PKCS#7 blob."""

    pass


class ArchiveWriteError(WalletPackError):
    """Raised when the pass archive cannot be written."""

    pass


# 🎫📦🔚
