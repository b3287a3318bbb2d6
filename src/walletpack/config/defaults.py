#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Centralized default values for WalletPack configuration."""

from __future__ import annotations

# =================================
# Archive entry names
# =================================
PASS_DESCRIPTOR_NAME = "pass.json"
MANIFEST_NAME = "manifest.json"
SIGNATURE_NAME = "signature"

# Generated entries; an input asset may not use these names
RESERVED_ENTRY_NAMES = frozenset({MANIFEST_NAME, SIGNATURE_NAME})

PKPASS_SUFFIX = ".pkpass"

# =================================
# Pass styles (top-level keys of pass.json)
# =================================
PASS_STYLES = ("boarding-pass", "coupon", "event-ticket", "store-card", "generic")

# =================================
# Manifest defaults
# =================================
MANIFEST_DIGEST_ALGORITHM = "sha1"
MANIFEST_ENCODING = "utf-8"

# =================================
# Signature defaults
# =================================
SIGNATURE_ENCODING_DER = "der"  # Raw DER from the signing primitive
SIGNATURE_ENCODING_SMIME = "smime"  # S/MIME envelope, signature part extracted
SIGNATURE_ENCODINGS = (SIGNATURE_ENCODING_DER, SIGNATURE_ENCODING_SMIME)
DEFAULT_SIGNATURE_ENCODING = SIGNATURE_ENCODING_DER

# Warn this many days before the trust-chain certificate expires
DEFAULT_EXPIRY_WARNING_DAYS = 180

# =================================
# Archive defaults
# =================================
# Fixed entry timestamp (earliest date ZIP can represent)
ARCHIVE_ENTRY_TIMESTAMP = (1980, 1, 1, 0, 0, 0)
ARCHIVE_ENTRY_PERMS = 0o644

# 🎫📦🔚
