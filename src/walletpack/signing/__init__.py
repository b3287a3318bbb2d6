#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Identity loading, trust chain and detached PKCS#7 signing of pass manifests."""

from walletpack.signing.identity import Identity, load_identity
from walletpack.signing.signer import sign_manifest, signature_from_smime, validate_signature
from walletpack.signing.trust_chain import (
    WWDR_CERTIFICATE_VERSION,
    check_certificate_expiry,
    load_trust_chain_certificate,
)

__all__ = [
    "WWDR_CERTIFICATE_VERSION",
    "Identity",
    "check_certificate_expiry",
    "load_identity",
    "load_trust_chain_certificate",
    "sign_manifest",
    "signature_from_smime",
    "validate_signature",
]

# 🎫📦🔚
