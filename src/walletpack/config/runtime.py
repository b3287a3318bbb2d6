#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""WalletPack runtime configuration for CLI startup."""

from __future__ import annotations

from attrs import define
from provide.foundation.config.base import field
from provide.foundation.config.env import RuntimeConfig

from walletpack.config.defaults import DEFAULT_SIGNATURE_ENCODING, SIGNATURE_ENCODINGS

VALID_LOG_LEVELS = {"TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def parse_log_level(value: str) -> str:
    """Validate and normalize log levels."""
    normalized = value.strip().upper()
    if normalized not in VALID_LOG_LEVELS:
        raise ValueError(f"Invalid log level: {value}")
    return normalized


def parse_signature_encoding(value: str) -> str:
    """Validate and normalize the signature encoding name."""
    normalized = value.strip().lower()
    if normalized not in SIGNATURE_ENCODINGS:
        raise ValueError(f"Invalid signature encoding: {value}")
    return normalized


@define
class WalletPackRuntimeConfig(RuntimeConfig):
    """WalletPack runtime configuration for CLI startup.

    The library API never reads this; identity and passphrase are always
    passed explicitly to the packager.
    """

    log_level: str = field(
        default="WARNING",
        env_var="WALLETPACK_LOG_LEVEL",
        converter=parse_log_level,
        metadata={
            "help": "Log level for WalletPack operations (TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL)"
        },
    )

    certificate: str | None = field(
        default=None,
        env_var="WALLETPACK_CERTIFICATE",
        metadata={"help": "Path to the PKCS#12 identity bundle used for signing"},
    )

    password: str | None = field(
        default=None,
        env_var="WALLETPACK_PASSWORD",
        metadata={"help": "Passphrase of the PKCS#12 identity bundle"},
    )

    signature_encoding: str = field(
        default=DEFAULT_SIGNATURE_ENCODING,
        env_var="WALLETPACK_SIGNATURE_ENCODING",
        converter=parse_signature_encoding,
        metadata={"help": "How the signature is obtained from the signer (der, smime)"},
    )


# 🎫📦🔚
