#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Pack command for the walletpack CLI."""

from __future__ import annotations

from pathlib import Path

import click
from provide.foundation import logger
from provide.foundation.console import perr, pout
from provide.foundation.formatting import format_size

from walletpack.config import WalletPackRuntimeConfig
from walletpack.config.defaults import PKPASS_SUFFIX, SIGNATURE_ENCODINGS
from walletpack.exceptions import WalletPackError
from walletpack.package import write_pass


def _runtime_config(ctx: click.Context) -> WalletPackRuntimeConfig:
    config = (ctx.obj or {}).get("config")
    return config if config is not None else WalletPackRuntimeConfig.from_env()


@click.command("pack")
@click.argument(
    "pass_dir",
    type=click.Path(exists=True, file_okay=False, resolve_path=True),
    required=True,
)
@click.option(
    "--certificate",
    "-c",
    type=click.Path(dir_okay=False, resolve_path=True),
    help="PKCS#12 identity bundle (default: $WALLETPACK_CERTIFICATE).",
)
@click.option(
    "--password",
    "-p",
    help="Passphrase of the identity bundle (default: $WALLETPACK_PASSWORD).",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, resolve_path=True),
    help="Output .pkpass path (default: <pass_dir>.pkpass).",
)
@click.option(
    "--signature-encoding",
    type=click.Choice(SIGNATURE_ENCODINGS),
    default=None,
    help="How the signature is obtained from the signer.",
)
@click.option(
    "--force",
    "-f",
    is_flag=True,
    help="Overwrite an existing output file",
)
@click.pass_context
def pack_command(
    ctx: click.Context,
    pass_dir: str,
    certificate: str | None,
    password: str | None,
    output: str | None,
    signature_encoding: str | None,
    force: bool,
) -> None:
    """Build a signed .pkpass archive from PASS_DIR."""
    config = _runtime_config(ctx)
    certificate = certificate or config.certificate
    password = password if password is not None else config.password
    signature_encoding = signature_encoding or config.signature_encoding

    source = Path(pass_dir)
    output_path = Path(output) if output else source.with_name(source.name + PKPASS_SUFFIX)
    logger.debug(
        "Packing pass",
        pass_dir=str(source),
        output=str(output_path),
        signature_encoding=signature_encoding,
    )

    if not certificate:
        perr("❌ No identity bundle given. Use --certificate or set WALLETPACK_CERTIFICATE")
        raise click.Abort()

    if output_path.exists() and not force:
        logger.error("Output file already exists", output=str(output_path))
        perr(f"❌ Output file already exists: {output_path}")
        perr("Use --force to overwrite")
        raise click.Abort()

    try:
        written = write_pass(
            source,
            output_path,
            Path(certificate),
            password,
            signature_encoding=signature_encoding,
        )
    except WalletPackError as e:
        logger.error("Pack failed", error=str(e), pass_dir=str(source))
        perr(f"❌ Pack failed: {e}")
        raise click.Abort() from e

    pout(f"✅ Pass written to '{written}' ({format_size(written.stat().st_size)})")


# 🎫📦🔚
