#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""WalletPack command-line interface entrypoint."""

from __future__ import annotations

from attrs import evolve
import click
from provide.foundation import CLIContext, TelemetryConfig, get_hub
from provide.foundation.utils import get_version

from walletpack.commands.inspect import inspect_command
from walletpack.commands.pack import pack_command
from walletpack.config import WalletPackRuntimeConfig

__version__ = get_version("walletpack", caller_file=__file__)


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@click.version_option(
    __version__,
    "-V",
    "--version",
    prog_name="walletpack",
    message="%(prog)s version %(version)s",
)
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Signed wallet pass (.pkpass) builder.

    Configure via environment variables:
    - WALLETPACK_LOG_LEVEL: Set log level (trace, debug, info, warning, error)
    - WALLETPACK_CERTIFICATE: Path to the PKCS#12 identity bundle
    - WALLETPACK_PASSWORD: Passphrase of the identity bundle
    - WALLETPACK_SIGNATURE_ENCODING: der (default) or smime
    - PROVIDE_LOG_FILE: Write logs to file
    """
    ctx.ensure_object(dict)

    walletpack_config = WalletPackRuntimeConfig.from_env()
    cli_ctx = CLIContext.from_env()
    base_telemetry = TelemetryConfig.from_env()

    telemetry_config = evolve(
        base_telemetry,
        service_name="walletpack",
        logging=evolve(
            base_telemetry.logging,
            default_level=walletpack_config.log_level,  # type: ignore[arg-type]
        ),
    )

    hub = get_hub()
    hub.initialize_foundation(telemetry_config)

    ctx.obj["config"] = walletpack_config
    ctx.obj["cli_context"] = cli_ctx


cli.add_command(pack_command, name="pack")
cli.add_command(inspect_command, name="inspect")

main = cli

if __name__ == "__main__":
    cli()

# 🎫📦🔚
