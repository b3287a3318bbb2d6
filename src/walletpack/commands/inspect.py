#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Inspect command for the walletpack CLI."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import click
from provide.foundation import logger
from provide.foundation.console import perr, pout
from provide.foundation.serialization import json_dumps

from walletpack.exceptions import WalletPackError
from walletpack.inspection import inspect_pass


@click.command("inspect")
@click.argument(
    "pkpass_file",
    type=click.Path(exists=True, dir_okay=False, resolve_path=True),
    required=True,
)
@click.option("--json", "output_json", is_flag=True, help="Print the summary as JSON")
def inspect_command(pkpass_file: str, output_json: bool) -> None:
    """Show the entries and manifest state of a .pkpass archive."""
    path = Path(pkpass_file)
    logger.debug("Inspecting pass", path=str(path))

    try:
        summary = inspect_pass(path.read_bytes())
    except (WalletPackError, OSError, ValueError) as e:
        logger.error("Inspect failed", error=str(e), path=str(path))
        perr(f"❌ Inspect failed: {e}")
        raise click.Abort() from e

    if output_json:
        pout(json_dumps(summary, indent=2))
    else:
        _display_summary(path, summary)

    if not summary["digests_valid"]:
        raise SystemExit(1)


def _display_summary(path: Path, summary: dict[str, Any]) -> None:
    pout(f"Pass: {path.name}")
    pout(f"Style: {summary['style'] or 'unknown'}")
    pout(f"Signature: {summary['signature_size']} bytes")
    pout("\nEntries:")
    for name in summary["entries"]:
        digest = summary["manifest"].get(name)
        marker = "✗" if name in summary["mismatched"] else " "
        pout(f"  {marker} {name}" + (f"  {digest}" if digest else ""))

    for name in summary["unlisted"]:
        perr(f"⚠️  Not in manifest: {name}")
    if summary["digests_valid"]:
        pout("\n✅ Manifest digests match")
    else:
        perr("\n❌ Manifest digests do not match the archive")


# 🎫📦🔚
