#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Command modules for the walletpack CLI."""

from __future__ import annotations

from walletpack.commands.inspect import inspect_command
from walletpack.commands.pack import pack_command

__all__ = [
    "inspect_command",
    "pack_command",
]

# 🎫📦🔚
