#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Allow running walletpack as a module: python -m walletpack."""

from __future__ import annotations

from walletpack.cli import main

if __name__ == "__main__":
    main()

# 🎫📦🔚
