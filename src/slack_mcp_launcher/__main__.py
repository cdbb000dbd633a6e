# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Allow ``python -m slack_mcp_launcher`` to act as ``slack-mcp-server``."""

from __future__ import annotations

from .dispatcher import main

if __name__ == "__main__":
    main()
