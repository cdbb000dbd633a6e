# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command lookup shared by the toolchain probe and the delegator."""

from __future__ import annotations

import os
import shutil
from pathlib import Path


def resolve_command(command: str) -> str | None:
    """Return the executable path for ``command`` or ``None`` when absent.

    Paths (absolute or containing a separator) are used as-is when they point
    at a file. Bare names go through the host command search, which honours
    ``PATHEXT`` on Windows so ``go`` finds ``go.exe`` without a shell.
    """

    candidate = Path(command).expanduser()
    if candidate.is_absolute() or os.sep in command or (os.altsep and os.altsep in command):
        return str(candidate) if candidate.is_file() else None
    return shutil.which(command)


__all__ = ["resolve_command"]
