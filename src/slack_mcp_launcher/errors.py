# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exceptions raised by the launcher."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from .constants import GO_INSTALL_URL

if TYPE_CHECKING:
    from .models import Candidate


class LauncherError(RuntimeError):
    """Base class for fatal launcher failures."""


class SettingsError(LauncherError):
    """Raised when a launcher environment variable holds an invalid value."""


class NoCandidateError(LauncherError):
    """Raised when no launch candidate satisfies its precondition."""

    def __init__(self, candidates: Sequence[Candidate], toolchain: str) -> None:
        self.candidates = tuple(candidates)
        self.toolchain = toolchain
        super().__init__(self.summary)

    @property
    def summary(self) -> str:
        return (
            "no prebuilt slack-mcp-server binary or platform package was found, "
            f"and the {self.toolchain!r} toolchain is not available"
        )

    def details(self) -> list[str]:
        """Return one line per rejected candidate followed by remediation hints."""

        lines = [f"{candidate.name}: {candidate.reason}" for candidate in self.candidates]
        lines.extend(self.remediation())
        return lines

    def remediation(self) -> list[str]:
        return [
            f'Error: "{self.toolchain}" command not found in PATH or "{self.toolchain} version" failed.',
            "To run this server without pre-compiled binaries, you must have Go installed.",
            f"Install Go from {GO_INSTALL_URL}",
            'Or run "make build" if you have Go installed elsewhere to create a binary.',
            "Or reinstall slack-mcp-launcher so the platform package for this host is present.",
        ]


class SpawnError(LauncherError):
    """Raised when a selected candidate cannot be started."""

    def __init__(self, argv: Sequence[str], cause: OSError) -> None:
        self.argv = tuple(argv)
        self.cause = cause
        super().__init__(f"failed to start {self.argv[0]!r}: {cause.strerror or cause}")


__all__ = ["LauncherError", "NoCandidateError", "SettingsError", "SpawnError"]
