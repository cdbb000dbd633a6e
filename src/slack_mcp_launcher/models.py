# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Launch plans, candidates and execution outcomes."""

from __future__ import annotations

import stat
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Final, Literal, TypeAlias

from .constants import SIGNAL_EXIT_BASE, TOOLCHAIN_RUN_ARGS

EXECUTABLE_BITS: Final[int] = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH

BinarySource = Literal["prebuilt", "platform-package"]


@dataclass(frozen=True, slots=True)
class DirectBinary:
    """Spawn an executable file directly."""

    path: Path
    source: BinarySource
    required_mode: int | None = EXECUTABLE_BITS


@dataclass(frozen=True, slots=True)
class ToolchainSource:
    """Run the server from source through an external toolchain."""

    command: str
    entry_point: Path
    leading_args: tuple[str, ...] = TOOLCHAIN_RUN_ARGS


LaunchPlan: TypeAlias = DirectBinary | ToolchainSource


class CandidateName(StrEnum):
    """Candidates in preference order."""

    PREBUILT = "prebuilt binary"
    PLATFORM_PACKAGE = "platform package"
    TOOLCHAIN = "toolchain fallback"


@dataclass(frozen=True, slots=True)
class Candidate:
    """Outcome of checking one candidate's precondition.

    ``plan`` is ``None`` when the precondition does not hold; ``reason`` then
    explains what was missing.
    """

    name: CandidateName
    plan: LaunchPlan | None
    reason: str

    @property
    def viable(self) -> bool:
        return self.plan is not None


@dataclass(frozen=True, slots=True)
class ExecutionOutcome:
    """Termination status of the spawned child."""

    returncode: int | None = None
    signal: int | None = None

    @classmethod
    def from_returncode(cls, returncode: int) -> ExecutionOutcome:
        """Translate a :class:`subprocess.Popen` return code.

        Negative values are POSIX signal terminations.
        """

        if returncode < 0:
            return cls(signal=-returncode)
        return cls(returncode=returncode)

    @property
    def exit_status(self) -> int:
        """Return the status a shell would report for this outcome."""

        if self.signal is not None:
            return SIGNAL_EXIT_BASE + self.signal
        return self.returncode if self.returncode is not None else 0


__all__ = [
    "BinarySource",
    "Candidate",
    "CandidateName",
    "DirectBinary",
    "EXECUTABLE_BITS",
    "ExecutionOutcome",
    "LaunchPlan",
    "ToolchainSource",
]
