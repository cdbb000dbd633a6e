# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Host platform detection used as the platform-package lookup key."""

from __future__ import annotations

import platform
from dataclasses import dataclass
from typing import Final

from .constants import WINDOWS_EXECUTABLE_SUFFIX

SYSTEM_ALIASES: Final[dict[str, str]] = {
    "darwin": "darwin",
    "macos": "darwin",
    "linux": "linux",
    "windows": "windows",
    "win32": "windows",
    "cygwin": "windows",
}

ARCH_ALIASES: Final[dict[str, str]] = {
    "amd64": "amd64",
    "x86_64": "amd64",
    "x64": "amd64",
    "arm64": "arm64",
    "aarch64": "arm64",
    "armv8": "arm64",
}


@dataclass(frozen=True, slots=True)
class HostDescriptor:
    """Operating system and CPU architecture of the current machine."""

    system: str
    machine: str

    @classmethod
    def from_raw(cls, system: str, machine: str) -> HostDescriptor:
        """Return a descriptor with ``system`` and ``machine`` normalised.

        Args:
            system: Operating system name as reported by :mod:`platform`.
            machine: CPU architecture as reported by :mod:`platform`.

        Returns:
            HostDescriptor: Descriptor using canonical names where known and
            the lower-cased raw value otherwise.
        """

        system_key = system.strip().lower()
        machine_key = machine.strip().lower()
        return cls(
            system=SYSTEM_ALIASES.get(system_key, system_key),
            machine=ARCH_ALIASES.get(machine_key, machine_key),
        )

    @property
    def key(self) -> tuple[str, str]:
        return self.system, self.machine

    @property
    def is_windows(self) -> bool:
        return self.system == "windows"

    @property
    def executable_suffix(self) -> str:
        """Return the file suffix executables need on this host."""

        return WINDOWS_EXECUTABLE_SUFFIX if self.is_windows else ""

    def __str__(self) -> str:
        return f"{self.system}/{self.machine}"


def detect_host() -> HostDescriptor:
    """Return the descriptor for the running interpreter's host."""

    return HostDescriptor.from_raw(platform.system(), platform.machine())


__all__ = ["ARCH_ALIASES", "HostDescriptor", "SYSTEM_ALIASES", "detect_host"]
