# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Names, layout and exit codes shared by the launcher modules."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Final

PROG_NAME: Final[str] = "slack-mcp-server"
LAUNCHER_NAME: Final[str] = "slack-mcp-launcher"

# src/slack_mcp_launcher/constants.py -> repository root. Only meaningful in a
# source checkout: an installed wheel has no sibling build/ or cmd/ directory,
# so installs rely on the platform package or set the root override.
DEFAULT_ROOT: Final[Path] = Path(__file__).resolve().parents[2]
BUILD_SUBDIR: Final[str] = "build"
ENTRY_POINT_PARTS: Final[tuple[str, ...]] = ("cmd", PROG_NAME, "main.go")
PACKAGE_BIN_SUBDIR: Final[str] = "bin"

DEFAULT_TOOLCHAIN: Final[str] = "go"
TOOLCHAIN_RUN_ARGS: Final[tuple[str, ...]] = ("run",)
TOOLCHAIN_PROBE_ARGS: Final[tuple[str, ...]] = ("version",)
DEFAULT_PROBE_TIMEOUT: Final[float] = 30.0

ROOT_ENV: Final[str] = "SLACK_MCP_LAUNCHER_ROOT"
TOOLCHAIN_ENV: Final[str] = "SLACK_MCP_GO"
FIX_PERMISSIONS_ENV: Final[str] = "SLACK_MCP_FIX_PERMISSIONS"
VERBOSE_ENV: Final[str] = "SLACK_MCP_LAUNCHER_VERBOSE"
PROBE_TIMEOUT_ENV: Final[str] = "SLACK_MCP_PROBE_TIMEOUT"

EXIT_NO_CANDIDATE: Final[int] = 1
EXIT_SPAWN_FAILURE: Final[int] = 127
SIGNAL_EXIT_BASE: Final[int] = 128

WINDOWS_EXECUTABLE_SUFFIX: Final[str] = ".exe"

GO_INSTALL_URL: Final[str] = "https://go.dev/dl/"


@dataclass(frozen=True, slots=True)
class PlatformPackage:
    """Optional wheel carrying a prebuilt binary for one host."""

    distribution: str
    module: str


def _package(system: str, machine: str) -> PlatformPackage:
    suffix = f"{system}-{machine}"
    return PlatformPackage(
        distribution=f"{PROG_NAME}-{suffix}",
        module=f"{PROG_NAME}-{suffix}".replace("-", "_"),
    )


PLATFORM_PACKAGES: Final[dict[tuple[str, str], PlatformPackage]] = {
    ("darwin", "amd64"): _package("darwin", "amd64"),
    ("darwin", "arm64"): _package("darwin", "arm64"),
    ("linux", "amd64"): _package("linux", "amd64"),
    ("linux", "arm64"): _package("linux", "arm64"),
    ("windows", "amd64"): _package("windows", "amd64"),
    ("windows", "arm64"): _package("windows", "arm64"),
}


__all__ = [
    "BUILD_SUBDIR",
    "DEFAULT_PROBE_TIMEOUT",
    "DEFAULT_ROOT",
    "DEFAULT_TOOLCHAIN",
    "ENTRY_POINT_PARTS",
    "EXIT_NO_CANDIDATE",
    "EXIT_SPAWN_FAILURE",
    "FIX_PERMISSIONS_ENV",
    "GO_INSTALL_URL",
    "LAUNCHER_NAME",
    "PACKAGE_BIN_SUBDIR",
    "PLATFORM_PACKAGES",
    "PROBE_TIMEOUT_ENV",
    "PROG_NAME",
    "PlatformPackage",
    "ROOT_ENV",
    "SIGNAL_EXIT_BASE",
    "TOOLCHAIN_ENV",
    "TOOLCHAIN_PROBE_ARGS",
    "TOOLCHAIN_RUN_ARGS",
    "VERBOSE_ENV",
    "WINDOWS_EXECUTABLE_SUFFIX",
]
