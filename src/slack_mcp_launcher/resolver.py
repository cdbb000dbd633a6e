# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Rank the ways the server can be started on this host.

The resolver never starts the server. Its only side effects are filesystem
and import-machinery lookups plus the toolchain version probe.
"""

from __future__ import annotations

import importlib.util

# Bandit: the probe runs a fixed argument vector without a shell.
import subprocess  # nosec B404
from collections.abc import Iterator
from pathlib import Path

from .constants import PACKAGE_BIN_SUBDIR, PLATFORM_PACKAGES, TOOLCHAIN_PROBE_ARGS
from .errors import NoCandidateError
from .host import HostDescriptor
from .logging import get_logger
from .models import Candidate, CandidateName, DirectBinary, LaunchPlan, ToolchainSource
from .settings import LauncherSettings
from .toolchain import resolve_command

LOGGER = get_logger("resolver")


class ArtifactResolver:
    """Produce launch candidates in preference order.

    Prebuilt binary first, platform package second, toolchain fallback last.
    """

    def __init__(self, host: HostDescriptor, settings: LauncherSettings) -> None:
        self._host = host
        self._settings = settings

    def resolve_prebuilt_binary(self) -> Path | None:
        """Return the binary in the sibling ``build`` directory when present."""

        candidate = self._settings.build_dir / self._settings.binary_name(self._host)
        if candidate.is_file():
            LOGGER.debug("Found pre-built binary at %s", candidate)
            return candidate
        LOGGER.debug("No pre-built binary at %s", candidate)
        return None

    def resolve_platform_package(self, host: HostDescriptor | None = None) -> Path | None:
        """Return the binary shipped by the platform wheel for ``host``.

        Args:
            host: Host to look up; defaults to the resolver's host.

        Returns:
            Path | None: Binary path, or ``None`` when the host is not in the
            platform table, the package is not importable, or the package
            does not contain the binary. Lookup failures are never raised.
        """

        target = host or self._host
        package = PLATFORM_PACKAGES.get(target.key)
        if package is None:
            LOGGER.debug("No platform package is published for %s", target)
            return None

        try:
            spec = importlib.util.find_spec(package.module)
        except (ImportError, ValueError) as exc:
            LOGGER.debug("Platform package %s lookup failed: %s", package.module, exc)
            return None
        if spec is None or not spec.submodule_search_locations:
            LOGGER.debug("Platform package %s is not installed", package.distribution)
            return None

        binary_name = self._settings.binary_name(target)
        for location in spec.submodule_search_locations:
            candidate = Path(location) / PACKAGE_BIN_SUBDIR / binary_name
            if candidate.is_file():
                LOGGER.debug("Found platform binary at %s", candidate)
                return candidate
        LOGGER.debug("Platform package %s does not contain %s", package.distribution, binary_name)
        return None

    def resolve_toolchain_fallback(self) -> ToolchainSource:
        """Return the source-run plan; usable only when :meth:`probe_toolchain` passes."""

        return ToolchainSource(command=self._settings.toolchain, entry_point=self._settings.entry_point)

    def probe_toolchain(self, command: str | None = None) -> bool:
        """Return ``True`` when ``<command> version`` starts and exits cleanly.

        Args:
            command: Toolchain command; defaults to the configured toolchain.

        Returns:
            bool: Whether the toolchain is invocable on this host.
        """

        command = command or self._settings.toolchain
        executable = resolve_command(command)
        if executable is None:
            LOGGER.debug("Toolchain %r not found on PATH", command)
            return False
        try:
            # Bandit: fixed argv, no shell.
            completed = subprocess.run(  # nosec B603
                [executable, *TOOLCHAIN_PROBE_ARGS],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                check=False,
                timeout=self._settings.probe_timeout,
            )
        except (OSError, subprocess.SubprocessError) as exc:
            LOGGER.debug("Toolchain probe for %r failed: %s", command, exc)
            return False
        LOGGER.debug("Toolchain probe for %r exited with %s", command, completed.returncode)
        return completed.returncode == 0

    def candidates(self) -> Iterator[Candidate]:
        """Yield candidates in order, checking each precondition on demand."""

        prebuilt = self.resolve_prebuilt_binary()
        if prebuilt is not None:
            yield Candidate(
                name=CandidateName.PREBUILT,
                plan=DirectBinary(path=prebuilt, source="prebuilt"),
                reason=str(prebuilt),
            )
        else:
            expected = self._settings.build_dir / self._settings.binary_name(self._host)
            yield Candidate(name=CandidateName.PREBUILT, plan=None, reason=f"missing {expected}")

        platform_binary = self.resolve_platform_package()
        if platform_binary is not None:
            yield Candidate(
                name=CandidateName.PLATFORM_PACKAGE,
                plan=DirectBinary(path=platform_binary, source="platform-package"),
                reason=str(platform_binary),
            )
        else:
            yield Candidate(
                name=CandidateName.PLATFORM_PACKAGE,
                plan=None,
                reason=self._platform_miss_reason(),
            )

        fallback = self.resolve_toolchain_fallback()
        if self.probe_toolchain(fallback.command):
            yield Candidate(name=CandidateName.TOOLCHAIN, plan=fallback, reason=str(fallback.entry_point))
        else:
            yield Candidate(
                name=CandidateName.TOOLCHAIN,
                plan=None,
                reason=f"{fallback.command!r} is not available",
            )

    def select(self) -> LaunchPlan:
        """Return the first viable plan.

        Raises:
            NoCandidateError: If every candidate's precondition failed.
        """

        rejected: list[Candidate] = []
        for candidate in self.candidates():
            if candidate.plan is not None:
                LOGGER.debug("Selected %s: %s", candidate.name, candidate.reason)
                return candidate.plan
            rejected.append(candidate)
        raise NoCandidateError(rejected, self._settings.toolchain)

    def _platform_miss_reason(self) -> str:
        package = PLATFORM_PACKAGES.get(self._host.key)
        if package is None:
            return f"no platform package for {self._host}"
        return f"{package.distribution} is not installed"


__all__ = ["ArtifactResolver"]
