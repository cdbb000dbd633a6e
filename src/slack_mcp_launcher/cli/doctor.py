# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Launch-candidate diagnostics."""

from __future__ import annotations

import platform
import sys
from dataclasses import dataclass

from rich import box
from rich.console import Console
from rich.rule import Rule
from rich.table import Table

from ..constants import PLATFORM_PACKAGES
from ..host import HostDescriptor
from ..models import Candidate
from ..resolver import ArtifactResolver
from ..settings import LauncherSettings


@dataclass(slots=True)
class EnvironmentCheck:
    """Represents one row of the doctor environment table."""

    name: str
    detail: str


def run_doctor(
    host: HostDescriptor,
    settings: LauncherSettings,
    *,
    console: Console | None = None,
) -> int:
    """Print every launch candidate and return 0 when one of them is viable."""

    console = console or Console()
    console.print(Rule("[bold cyan]slack-mcp-server launcher doctor[/bold cyan]"))

    environment_table = Table(title="Environment", box=box.SIMPLE, expand=True)
    environment_table.add_column("Check", style="bold")
    environment_table.add_column("Details", overflow="fold")
    for check in _collect_environment_checks(host, settings):
        environment_table.add_row(check.name, check.detail)
    console.print(environment_table)

    candidates = list(ArtifactResolver(host, settings).candidates())
    selected = next((candidate for candidate in candidates if candidate.viable), None)

    candidate_table = Table(title="Launch Candidates", box=box.SIMPLE, expand=True)
    candidate_table.add_column("Candidate", style="bold")
    candidate_table.add_column("Status", style="bold")
    candidate_table.add_column("Details", overflow="fold")
    for candidate in candidates:
        status, style = _status_for(candidate, selected)
        candidate_table.add_row(str(candidate.name), f"[{style}]{status}[/]", candidate.reason)
    console.print(candidate_table)

    if selected is None:
        console.print("[red]No launch candidate is viable.[/red]")
        return 1
    console.print(f"[green]slack-mcp-server will start via the {selected.name}.[/green]")
    return 0


def _status_for(candidate: Candidate, selected: Candidate | None) -> tuple[str, str]:
    if candidate is selected:
        return "selected", "green"
    if candidate.viable:
        return "available", "cyan"
    return "missing", "red"


def _collect_environment_checks(host: HostDescriptor, settings: LauncherSettings) -> list[EnvironmentCheck]:
    package = PLATFORM_PACKAGES.get(host.key)
    return [
        EnvironmentCheck("Host", str(host)),
        EnvironmentCheck("Python", f"{platform.python_version()} ({sys.executable})"),
        EnvironmentCheck("Install root", str(settings.root)),
        EnvironmentCheck("Platform package", package.distribution if package else "-"),
        EnvironmentCheck("Toolchain", settings.toolchain),
        EnvironmentCheck("Permission repair", "enabled" if settings.fix_permissions else "disabled"),
    ]


__all__ = ["EnvironmentCheck", "run_doctor"]
