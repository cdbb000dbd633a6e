# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""``slack-mcp-launcher`` diagnostics CLI."""

from __future__ import annotations

import shlex
from typing import Annotated

import typer

from ..constants import EXIT_NO_CANDIDATE, LAUNCHER_NAME
from ..delegator import ProcessDelegator
from ..errors import NoCandidateError, SettingsError
from ..host import HostDescriptor, detect_host
from ..logging import configure_verbose_logging, fail, warn
from ..resolver import ArtifactResolver
from ..settings import LauncherSettings
from .doctor import run_doctor

app = typer.Typer(
    name=LAUNCHER_NAME,
    help="Inspect how slack-mcp-server would be started on this host.",
    add_completion=False,
    no_args_is_help=True,
)


def _load(verbose: bool) -> tuple[HostDescriptor, LauncherSettings]:
    try:
        settings = LauncherSettings.from_environ()
    except SettingsError as exc:
        fail(f"Error: {exc}")
        raise typer.Exit(code=EXIT_NO_CANDIDATE) from exc
    configure_verbose_logging(verbose or settings.verbose)
    return detect_host(), settings


@app.command("doctor")
def doctor_command(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Trace resolution on stderr.")] = False,
) -> None:
    """Show every launch candidate and which one would be selected."""

    host, settings = _load(verbose)
    raise typer.Exit(code=run_doctor(host, settings))


@app.command(
    "which",
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
)
def which_command(
    args: Annotated[list[str] | None, typer.Argument(help="Arguments the server would receive.")] = None,
) -> None:
    """Print the command line the dispatcher would execute, without running it."""

    host, settings = _load(False)
    try:
        plan = ArtifactResolver(host, settings).select()
    except NoCandidateError as exc:
        fail(f"Error: {exc.summary}.")
        for line in exc.details():
            fail(line)
        raise typer.Exit(code=EXIT_NO_CANDIDATE) from exc
    if settings.fix_permissions:
        warn("Permission repair is enabled; executable bits may be added before spawning.")
    typer.echo(shlex.join(ProcessDelegator.build_argv(plan, args or [])))


__all__ = ["app"]
