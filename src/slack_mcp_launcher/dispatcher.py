# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Entry point that behaves as if it were ``slack-mcp-server`` itself.

The dispatcher resolves a launch plan once, hands it to the delegator, and
exits with the child's status. Arguments are never parsed. Once a child has
been spawned its outcome is final: a non-zero exit is not a reason to try
the next candidate.
"""

from __future__ import annotations

import os
import signal
import sys
from collections.abc import Mapping, Sequence

from .constants import EXIT_NO_CANDIDATE, EXIT_SPAWN_FAILURE
from .delegator import ProcessDelegator
from .errors import NoCandidateError, SettingsError, SpawnError
from .host import HostDescriptor, detect_host
from .logging import configure_verbose_logging, fail, get_logger
from .models import ExecutionOutcome
from .resolver import ArtifactResolver
from .settings import LauncherSettings

LOGGER = get_logger("dispatcher")


def dispatch(
    args: Sequence[str],
    *,
    host: HostDescriptor | None = None,
    settings: LauncherSettings | None = None,
    env: Mapping[str, str] | None = None,
) -> ExecutionOutcome:
    """Resolve a plan and run it with ``args``.

    Args:
        args: Invocation arguments forwarded verbatim to the child.
        host: Host descriptor; detected when omitted.
        settings: Launcher settings; read from ``env`` when omitted.
        env: Environment for settings and the child; :data:`os.environ`
            when omitted.

    Returns:
        ExecutionOutcome: How the spawned child terminated.

    Raises:
        SettingsError: If the launcher environment is misconfigured.
        NoCandidateError: If no candidate is viable. Nothing is spawned.
        SpawnError: If the selected candidate could not be started.
    """

    settings = settings or LauncherSettings.from_environ(env)
    host = host or detect_host()
    LOGGER.debug("Resolving launch plan for %s", host)

    plan = ArtifactResolver(host, settings).select()
    return ProcessDelegator(settings).run(plan, args, env=env)


def terminate_like(outcome: ExecutionOutcome) -> int:
    """Return the exit status for ``outcome``, dying by its signal when possible.

    A child killed by a signal is mirrored by re-raising the same signal on
    the dispatcher with the default disposition. When that does not end the
    process the conventional ``128 + signal`` status is returned.
    """

    if outcome.signal is not None and hasattr(os, "kill"):
        try:
            signal.signal(outcome.signal, signal.SIG_DFL)
            os.kill(os.getpid(), outcome.signal)
        except (OSError, ValueError) as exc:
            LOGGER.debug("Could not re-raise signal %s: %s", outcome.signal, exc)
    return outcome.exit_status


def run(argv: Sequence[str] | None = None) -> int:
    """Dispatch ``argv`` (defaults to ``sys.argv[1:]``) and return the exit status."""

    args = list(sys.argv[1:] if argv is None else argv)
    try:
        settings = LauncherSettings.from_environ()
    except SettingsError as exc:
        fail(f"Error: {exc}")
        return EXIT_NO_CANDIDATE
    configure_verbose_logging(settings.verbose)

    try:
        outcome = dispatch(args, settings=settings)
    except NoCandidateError as exc:
        fail(f"Error: {exc.summary}.")
        for line in exc.details():
            fail(line)
        return EXIT_NO_CANDIDATE
    except SpawnError as exc:
        fail(f"Error: {exc}")
        return EXIT_SPAWN_FAILURE
    return terminate_like(outcome)


def main() -> None:
    """Console-script entry point for ``slack-mcp-server``."""

    sys.exit(run())


__all__ = ["dispatch", "main", "run", "terminate_like"]
