# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Start exactly one launch plan and report how it terminated."""

from __future__ import annotations

import os
import signal

# Bandit: the child is started from a resolved argv without a shell.
import subprocess  # nosec B404
import threading
from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from enum import StrEnum
from types import FrameType

from .errors import SpawnError
from .logging import get_logger
from .models import DirectBinary, ExecutionOutcome, LaunchPlan, ToolchainSource
from .settings import LauncherSettings
from .toolchain import resolve_command

LOGGER = get_logger("delegator")

if os.name == "nt":
    _FORWARDED_SIGNALS: tuple[str, ...] = ("SIGTERM",)
    _IGNORED_SIGNALS: tuple[str, ...] = ("SIGINT",)
else:
    _FORWARDED_SIGNALS = ("SIGINT", "SIGTERM", "SIGHUP")
    _IGNORED_SIGNALS = ()


class PermissionRepair(StrEnum):
    """Result of the opt-in executable-bit repair."""

    SKIPPED = "skipped"
    UNCHANGED = "unchanged"
    REPAIRED = "repaired"
    FAILED = "failed"


class ProcessDelegator:
    """Spawn a plan with inherited standard streams and wait for it."""

    def __init__(self, settings: LauncherSettings) -> None:
        self._settings = settings

    def repair_permissions(self, plan: DirectBinary) -> PermissionRepair:
        """Add ``plan.required_mode`` bits to the binary when repair is enabled.

        Some sandboxed packaging flows drop executable bits, so the repair is
        gated by the permission-repair override and never raises.

        Args:
            plan: Binary plan whose file may need its mode adjusted.

        Returns:
            PermissionRepair: ``SKIPPED`` when disabled or no bits are
            required, ``UNCHANGED`` when the bits are already present,
            ``REPAIRED`` after a successful ``chmod`` and ``FAILED`` when the
            mode could not be read or changed.
        """

        if not self._settings.fix_permissions or not plan.required_mode:
            return PermissionRepair.SKIPPED
        try:
            current = plan.path.stat().st_mode
            if current & plan.required_mode == plan.required_mode:
                return PermissionRepair.UNCHANGED
            plan.path.chmod(current | plan.required_mode)
        except OSError as exc:
            LOGGER.debug("Could not repair permissions on %s: %s", plan.path, exc)
            return PermissionRepair.FAILED
        LOGGER.debug("Added executable bits to %s", plan.path)
        return PermissionRepair.REPAIRED

    @staticmethod
    def build_argv(plan: LaunchPlan, args: Sequence[str]) -> list[str]:
        """Return the child argument vector for ``plan``.

        Args:
            plan: Plan selected by the resolver.
            args: Invocation arguments, forwarded verbatim.

        Returns:
            list[str]: ``[binary, *args]`` or
            ``[toolchain, *leading_args, entry_point, *args]``.
        """

        if isinstance(plan, DirectBinary):
            return [str(plan.path), *args]
        executable = resolve_command(plan.command) or plan.command
        return [executable, *plan.leading_args, str(plan.entry_point), *args]

    def run(
        self,
        plan: LaunchPlan,
        args: Sequence[str],
        env: Mapping[str, str] | None = None,
    ) -> ExecutionOutcome:
        """Spawn ``plan`` and block until it terminates.

        Args:
            plan: Plan selected by the resolver.
            args: Invocation arguments, forwarded verbatim.
            env: Child environment; the dispatcher's own when ``None``.

        Returns:
            ExecutionOutcome: Exit code or terminating signal of the child.

        Raises:
            SpawnError: If the child could not be started at all.
        """

        if isinstance(plan, DirectBinary):
            repair = self.repair_permissions(plan)
            if repair is PermissionRepair.FAILED:
                LOGGER.debug("Ignoring permission repair failure; spawning anyway")

        argv = self.build_argv(plan, args)
        LOGGER.debug("Running: %s", argv)
        relay = _SignalRelay()
        with _forward_signals(relay):
            try:
                # Bandit: argv comes from the resolver, user arguments are never
                # passed through a shell.
                process = subprocess.Popen(  # nosec B603
                    argv,
                    env=dict(env) if env is not None else None,
                )
            except OSError as exc:
                raise SpawnError(argv, exc) from exc
            relay.attach(process)
            returncode = process.wait()
        LOGGER.debug("Child exited with %s", returncode)
        if os.name == "nt":
            return ExecutionOutcome(returncode=returncode)
        return ExecutionOutcome.from_returncode(returncode)


class _SignalRelay:
    """Signal handler that delivers to the child, queueing until it exists."""

    def __init__(self) -> None:
        self._process: subprocess.Popen[bytes] | None = None
        self._pending: list[int] = []

    def __call__(self, signum: int, _frame: FrameType | None) -> None:
        if self._process is None:
            self._pending.append(signum)
            return
        self._deliver(signum)

    def attach(self, process: subprocess.Popen[bytes]) -> None:
        """Bind ``process`` and deliver anything received while it was spawning."""

        self._process = process
        pending, self._pending = self._pending, []
        for signum in pending:
            self._deliver(signum)

    def _deliver(self, signum: int) -> None:
        if self._process is not None and self._process.poll() is None:
            self._process.send_signal(signum)


@contextmanager
def _forward_signals(relay: _SignalRelay) -> Iterator[None]:
    """Route termination requests to ``relay`` for the duration of the block.

    Enter before spawning so no request can hit the default action while the
    child is being created. On Windows the console already delivers Ctrl-C to
    the child, so ``SIGINT`` is only ignored there. Handlers can only be
    installed from the main thread; elsewhere the defaults stay in place.
    """

    if threading.current_thread() is not threading.main_thread():
        yield
        return

    previous: dict[int, object] = {}
    for name in _IGNORED_SIGNALS:
        signum = getattr(signal, name)
        previous[signum] = signal.signal(signum, signal.SIG_IGN)
    for name in _FORWARDED_SIGNALS:
        signum = getattr(signal, name, None)
        if signum is not None:
            previous[signum] = signal.signal(signum, relay)
    try:
        yield
    finally:
        for signum, handler in previous.items():
            # None means the handler was not installed from Python.
            signal.signal(signum, signal.SIG_DFL if handler is None else handler)  # type: ignore[arg-type]


__all__ = ["PermissionRepair", "ProcessDelegator"]
