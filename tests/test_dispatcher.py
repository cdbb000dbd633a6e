# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the dispatcher entry point and exit-status relay."""

from __future__ import annotations

import os
import signal
import subprocess
import sys
import time
from collections.abc import Callable
from pathlib import Path

import pytest

from helpers.stubs import echo_binary, install_platform_package, posix_only, sleeping_binary
from slack_mcp_launcher import dispatcher
from slack_mcp_launcher.constants import (
    EXIT_NO_CANDIDATE,
    EXIT_SPAWN_FAILURE,
    FIX_PERMISSIONS_ENV,
    PLATFORM_PACKAGES,
    ROOT_ENV,
    TOOLCHAIN_ENV,
)
from slack_mcp_launcher.errors import NoCandidateError
from slack_mcp_launcher.host import HostDescriptor
from slack_mcp_launcher.models import ExecutionOutcome
from slack_mcp_launcher.settings import LauncherSettings

SettingsFactory = Callable[..., LauncherSettings]

SRC_DIR = Path(__file__).resolve().parents[1] / "src"


@pytest.fixture
def launcher_env(monkeypatch: pytest.MonkeyPatch, install_root: Path, tmp_path: Path) -> Path:
    """Point the dispatcher at ``install_root`` with no usable toolchain."""

    monkeypatch.setenv(ROOT_ENV, str(install_root))
    monkeypatch.setenv(TOOLCHAIN_ENV, str(tmp_path / "no-such-go"))
    monkeypatch.delenv(FIX_PERMISSIONS_ENV, raising=False)
    return install_root


@posix_only
@pytest.mark.parametrize("code", [0, 1, 2, 127])
def test_run_returns_child_exit_code(code: int, launcher_env: Path) -> None:
    echo_binary(launcher_env / "build" / "slack-mcp-server", code=code)

    assert dispatcher.run([]) == code


@posix_only
def test_run_forwards_arguments(capfd: pytest.CaptureFixture[str], launcher_env: Path) -> None:
    echo_binary(launcher_env / "build" / "slack-mcp-server")
    args = ["--transport", "sse", "a b", "$(whoami)", ""]

    assert dispatcher.run(args) == 0
    assert capfd.readouterr().out.split("\n")[:-1] == args


def test_run_reports_missing_candidates(capsys: pytest.CaptureFixture[str], launcher_env: Path) -> None:
    assert dispatcher.run(["--help"]) == EXIT_NO_CANDIDATE

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "no prebuilt slack-mcp-server binary or platform package was found" in captured.err
    assert "toolchain is not available" in captured.err
    assert "https://go.dev/dl/" in captured.err


@posix_only
def test_run_reports_spawn_failure(capsys: pytest.CaptureFixture[str], launcher_env: Path) -> None:
    echo_binary(launcher_env / "build" / "slack-mcp-server", mode=0o644)

    assert dispatcher.run([]) == EXIT_SPAWN_FAILURE
    assert "failed to start" in capsys.readouterr().err


@posix_only
def test_run_repairs_permissions_when_enabled(monkeypatch: pytest.MonkeyPatch, launcher_env: Path) -> None:
    echo_binary(launcher_env / "build" / "slack-mcp-server", code=5, mode=0o644)
    monkeypatch.setenv(FIX_PERMISSIONS_ENV, "1")

    assert dispatcher.run([]) == 5


def test_run_rejects_invalid_settings(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setenv(FIX_PERMISSIONS_ENV, "sometimes")

    assert dispatcher.run([]) == EXIT_NO_CANDIDATE
    assert FIX_PERMISSIONS_ENV in capsys.readouterr().err


def test_dispatch_does_not_spawn_without_candidate(
    monkeypatch: pytest.MonkeyPatch,
    linux_host: HostDescriptor,
    make_settings: SettingsFactory,
) -> None:
    def unexpected_spawn(*_args: object, **_kwargs: object) -> None:
        raise AssertionError("nothing may be spawned")

    monkeypatch.setattr("slack_mcp_launcher.delegator.subprocess.Popen", unexpected_spawn)

    with pytest.raises(NoCandidateError):
        dispatcher.dispatch([], host=linux_host, settings=make_settings())


@posix_only
def test_dispatch_does_not_retry_after_child_failure(
    monkeypatch: pytest.MonkeyPatch,
    install_root: Path,
    go_stub: Path,
    linux_host: HostDescriptor,
    make_settings: SettingsFactory,
) -> None:
    echo_binary(install_root / "build" / "slack-mcp-server", code=9)
    spawned: list[list[str]] = []
    original = dispatcher.ProcessDelegator.build_argv

    def recording_build_argv(plan, args):  # noqa: ANN001
        argv = original(plan, args)
        spawned.append(argv)
        return argv

    monkeypatch.setattr(dispatcher.ProcessDelegator, "build_argv", staticmethod(recording_build_argv))

    outcome = dispatcher.dispatch([], host=linux_host, settings=make_settings(toolchain=str(go_stub)))

    assert outcome == ExecutionOutcome(returncode=9)
    assert spawned == [[str(install_root / "build" / "slack-mcp-server")]]


def test_terminate_like_returns_exit_code() -> None:
    assert dispatcher.terminate_like(ExecutionOutcome(returncode=3)) == 3


@posix_only
def test_terminate_like_reraises_signal(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[tuple[str, int]] = []
    monkeypatch.setattr("slack_mcp_launcher.dispatcher.signal.signal", lambda sig, handler: calls.append(("signal", sig)))
    monkeypatch.setattr("slack_mcp_launcher.dispatcher.os.kill", lambda pid, sig: calls.append(("kill", sig)))

    status = dispatcher.terminate_like(ExecutionOutcome(signal=signal.SIGTERM))

    assert calls == [("signal", signal.SIGTERM), ("kill", signal.SIGTERM)]
    assert status == 128 + signal.SIGTERM


def test_main_exits_with_run_status(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(dispatcher, "run", lambda argv=None: 42)

    with pytest.raises(SystemExit) as excinfo:
        dispatcher.main()

    assert excinfo.value.code == 42


@posix_only
def test_dispatch_runs_platform_package_binary(
    monkeypatch: pytest.MonkeyPatch,
    capfd: pytest.CaptureFixture[str],
    tmp_path: Path,
    linux_host: HostDescriptor,
    make_settings: SettingsFactory,
) -> None:
    module = PLATFORM_PACKAGES[linux_host.key].module
    binary = install_platform_package(tmp_path / "site", module, "slack-mcp-server", code=6)
    monkeypatch.syspath_prepend(str(tmp_path / "site"))

    outcome = dispatcher.dispatch(["--transport", "stdio", "a b"], host=linux_host, settings=make_settings())

    assert binary.parent.parent.name == module
    assert outcome == ExecutionOutcome(returncode=6)
    assert capfd.readouterr().out.splitlines() == ["--transport", "stdio", "a b"]


@posix_only
def test_interrupt_sent_to_dispatcher_alone_reaches_child(install_root: Path, tmp_path: Path) -> None:
    sleeping_binary(install_root / "build" / "slack-mcp-server")
    started = tmp_path / "started"
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(SRC_DIR), env.get("PYTHONPATH")]))
    env[ROOT_ENV] = str(install_root)
    env[TOOLCHAIN_ENV] = str(tmp_path / "no-such-go")

    process = subprocess.Popen(
        [sys.executable, "-m", "slack_mcp_launcher", str(started)],
        env=env,
        start_new_session=True,
    )
    try:
        deadline = time.monotonic() + 10
        while not started.exists():
            assert time.monotonic() < deadline, "server stub never started"
            assert process.poll() is None, "dispatcher exited before the server started"
            time.sleep(0.05)

        os.kill(process.pid, signal.SIGINT)

        assert process.wait(timeout=10) == -signal.SIGINT
    finally:
        if process.poll() is None:
            os.killpg(process.pid, signal.SIGKILL)
            process.wait()
