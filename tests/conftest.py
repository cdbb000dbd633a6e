# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from helpers.stubs import fake_go
from slack_mcp_launcher.constants import ENTRY_POINT_PARTS
from slack_mcp_launcher.host import HostDescriptor
from slack_mcp_launcher.settings import LauncherSettings


@pytest.fixture
def linux_host() -> HostDescriptor:
    return HostDescriptor(system="linux", machine="amd64")


@pytest.fixture
def install_root(tmp_path: Path) -> Path:
    """Return an install root containing only the Go entry point."""

    root = tmp_path / "install"
    entry = root.joinpath(*ENTRY_POINT_PARTS)
    entry.parent.mkdir(parents=True)
    entry.write_text("package main\n", encoding="utf-8")
    return root


@pytest.fixture
def make_settings(install_root: Path, tmp_path: Path) -> Callable[..., LauncherSettings]:
    """Return a factory for settings rooted at ``install_root``.

    The toolchain defaults to a path that does not exist so the host's real
    ``go`` never influences a test.
    """

    def factory(**overrides: object) -> LauncherSettings:
        values: dict[str, object] = {
            "root": install_root,
            "toolchain": str(tmp_path / "no-such-go"),
        }
        values.update(overrides)
        return LauncherSettings.model_validate(values)

    return factory


@pytest.fixture
def go_stub(tmp_path: Path) -> Path:
    """Return a stub toolchain whose ``version`` probe succeeds."""

    return fake_go(tmp_path / "toolchain" / "go")
