# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Environment-driven launcher configuration."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .constants import (
    BUILD_SUBDIR,
    DEFAULT_PROBE_TIMEOUT,
    DEFAULT_ROOT,
    DEFAULT_TOOLCHAIN,
    ENTRY_POINT_PARTS,
    FIX_PERMISSIONS_ENV,
    PROBE_TIMEOUT_ENV,
    PROG_NAME,
    ROOT_ENV,
    TOOLCHAIN_ENV,
    VERBOSE_ENV,
)
from .errors import SettingsError
from .host import HostDescriptor

_TRUE_VALUES: Final[frozenset[str]] = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES: Final[frozenset[str]] = frozenset({"", "0", "false", "no", "off"})


def parse_flag(name: str, value: str | None) -> bool:
    """Interpret a boolean-like environment value.

    Args:
        name: Environment variable name, used in error messages.
        value: Raw value or ``None`` when unset.

    Returns:
        bool: ``True`` for ``1/true/yes/on`` and ``False`` for unset,
        empty or ``0/false/no/off`` (case-insensitive).

    Raises:
        SettingsError: If ``value`` is not recognised.
    """

    if value is None:
        return False
    normalised = value.strip().lower()
    if normalised in _TRUE_VALUES:
        return True
    if normalised in _FALSE_VALUES:
        return False
    raise SettingsError(f"{name} must be a boolean-like value, got {value!r}")


class LauncherSettings(BaseModel):
    """Launcher configuration resolved once at startup."""

    model_config = ConfigDict(frozen=True)

    root: Path = DEFAULT_ROOT
    toolchain: str = Field(default=DEFAULT_TOOLCHAIN, min_length=1)
    fix_permissions: bool = False
    verbose: bool = False
    probe_timeout: float = Field(default=DEFAULT_PROBE_TIMEOUT, gt=0)

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> LauncherSettings:
        """Build settings from ``environ`` (defaults to :data:`os.environ`).

        Raises:
            SettingsError: If any recognised variable holds an invalid value.
        """

        env = os.environ if environ is None else environ
        values: dict[str, object] = {
            "fix_permissions": parse_flag(FIX_PERMISSIONS_ENV, env.get(FIX_PERMISSIONS_ENV)),
            "verbose": parse_flag(VERBOSE_ENV, env.get(VERBOSE_ENV)),
        }

        root_override = env.get(ROOT_ENV)
        if root_override:
            root = Path(root_override).expanduser().resolve()
            if not root.is_dir():
                raise SettingsError(f"{ROOT_ENV} does not point to a directory: {root}")
            values["root"] = root

        toolchain = env.get(TOOLCHAIN_ENV)
        if toolchain:
            values["toolchain"] = toolchain

        timeout = env.get(PROBE_TIMEOUT_ENV)
        if timeout:
            values["probe_timeout"] = timeout

        try:
            return cls.model_validate(values)
        except ValidationError as exc:
            raise SettingsError(f"invalid launcher configuration: {exc}") from exc

    @property
    def build_dir(self) -> Path:
        return self.root / BUILD_SUBDIR

    @property
    def entry_point(self) -> Path:
        """Return the Go entry point used by the toolchain fallback."""

        return self.root.joinpath(*ENTRY_POINT_PARTS)

    @staticmethod
    def binary_name(host: HostDescriptor) -> str:
        return f"{PROG_NAME}{host.executable_suffix}"


__all__ = ["LauncherSettings", "parse_flag"]
