# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Bootstrap dispatcher that locates and runs ``slack-mcp-server``."""

from __future__ import annotations

from .delegator import PermissionRepair, ProcessDelegator
from .dispatcher import dispatch, main, run
from .errors import LauncherError, NoCandidateError, SettingsError, SpawnError
from .host import HostDescriptor, detect_host
from .models import Candidate, CandidateName, DirectBinary, ExecutionOutcome, LaunchPlan, ToolchainSource
from .resolver import ArtifactResolver
from .settings import LauncherSettings

__all__ = [
    "ArtifactResolver",
    "Candidate",
    "CandidateName",
    "DirectBinary",
    "ExecutionOutcome",
    "HostDescriptor",
    "LaunchPlan",
    "LauncherError",
    "LauncherSettings",
    "NoCandidateError",
    "PermissionRepair",
    "ProcessDelegator",
    "SettingsError",
    "SpawnError",
    "ToolchainSource",
    "detect_host",
    "dispatch",
    "main",
    "run",
]
