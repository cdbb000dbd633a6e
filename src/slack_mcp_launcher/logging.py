# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User-facing diagnostics and verbose tracing for the launcher."""

from __future__ import annotations

import logging
import sys

from rich.text import Text

from .console import detect_tty, get_console_manager

LOGGER_NAME = "slack_mcp_launcher"
LOGGER = logging.getLogger(LOGGER_NAME)
LOGGER.addHandler(logging.NullHandler())


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the launcher logger or one of its children."""

    return LOGGER if not name else LOGGER.getChild(name)


def configure_verbose_logging(enabled: bool) -> None:
    """Stream launcher debug messages to stderr when ``enabled``.

    Args:
        enabled: Whether the verbose override is active.
    """

    if not enabled or getattr(LOGGER, "_slack_mcp_verbose_configured", False):
        return
    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    LOGGER.addHandler(handler)
    LOGGER.setLevel(logging.DEBUG)
    LOGGER.propagate = False
    setattr(LOGGER, "_slack_mcp_verbose_configured", True)


def emoji(symbol: str, enable: bool) -> str:
    return symbol if enable else ""


def _print_line(msg: str, *, style: str | None, use_emoji: bool, use_color: bool | None = None) -> None:
    """Render ``msg`` on the stderr console.

    Args:
        msg: Message text to print.
        style: Rich style name applied when colour output is active.
        use_emoji: Flag indicating whether emoji output is desired.
        use_color: Optional explicit colour flag overriding TTY detection.
    """

    color_enabled = detect_tty() if use_color is None else use_color
    console = get_console_manager().get(color=color_enabled, emoji=use_emoji)
    text = Text(msg)
    if style and color_enabled:
        text.stylize(style)
    console.print(text)


def warn(msg: str, *, use_emoji: bool = False, use_color: bool | None = None) -> None:
    prefix = emoji("⚠️ ", use_emoji)
    _print_line(f"{prefix}{msg}", style="yellow", use_emoji=use_emoji, use_color=use_color)


def fail(msg: str, *, use_emoji: bool = False, use_color: bool | None = None) -> None:
    """Emit an error message on stderr.

    Args:
        msg: Message text to display.
        use_emoji: Flag indicating whether emoji output is desired.
        use_color: Optional explicit colour flag overriding TTY detection.
    """

    prefix = emoji("❌ ", use_emoji)
    _print_line(f"{prefix}{msg}", style="red", use_emoji=use_emoji, use_color=use_color)


__all__ = [
    "LOGGER",
    "configure_verbose_logging",
    "emoji",
    "fail",
    "get_logger",
    "warn",
]
