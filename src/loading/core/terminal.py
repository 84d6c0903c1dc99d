"""Terminal sink helpers — stream resolution, cursor control, glyph colouring."""

from __future__ import annotations

import os
import sys
from typing import IO

import click

from loading.core.errors import ConfigurationError
from loading.core.models import StatusKind, StreamSpec

CSI = "\x1b["
CLEAR_LINE = "\r" + CSI + "2K"

STATUS_COLORS: dict[StatusKind, str] = {
    StatusKind.SUCCESS: "green",
    StatusKind.FAIL: "red",
    StatusKind.WARN: "yellow",
    StatusKind.INFO: "blue",
}


def resolve_sink(stream: StreamSpec, require_tty: bool = False) -> IO[str]:
    """Return a writable text stream for *stream*, or raise ConfigurationError.

    ``"stdout"``/``"stderr"`` are looked up on :mod:`sys` at call time so a
    swapped stream (pytest capture, click's CliRunner) is honoured.
    """
    if stream == "stdout":
        sink = sys.stdout
    elif stream == "stderr":
        sink = sys.stderr
    elif isinstance(stream, str):
        raise ConfigurationError(f"Unknown stream {stream!r}; use 'stdout' or 'stderr'")
    else:
        sink = stream

    if sink is None or not callable(getattr(sink, "write", None)):
        raise ConfigurationError("Terminal sink is not available for writing")
    if getattr(sink, "closed", False):
        raise ConfigurationError("Terminal sink is closed")
    if require_tty and not is_tty(sink):
        raise ConfigurationError("Terminal sink is not a TTY")
    return sink


def is_tty(sink: IO[str]) -> bool:
    isatty = getattr(sink, "isatty", None)
    if isatty is None:
        return False
    try:
        return bool(isatty())
    except ValueError:
        return False


def should_color(sink: IO[str], color: bool | None) -> bool:
    """Explicit setting wins; otherwise colour TTYs unless NO_COLOR is set."""
    if color is not None:
        return color
    if os.environ.get("NO_COLOR"):
        return False
    return is_tty(sink)


def style_glyph(kind: StatusKind, glyph: str, color: bool) -> str:
    fg = STATUS_COLORS.get(kind)
    if not color or fg is None or not glyph:
        return glyph
    return click.style(glyph, fg=fg)
