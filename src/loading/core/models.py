"""Data shapes for the loading indicator: frames, statuses and configuration.

A FrameSet is what the renderer animates:
    frames   ⠋ ⠙ ⠹ ⠸ ⠼ ⠴ ⠦ ⠧ ⠇ ⠏   (cycled, frames[i % len])
    statuses ✔ ✖ ⚠ ℹ                 (drawn once the outcome is known)
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import IO, Literal, Union

from loading.core.errors import ConfigurationError

DEFAULT_INTERVAL = 0.08
DEFAULT_PRESET = "dots"

FRAME_PRESETS: dict[str, tuple[str, ...]] = {
    "dots": ("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏"),
    "circle": ("◐", "◓", "◑", "◒"),
    "bounce": ("∙∙∙", "●∙∙", "∙●∙", "∙∙●"),
    "line": ("|", "/", "-", "\\"),
}

StreamSpec = Union[Literal["stdout", "stderr"], IO[str]]


# ── Status layer ────────────────────────────────────────────────────


class StatusKind(str, Enum):
    """Terminal classification of the indicator's outcome."""

    SUCCESS = "success"
    FAIL = "fail"
    WARN = "warn"
    INFO = "info"
    CUSTOM = "custom"

    @classmethod
    def parse(cls, value: "StatusKind | str") -> "StatusKind":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            raise ValueError(f"Unknown status kind: {value!r}") from exc


@dataclass(frozen=True)
class Status:
    """A finished line: glyph plus message."""

    kind: StatusKind
    message: str
    glyph: str


# ── Frame layer ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class SpinnerFrame:
    glyph: str
    tag: Literal["spinner", "status"] = "spinner"


@dataclass(frozen=True)
class FrameSet:
    """Ordered, non-empty, cyclic sequence of spinner frames plus status glyphs."""

    frames: tuple[SpinnerFrame, ...]
    statuses: dict[StatusKind, SpinnerFrame] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.frames:
            raise ConfigurationError("Frame sequence must not be empty")

    def __len__(self) -> int:
        return len(self.frames)

    def __getitem__(self, index: int) -> str:
        return self.frames[index % len(self.frames)].glyph

    def glyph_for(self, kind: StatusKind) -> str:
        frame = self.statuses.get(kind)
        return frame.glyph if frame is not None else ""

    @classmethod
    def from_config(cls, cfg: "LoadingConfig") -> "FrameSet":
        glyphs = resolve_frames(cfg.frames)
        return cls(
            frames=tuple(SpinnerFrame(glyph=g) for g in glyphs),
            statuses={
                StatusKind.SUCCESS: SpinnerFrame(cfg.success, tag="status"),
                StatusKind.FAIL: SpinnerFrame(cfg.fail, tag="status"),
                StatusKind.WARN: SpinnerFrame(cfg.warn, tag="status"),
                StatusKind.INFO: SpinnerFrame(cfg.info, tag="status"),
            },
        )


def resolve_frames(frames: str | Sequence[str]) -> tuple[str, ...]:
    """Turn a preset name or a glyph sequence into a tuple of glyphs."""
    if isinstance(frames, str):
        try:
            return FRAME_PRESETS[frames]
        except KeyError as exc:
            known = ", ".join(sorted(FRAME_PRESETS))
            raise ConfigurationError(
                f"Unknown frame preset {frames!r} (known: {known})"
            ) from exc
    return tuple(str(f) for f in frames)


# ── Configuration layer ─────────────────────────────────────────────


@dataclass
class LoadingConfig:
    """Constructor options for a Loading handle. Every field is optional."""

    interval: float = DEFAULT_INTERVAL  # seconds between redraws
    frames: str | Sequence[str] = DEFAULT_PRESET
    success: str = "✔"
    fail: str = "✖"
    warn: str = "⚠"
    info: str = "ℹ"
    text: str = ""
    stream: StreamSpec = "stdout"
    color: bool | None = None  # None: colour only when the sink is a TTY
    require_tty: bool = False

    def validate(self) -> FrameSet:
        """Check every option and return the FrameSet the renderer will use."""
        if not isinstance(self.interval, (int, float)) or self.interval <= 0:
            raise ConfigurationError(
                f"Interval must be a positive number of seconds, got {self.interval!r}"
            )
        return FrameSet.from_config(self)
