"""Loading handle — the object the caller holds while a task runs.

Usage:
    loading = Loading()
    for i in range(100):
        loading.text(f"Loading {i}")
        ...
    loading.success("OK")
    loading.end()

Only the renderer thread writes to the terminal; every method here just
mutates shared state.
"""

from __future__ import annotations

import logging
import weakref
from collections.abc import Sequence
from dataclasses import replace
from types import TracebackType
from typing import Any

from loading.core.errors import ConfigurationError
from loading.core.models import FrameSet, LoadingConfig, Status, StatusKind
from loading.core.terminal import resolve_sink, should_color
from loading.services.renderer import Renderer
from loading.services.state import DisplayState, SharedState

logger = logging.getLogger(__name__)


def _shutdown(state: SharedState, renderer: Renderer) -> None:
    # Must not reference the Loading instance: it runs from weakref.finalize.
    state.set_terminated()
    renderer.wake()
    renderer.join()
    if renderer.fault is not None:
        logger.debug("Renderer had already stopped: %s", renderer.fault)


class Loading:
    """Animated single-line progress indicator driven by a background thread."""

    def __init__(self, config: LoadingConfig | None = None, **overrides: Any) -> None:
        try:
            cfg = replace(config or LoadingConfig(), **overrides)
        except TypeError as exc:
            raise ConfigurationError(f"Unknown Loading option: {exc}") from exc
        frames = cfg.validate()
        sink = resolve_sink(cfg.stream, cfg.require_tty)

        self._config = cfg
        self._frames = frames
        self._state = SharedState(len(frames), text=str(cfg.text))
        self._renderer = Renderer(
            self._state,
            frames,
            sink,
            interval=float(cfg.interval),
            color=should_color(sink, cfg.color),
        )
        self._renderer.start()
        self._finalizer = weakref.finalize(self, _shutdown, self._state, self._renderer)

    # ── constructors ────────────────────────────────────────────────

    @classmethod
    def default(cls) -> "Loading":
        return cls()

    @classmethod
    def with_stdout(
        cls,
        frames: str | Sequence[str] | None = None,
        config: LoadingConfig | None = None,
        **overrides: Any,
    ) -> "Loading":
        if frames is not None:
            overrides["frames"] = frames
        return cls(config, stream="stdout", **overrides)

    @classmethod
    def with_stderr(
        cls,
        frames: str | Sequence[str] | None = None,
        config: LoadingConfig | None = None,
        **overrides: Any,
    ) -> "Loading":
        if frames is not None:
            overrides["frames"] = frames
        return cls(config, stream="stderr", **overrides)

    # ── state mutation ──────────────────────────────────────────────

    def text(self, message: object) -> None:
        """Replace the displayed text. Ignored once a status has been set."""
        self._state.set_text(str(message))

    def success(self, message: object) -> None:
        self.status(StatusKind.SUCCESS, message)

    def fail(self, message: object) -> None:
        self.status(StatusKind.FAIL, message)

    def warn(self, message: object) -> None:
        self.status(StatusKind.WARN, message)

    def info(self, message: object) -> None:
        self.status(StatusKind.INFO, message)

    def status(self, kind: StatusKind | str, message: object, glyph: str | None = None) -> None:
        """Set the final status line. Last call before ``end()`` wins.

        *kind* is a StatusKind or its name. *glyph* overrides the configured
        glyph; ``StatusKind.CUSTOM`` has none unless one is given here.
        """
        self._state.set_status(self._make_status(kind, message, glyph))

    def commit(self, kind: StatusKind | str, message: object, glyph: str | None = None) -> None:
        """Persist ``<glyph> <message>`` as a finished line and keep animating below it."""
        self._state.commit(self._make_status(kind, message, glyph))

    def end(self) -> None:
        """Stop the renderer after its final draw. Safe to call more than once."""
        self._finalizer()

    # ── introspection ───────────────────────────────────────────────

    @property
    def config(self) -> LoadingConfig:
        return self._config

    @property
    def frames(self) -> FrameSet:
        return self._frames

    @property
    def renderer(self) -> Renderer:
        return self._renderer

    @property
    def running(self) -> bool:
        return self._finalizer.alive and self._renderer.alive

    def snapshot(self) -> DisplayState:
        return self._state.snapshot()

    # ── context manager ─────────────────────────────────────────────

    def __enter__(self) -> "Loading":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.end()

    def _make_status(self, kind: StatusKind | str, message: object, glyph: str | None) -> Status:
        parsed = StatusKind.parse(kind)
        if glyph is None:
            glyph = self._frames.glyph_for(parsed)
        return Status(kind=parsed, message=str(message), glyph=glyph)
