"""Background renderer — repaints the live line on a fixed cadence.

Lifecycle: idle → running → stopped. Once stopped the renderer never writes
to its sink again.
"""

from __future__ import annotations

import logging
import threading
from typing import IO, Literal

from loading.core.errors import ConcurrencyFault
from loading.core.models import FrameSet, Status
from loading.core.terminal import CLEAR_LINE, style_glyph
from loading.services.state import DisplayState, SharedState

logger = logging.getLogger(__name__)

Phase = Literal["idle", "running", "stopped"]

_FINAL_ATTEMPTS = 3


class Renderer:
    """Owns the sink and the draw loop for one Loading handle."""

    def __init__(
        self,
        state: SharedState,
        frames: FrameSet,
        sink: IO[str],
        interval: float,
        color: bool = False,
    ) -> None:
        self._state = state
        self._frames = frames
        self._sink = sink
        self._interval = interval
        self._color = color
        self._wake = threading.Event()
        self._thread: threading.Thread | None = None
        self.phase: Phase = "idle"
        self.fault: ConcurrencyFault | None = None
        self.dropped_frames = 0

    # ── lifecycle ───────────────────────────────────────────────────

    def start(self) -> None:
        if self.phase != "idle":
            raise RuntimeError(f"Renderer already {self.phase}")
        self._thread = threading.Thread(
            target=self._run, name="loading-renderer", daemon=True,
        )
        self.phase = "running"
        self._thread.start()
        logger.debug("Renderer started (interval=%.3fs)", self._interval)

    def wake(self) -> None:
        """Cut the current interval wait short."""
        self._wake.set()

    def join(self, timeout: float | None = None) -> None:
        if self._thread is None or self._thread is threading.current_thread():
            return
        self._thread.join(timeout)

    @property
    def alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    # ── loop ────────────────────────────────────────────────────────

    def _run(self) -> None:
        try:
            snap = self._state.snapshot()
            while not snap.terminated:
                self._draw(snap)
                self._wake.wait(self._interval)
                self._wake.clear()
                snap = self._state.snapshot()
            for _ in range(_FINAL_ATTEMPTS):
                if self._draw_final(snap):
                    break
        except Exception as exc:
            self.fault = ConcurrencyFault(f"Renderer thread died: {exc}")
            self.fault.__cause__ = exc
            logger.error("Renderer thread died: %s", exc)
        finally:
            self.phase = "stopped"
            logger.debug("Renderer stopped")

    def _draw(self, snap: DisplayState) -> None:
        parts = [self._committed_lines(snap)]
        if snap.status is not None:
            parts.append(CLEAR_LINE + self._status_line(snap.status))
        else:
            glyph = self._frames[snap.frame_index]
            text = _one_line(snap.text)
            line = f"{glyph} {text}" if text else glyph
            parts.append(CLEAR_LINE + line)
            self._state.advance()
        if self._write("".join(parts)):
            self._state.ack_committed(len(snap.committed))

    def _draw_final(self, snap: DisplayState) -> bool:
        parts = [self._committed_lines(snap)]
        text = _one_line(snap.text)
        if snap.status is not None:
            parts.append(CLEAR_LINE + self._status_line(snap.status) + "\n")
        elif text:
            parts.append(CLEAR_LINE + text + "\n")
        else:
            # nothing left to show: wipe the spinner instead of leaving a blank line
            parts.append(CLEAR_LINE)
        if not self._write("".join(parts)):
            return False
        self._state.ack_committed(len(snap.committed))
        return True

    def _committed_lines(self, snap: DisplayState) -> str:
        return "".join(
            CLEAR_LINE + self._status_line(status) + "\n" for status in snap.committed
        )

    def _status_line(self, status: Status) -> str:
        glyph = style_glyph(status.kind, status.glyph, self._color)
        message = _one_line(status.message)
        if not glyph:
            return message
        return f"{glyph} {message}"

    def _write(self, payload: str) -> bool:
        try:
            self._sink.write(payload)
            self._sink.flush()
        except (OSError, ValueError) as exc:
            self.dropped_frames += 1
            logger.debug("Dropped frame: %s", exc)
            return False
        return True


def _one_line(text: str) -> str:
    """Fold line breaks so the live line stays a single terminal row."""
    return " ".join(text.splitlines())
