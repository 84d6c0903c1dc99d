"""Shared display state — the only data the caller and the renderer both touch."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field, replace

from loading.core.models import Status


@dataclass(frozen=True)
class DisplayState:
    """Immutable view of the shared state, as read by one draw."""

    text: str = ""
    frame_index: int = 0
    status: Status | None = None
    terminated: bool = False
    committed: tuple[Status, ...] = field(default_factory=tuple)


class SharedState:
    """Lock-guarded DisplayState.

    Every mutation swaps in a new frozen DisplayState under the lock, so a
    reader never sees a half-applied update.
    """

    def __init__(self, frame_count: int, text: str = "") -> None:
        if frame_count <= 0:
            raise ValueError("frame_count must be positive")
        self._frame_count = frame_count
        self._lock = threading.Lock()
        self._state = DisplayState(text=text)

    def snapshot(self) -> DisplayState:
        with self._lock:
            return self._state

    def set_text(self, text: str) -> bool:
        """Replace the text. Returns False when a status already supersedes it."""
        with self._lock:
            if self._state.status is not None:
                return False
            self._state = replace(self._state, text=text)
            return True

    def set_status(self, status: Status) -> None:
        with self._lock:
            self._state = replace(self._state, status=status)

    def commit(self, status: Status) -> None:
        """Queue a finished line and restart the live line with empty text."""
        with self._lock:
            self._state = replace(
                self._state,
                text="",
                committed=self._state.committed + (status,),
            )

    def set_terminated(self) -> bool:
        """Flip ``terminated`` to True. Returns False if it already was."""
        with self._lock:
            if self._state.terminated:
                return False
            self._state = replace(self._state, terminated=True)
            return True

    def ack_committed(self, count: int) -> None:
        """Drop the first *count* committed lines once they reached the sink."""
        if count <= 0:
            return
        with self._lock:
            self._state = replace(self._state, committed=self._state.committed[count:])

    def advance(self) -> int:
        """Move ``frame_index`` one step, unless a status freezes it."""
        with self._lock:
            if self._state.status is None:
                nxt = (self._state.frame_index + 1) % self._frame_count
                self._state = replace(self._state, frame_index=nxt)
            return self._state.frame_index
