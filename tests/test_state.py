import threading

import pytest

from loading.core.models import Status, StatusKind
from loading.services.state import SharedState


def _ok(message):
    return Status(kind=StatusKind.SUCCESS, message=message, glyph="✔")


def test_advance_has_period_equal_to_frame_count():
    state = SharedState(frame_count=4)
    seen = [state.advance() for _ in range(8)]
    assert seen == [1, 2, 3, 0, 1, 2, 3, 0]


def test_status_freezes_frame_index():
    state = SharedState(frame_count=4)
    state.advance()
    state.set_status(_ok("done"))
    assert state.advance() == 1
    assert state.advance() == 1


def test_text_is_superseded_by_status():
    state = SharedState(frame_count=1, text="start")
    assert state.set_text("A") is True
    state.set_status(_ok("done"))
    assert state.set_text("B") is False
    snap = state.snapshot()
    assert snap.text == "A"
    assert snap.status.message == "done"


def test_last_status_wins():
    state = SharedState(frame_count=1)
    state.set_status(_ok("first"))
    state.set_status(Status(kind=StatusKind.FAIL, message="second", glyph="✖"))
    assert state.snapshot().status.message == "second"


def test_terminated_flips_once():
    state = SharedState(frame_count=1)
    assert state.set_terminated() is True
    assert state.set_terminated() is False
    assert state.snapshot().terminated is True


def test_commit_clears_text_and_ack_drains_queue():
    state = SharedState(frame_count=1, text="working")
    state.commit(_ok("step one"))
    state.commit(_ok("step two"))

    snap = state.snapshot()
    assert [s.message for s in snap.committed] == ["step one", "step two"]
    assert snap.text == ""

    state.commit(_ok("step three"))
    state.ack_committed(len(snap.committed))
    assert [s.message for s in state.snapshot().committed] == ["step three"]

    state.ack_committed(0)
    assert len(state.snapshot().committed) == 1


def test_zero_frame_count_rejected():
    with pytest.raises(ValueError):
        SharedState(frame_count=0)


def test_readers_never_see_partial_text():
    """Concurrent writers only ever expose whole messages to readers."""
    state = SharedState(frame_count=1)
    messages = {f"message-{i}-" + "x" * i for i in range(200)}
    stop = threading.Event()
    observed = set()

    def reader():
        while not stop.is_set():
            observed.add(state.snapshot().text)

    t = threading.Thread(target=reader)
    t.start()
    for msg in messages:
        state.set_text(msg)
    stop.set()
    t.join()

    assert observed <= messages | {""}
