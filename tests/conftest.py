import threading
import time

import pytest
from click.testing import CliRunner

from loading.core.models import LoadingConfig
from loading.core.terminal import CLEAR_LINE


class RecordingSink:
    """Thread-safe in-memory terminal sink."""

    def __init__(self):
        self._chunks = []
        self._lock = threading.Lock()
        self.closed = False

    def write(self, payload):
        with self._lock:
            self._chunks.append(payload)
        return len(payload)

    def flush(self):
        pass

    def isatty(self):
        return False

    @property
    def writes(self):
        with self._lock:
            return len(self._chunks)

    def getvalue(self):
        with self._lock:
            return "".join(self._chunks)

    def lines(self):
        """Visible terminal lines, as left after each carriage-return/erase."""
        out = self.getvalue()
        rows = [row.split(CLEAR_LINE)[-1] for row in out.split("\n")]
        if out.endswith("\n"):
            rows.pop()
        return rows


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep user config files and LOADING_* variables out of every test."""
    for var in ("LOADING_CONFIG", "LOADING_INTERVAL_MS", "LOADING_FRAMES", "LOADING_STREAM", "NO_COLOR"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("LOADING_HOME", str(tmp_path / "home"))


@pytest.fixture
def runner():
    """Click CLI runner fixture."""
    return CliRunner()


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def fast_config(sink):
    """Config with a short interval that renders into the recording sink."""
    return LoadingConfig(interval=0.01, stream=sink)


@pytest.fixture
def wait_until():
    def _wait(predicate, timeout=2.0):
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            if predicate():
                return True
            time.sleep(0.005)
        return predicate()

    return _wait
