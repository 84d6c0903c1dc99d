import subprocess
import sys
import time
from pathlib import Path

import pytest

from loading.cli import cli
from loading.cli.commands import _stream_command
from loading.cli.ui import spinner
from loading.core import paths
from loading.core.models import LoadingConfig


def test_help_lists_command_index(runner):
    result = runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "Quick start:" in result.output
    assert "demo loading" in result.output
    assert "Command index:" in result.output


def test_frames_lists_presets(runner):
    result = runner.invoke(cli, ["frames"])
    assert result.exit_code == 0
    assert "circle" in result.output
    assert "◐ ◓ ◑ ◒" in result.output
    assert "Active: ⠋" in result.output
    assert "(80ms)" in result.output


def test_demo_status(runner):
    result = runner.invoke(cli, ["demo", "status", "--delay-scale", "0"])
    assert result.exit_code == 0
    for line in ("✖ Fail ...", "⚠ Warn ...", "ℹ Info ...", "✔ Success ..."):
        assert line in result.output


def test_demo_download(runner):
    result = runner.invoke(cli, ["demo", "download", "--delay-scale", "0"])
    assert result.exit_code == 0
    assert "✖ Download 'loading.rar' failed" in result.output
    assert "✔ Download 'loading.zip' successfully" in result.output


def test_demo_spinner_uses_both_streams(runner):
    result = runner.invoke(cli, ["demo", "spinner", "--delay-scale", "0"])
    assert result.exit_code == 0
    assert "✔ Success ..." in result.output
    assert "✖ Error ..." in result.output


def test_demo_unknown_preset_from_config(runner, tmp_path: Path):
    cfg = tmp_path / "loading.toml"
    cfg.write_text('[loading]\nframes = "nope"\n', encoding="utf-8")
    result = runner.invoke(cli, ["--config", str(cfg), "demo", "loading", "--delay-scale", "0"])
    assert result.exit_code != 0
    assert "Unknown frame preset" in result.output


def test_invalid_config_file(runner, tmp_path: Path):
    cfg = tmp_path / "loading.toml"
    cfg.write_text("[loading", encoding="utf-8")
    result = runner.invoke(cli, ["--config", str(cfg), "frames"])
    assert result.exit_code != 0
    assert "Invalid TOML" in result.output


def test_run_success(runner):
    result = runner.invoke(
        cli, ["run", "Building", "--", sys.executable, "-c", "print('compiling')"]
    )
    assert result.exit_code == 0
    assert "✔ Building" in result.output


def test_run_failure(runner):
    result = runner.invoke(
        cli, ["run", "Testing", "--", sys.executable, "-c", "import sys; sys.exit(3)"]
    )
    assert result.exit_code == 1
    assert "✖ Testing: exit status 3" in result.output


def test_run_missing_command(runner):
    result = runner.invoke(cli, ["run", "Nothing", "--", "definitely-not-a-command-xyz"])
    assert result.exit_code == 1
    assert "command not found" in result.output


def test_config_init_and_show(runner):
    result = runner.invoke(cli, ["config", "init"])
    assert result.exit_code == 0
    assert paths.default_config_path().exists()

    again = runner.invoke(cli, ["config", "init"])
    assert again.exit_code != 0
    assert "already exists" in again.output

    shown = runner.invoke(cli, ["config", "show"])
    assert shown.exit_code == 0
    assert "[loading]" in shown.output
    assert "interval_ms = 80" in shown.output


def test_config_show_honours_env(runner, monkeypatch):
    monkeypatch.setenv("LOADING_FRAMES", "line")
    result = runner.invoke(cli, ["config", "show"])
    assert result.exit_code == 0
    assert 'frames = "line"' in result.output


def test_spinner_marks_success(sink):
    with spinner("Working", config=LoadingConfig(interval=0.01, stream=sink)) as status:
        status("Almost there")
    assert sink.lines()[-1] == "✔ Almost there"


def test_spinner_marks_failure(sink):
    with pytest.raises(RuntimeError):
        with spinner("Working", config=LoadingConfig(interval=0.01, stream=sink)):
            raise RuntimeError("disk full")
    assert sink.lines()[-1] == "✖ Working: disk full"


def test_config_env_pointing_at_directory(runner, monkeypatch, tmp_path: Path):
    monkeypatch.setenv("LOADING_CONFIG", str(tmp_path))
    result = runner.invoke(cli, ["frames"])
    assert result.exit_code == 1
    assert "Cannot read config file" in result.output


def test_interrupted_command_is_killed_and_reaped(monkeypatch):
    started = []
    real_popen = subprocess.Popen

    def tracking_popen(*args, **kwargs):
        proc = real_popen(*args, **kwargs)
        started.append(proc)
        return proc

    monkeypatch.setattr(subprocess, "Popen", tracking_popen)

    def interrupt(_msg):
        raise KeyboardInterrupt

    command = (sys.executable, "-c", "import time; print('started', flush=True); time.sleep(30)")
    begin = time.monotonic()
    with pytest.raises(KeyboardInterrupt):
        _stream_command(command, "Sleeping", interrupt)

    assert time.monotonic() - begin < 10
    assert started[0].returncode is not None
