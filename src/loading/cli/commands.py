"""CLI commands — demo, frames, run, config."""

from __future__ import annotations

import subprocess
import time
from pathlib import Path

import click

from loading.cli import cli
from loading.cli.ui import spinner
from loading.core import paths
from loading.core.errors import ConfigurationError
from loading.core.models import FRAME_PRESETS, LoadingConfig, StatusKind, resolve_frames
from loading.repo import config
from loading.services.controller import Loading


# ── demo ────────────────────────────────────────────────────────────


@cli.command()
@click.argument("name", type=click.Choice(["loading", "download", "status", "spinner"]))
@click.option(
    "--delay-scale", default=1.0, show_default=True, type=click.FloatRange(min=0),
    help="Multiply every pause between updates (0 runs without pauses).",
)
@click.pass_obj
def demo(cfg: LoadingConfig, name: str, delay_scale: float) -> None:
    """Replay one of the bundled demonstrations.

    \b
      loading    count to 100, then succeed
      download   one failed download, one successful
      status     cycle through fail, warn, info and success lines
      spinner    custom frames on stdout, then on stderr
    """
    def pause(ms: int) -> None:
        if delay_scale:
            time.sleep(ms / 1000 * delay_scale)

    try:
        _DEMOS[name](cfg, pause)
    except ConfigurationError as exc:
        raise click.ClickException(str(exc)) from exc


def _demo_loading(cfg: LoadingConfig, pause) -> None:
    with Loading(cfg) as loading:
        for i in range(101):
            loading.text(f"Loading {i}")
            pause(50)
        loading.success("OK")


def _demo_download(cfg: LoadingConfig, pause) -> None:
    with Loading(cfg) as loading:
        for i in range(100):
            loading.text(f"Download 'loading.rar' {i}%")
            pause(30)
        loading.commit(StatusKind.FAIL, "Download 'loading.rar' failed")

        for i in range(100):
            loading.text(f"Download 'loading.zip' {i}%")
            pause(30)
        loading.success("Download 'loading.zip' successfully")


def _demo_status(cfg: LoadingConfig, pause) -> None:
    outcomes = [
        (StatusKind.FAIL, "Fail ..."),
        (StatusKind.WARN, "Warn ..."),
        (StatusKind.INFO, "Info ..."),
    ]
    with Loading(cfg) as loading:
        for kind, message in outcomes:
            for i in range(5):
                loading.text(f"Loading {i}")
                pause(200)
            loading.commit(kind, message)
        for i in range(5):
            loading.text(f"Loading {i}")
            pause(200)
        loading.success("Success ...")


def _demo_spinner(cfg: LoadingConfig, pause) -> None:
    with Loading.with_stdout("circle", config=cfg) as loading:
        for i in range(10):
            loading.text(f"Loading {i}")
            pause(200)
        loading.success("Success ...")

    with Loading.with_stderr("bounce", config=cfg) as loading:
        for i in range(10):
            loading.text(f"Loading {i}")
            pause(200)
        loading.fail("Error ...")


_DEMOS = {
    "loading": _demo_loading,
    "download": _demo_download,
    "status": _demo_status,
    "spinner": _demo_spinner,
}


# ── frames ──────────────────────────────────────────────────────────


@cli.command()
@click.pass_obj
def frames(cfg: LoadingConfig) -> None:
    """List the spinner presets and the active frame sequence."""
    for name, glyphs in FRAME_PRESETS.items():
        click.echo(f"  {name:<8} {' '.join(glyphs)}")
    try:
        active = resolve_frames(cfg.frames)
    except ConfigurationError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"Active: {' '.join(active)}  ({cfg.interval * 1000:.0f}ms)")


# ── run ─────────────────────────────────────────────────────────────


@cli.command(context_settings={"ignore_unknown_options": True})
@click.argument("message")
@click.argument("command", nargs=-1, required=True, type=click.UNPROCESSED)
@click.pass_obj
def run(cfg: LoadingConfig, message: str, command: tuple[str, ...]) -> None:
    """Run COMMAND under a spinner labelled MESSAGE.

    The latest output line is shown next to the spinner; the line ends
    as a success or failure depending on the exit status.

    \b
      loading run "Installing" -- pip install -e .
    """
    try:
        with spinner(message, config=cfg, done=message) as status:
            _stream_command(command, message, status)
    except ConfigurationError as exc:
        raise click.ClickException(str(exc)) from exc


def _stream_command(command: tuple[str, ...], message: str, status) -> None:
    try:
        proc = subprocess.Popen(
            list(command),
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
        )
    except FileNotFoundError as exc:
        raise click.ClickException(f"command not found: {command[0]}") from exc

    with proc:
        assert proc.stdout is not None
        try:
            for raw_line in proc.stdout:
                line = raw_line.strip()
                if line:
                    status(f"{message}: {line}")
        except BaseException:
            proc.kill()
            raise
        code = proc.wait()
    if code != 0:
        raise click.ClickException(f"exit status {code}")


# ── config ──────────────────────────────────────────────────────────


@cli.group("config")
def config_group() -> None:
    """Inspect or create loading.toml."""


@config_group.command("show")
@click.pass_obj
def config_show(cfg: LoadingConfig) -> None:
    """Print the effective configuration as TOML."""
    click.echo(config.dump(cfg), nl=False)


@config_group.command("init")
@click.option(
    "--path", "target", default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Where to write the file (defaults to ~/.config/loading/loading.toml).",
)
@click.option("--force", is_flag=True, help="Overwrite an existing file.")
def config_init(target: Path | None, force: bool) -> None:
    """Write a loading.toml with every default spelled out."""
    target = target or paths.default_config_path()
    if target.exists() and not force:
        raise click.ClickException(f"{target} already exists (use --force to overwrite)")
    config.save(config.create_default(), target)
    click.echo(f"✔ Wrote {target}")
