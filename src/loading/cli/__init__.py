"""CLI entry point — Click command group."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from loading import __version__
from loading.core.errors import ConfigurationError
from loading.repo import config

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _quick_start(root_name: str) -> str:
    lines = [
        "Quick start:",
        f"  {root_name} demo loading",
        f"  {root_name} frames",
        f"  {root_name} run \"Building\" -- make build",
    ]
    return "\n".join(lines)


def _render_full_index(root: click.Command, root_name: str) -> str:
    lines: list[str] = []

    def _walk(cmd: click.Command, prefix: str) -> None:
        lines.append(prefix)
        if isinstance(cmd, click.Group):
            for child_name in sorted(cmd.commands):
                _walk(cmd.commands[child_name], f"{prefix} {child_name}")

    _walk(root, root_name)
    return "\n".join(f"  {line}" for line in lines)


class LoadingGroup(click.Group):
    """Click group that appends a quick start and command index to help output."""

    def get_help(self, ctx: click.Context) -> str:
        base = super().get_help(ctx)
        root_ctx = ctx.find_root()
        root_name = root_ctx.info_name or "loading"
        full = _render_full_index(root_ctx.command, root_name)
        return f"{base}\n\n{_quick_start(root_name)}\n\nCommand index:\n{full}"


@click.group(cls=LoadingGroup)
@click.version_option(__version__, prog_name="loading")
@click.option(
    "--config", "config_path", default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to a loading.toml (defaults to $LOADING_CONFIG or ~/.config/loading).",
)
@click.option(
    "--log-level", "-l", default="WARNING",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Log level for diagnostics on stderr (default: WARNING).",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, log_level: str) -> None:
    """loading — animated terminal progress indicator."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )
    try:
        ctx.obj = config.resolve(config_path)
    except ConfigurationError as exc:
        raise click.ClickException(str(exc)) from exc


# Register all sub-commands on import
from loading.cli import commands as _commands  # noqa: F401, E402
