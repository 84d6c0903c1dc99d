"""Path constants and config-file resolution."""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_DIR = ".config/loading"
CONFIG_TOML = "loading.toml"


def config_home() -> Path:
    """``$LOADING_HOME`` if set, else ``~/.config/loading``."""
    override = os.environ.get("LOADING_HOME", "").strip()
    if override:
        return Path(override).expanduser()
    return Path.home() / CONFIG_DIR


def default_config_path() -> Path:
    return config_home() / CONFIG_TOML
