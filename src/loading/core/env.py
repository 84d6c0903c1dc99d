"""Runtime environment helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from loading.core.errors import ConfigurationError
from loading.core.paths import default_config_path


def config_file() -> Path | None:
    """Config file to read: ``$LOADING_CONFIG``, else the default path if it exists."""
    override = os.environ.get("LOADING_CONFIG", "").strip()
    if override:
        return Path(override).expanduser()

    path = default_config_path()
    if path.exists() and path.is_file():
        return path
    return None


def overrides() -> dict[str, Any]:
    """Collect LoadingConfig overrides from ``LOADING_*`` variables and ``NO_COLOR``."""
    found: dict[str, Any] = {}

    interval_ms = os.environ.get("LOADING_INTERVAL_MS", "").strip()
    if interval_ms:
        try:
            found["interval"] = int(interval_ms) / 1000
        except ValueError as exc:
            raise ConfigurationError(
                f"LOADING_INTERVAL_MS must be an integer, got {interval_ms!r}"
            ) from exc

    frames = os.environ.get("LOADING_FRAMES", "").strip()
    if frames:
        found["frames"] = frames

    stream = os.environ.get("LOADING_STREAM", "").strip().lower()
    if stream:
        found["stream"] = stream

    if os.environ.get("NO_COLOR"):
        found["color"] = False

    return found
