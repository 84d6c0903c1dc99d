"""Repository for loading.toml read/write."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import tomlkit
from tomlkit.exceptions import TOMLKitError

from loading.core import env
from loading.core.errors import ConfigurationError
from loading.core.models import LoadingConfig

_GLYPH_KEYS = ("success", "fail", "warn", "info")


def create_default() -> LoadingConfig:
    """Factory for a fresh config with every documented default."""
    return LoadingConfig()


# ── Serialization ───────────────────────────────────────────────────


def dump(cfg: LoadingConfig) -> str:
    """Serialize a LoadingConfig to a TOML string."""
    doc = tomlkit.document()
    doc.add(tomlkit.comment("loading — terminal progress indicator configuration"))
    doc.add(tomlkit.nl())

    table = tomlkit.table()
    table.add("interval_ms", round(cfg.interval * 1000))
    if isinstance(cfg.frames, str):
        table.add("frames", cfg.frames)
    else:
        table.add("frames", list(cfg.frames))
    if cfg.text:
        table.add("text", cfg.text)
    if isinstance(cfg.stream, str):
        table.add("stream", cfg.stream)
    if cfg.color is not None:
        table.add("color", cfg.color)
    table.add("require_tty", cfg.require_tty)

    glyphs = tomlkit.table()
    for key in _GLYPH_KEYS:
        glyphs.add(key, getattr(cfg, key))
    table.add("glyphs", glyphs)

    doc.add("loading", table)
    return tomlkit.dumps(doc)


def load(path: Path) -> LoadingConfig:
    """Deserialize loading.toml into a LoadingConfig."""
    return LoadingConfig(**_read_fields(path))


def save(cfg: LoadingConfig, path: Path) -> None:
    """Write config to disk."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump(cfg), encoding="utf-8")


def resolve(path: Path | None = None) -> LoadingConfig:
    """Merge defaults, then the config file, then environment overrides.

    *path* wins over ``$LOADING_CONFIG`` and the default location.
    """
    fields: dict[str, Any] = {}
    source = path or env.config_file()
    if source is not None:
        fields.update(_read_fields(source))
    fields.update(env.overrides())
    return LoadingConfig(**fields)


def _read_fields(path: Path) -> dict[str, Any]:
    try:
        raw = tomlkit.loads(path.read_text(encoding="utf-8")).unwrap()
    except FileNotFoundError as exc:
        raise ConfigurationError(f"Config file not found: {path}") from exc
    except TOMLKitError as exc:
        raise ConfigurationError(f"Invalid TOML in {path}: {exc}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigurationError(f"Cannot read config file {path}: {exc}") from exc

    table = raw.get("loading", {})
    if not isinstance(table, dict):
        raise ConfigurationError(f"[loading] in {path} must be a table")

    fields: dict[str, Any] = {}
    if "interval_ms" in table:
        interval_ms = table["interval_ms"]
        if isinstance(interval_ms, bool) or not isinstance(interval_ms, (int, float)):
            raise ConfigurationError(f"interval_ms must be a number, got {interval_ms!r}")
        fields["interval"] = interval_ms / 1000
    if "frames" in table:
        frames = table["frames"]
        if isinstance(frames, list):
            fields["frames"] = tuple(str(f) for f in frames)
        elif isinstance(frames, str):
            fields["frames"] = frames
        else:
            raise ConfigurationError(f"frames must be a preset name or a list, got {frames!r}")
    for key in ("text", "stream"):
        if key in table:
            fields[key] = str(table[key])
    for key in ("color", "require_tty"):
        if key in table:
            value = table[key]
            if not isinstance(value, bool):
                raise ConfigurationError(f"{key} must be true or false, got {value!r}")
            fields[key] = value

    glyphs = table.get("glyphs", {})
    for key in _GLYPH_KEYS:
        if key in glyphs:
            fields[key] = str(glyphs[key])
    return fields
