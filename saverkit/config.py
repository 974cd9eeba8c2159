"""
config.py

Responsibility: Load an optional YAML build configuration into a typed model.

A config file lets a bundle be rebuilt without retyping flags:

    input: sunset.mp4
    output: SunsetSaver.saver
    name: Beautiful Sunset
    cleanup_delay: 3
    scratch_root: /tmp/saver-builds

Every key is optional; CLI flags override whatever the file sets. Unknown keys are
ignored so older saverkit versions can read newer files.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from saverkit.pipeline import DEFAULT_CLEANUP_DELAY


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class SaverConfig:
    """Build settings read from a config file (or defaults when there is none)."""

    input: Path | None = None
    output: Path | None = None
    name: str | None = None
    cleanup_delay: float = DEFAULT_CLEANUP_DELAY
    scratch_root: Path | None = None


def _optional_path(data: dict[str, Any], key: str, base: Path) -> Path | None:
    raw = data.get(key)
    if raw is None:
        return None
    text = str(raw).strip()
    if not text:
        return None
    p = Path(text).expanduser()
    # Relative paths are relative to the config file, not the caller's cwd.
    return p if p.is_absolute() else base / p


def _cleanup_delay(data: dict[str, Any]) -> float:
    raw = data.get("cleanup_delay", DEFAULT_CLEANUP_DELAY)
    if isinstance(raw, bool):
        raise ConfigError("`cleanup_delay` must be a number of seconds.")
    try:
        delay = float(raw)
    except (TypeError, ValueError) as e:
        raise ConfigError("`cleanup_delay` must be a number of seconds.") from e
    if delay < 0:
        raise ConfigError("`cleanup_delay` must not be negative.")
    return delay


def parse_config(config_path: str | Path) -> SaverConfig:
    """
    Parse a YAML config file into a `SaverConfig`.

    Recognized keys:
    - input: str (video path)
    - output: str (bundle path)
    - name: str (display name)
    - cleanup_delay: number (seconds before an xcodebuild workspace is removed)
    - scratch_root: str (parent directory for scratch workspaces)
    """
    path = Path(config_path)
    if not path.is_file():
        raise ConfigError(f"Config file does not exist: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Config file is not valid YAML: {path}") from e
    if not isinstance(data, dict):
        raise ConfigError("Config must be a mapping/object at the top level.")

    base = path.resolve().parent
    name = data.get("name")
    if name is not None:
        name = str(name)

    return SaverConfig(
        input=_optional_path(data, "input", base),
        output=_optional_path(data, "output", base),
        name=name,
        cleanup_delay=_cleanup_delay(data),
        scratch_root=_optional_path(data, "scratch_root", base),
    )
