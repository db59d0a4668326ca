# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Configuration loading with install-level -> project-level precedence."""

from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import Any

import yaml

_CONFIG_DIRNAME = ".dockwire"
_CONFIG_FILENAME = "dockwire.yaml"


@dataclasses.dataclass(frozen=True)
class DockwireConfig:
    """Resolved dockwire configuration."""

    socket: str | None = None
    timeout: float = 60.0
    auto_log: bool = False
    log_dir: str = ""


def load_config(project_root: Path | None = None) -> DockwireConfig:
    """Load configuration with precedence: project > install > defaults.

    1. Start with defaults
    2. Overlay install-level ``~/.dockwire/dockwire.yaml`` (if exists)
    3. Overlay project-level ``.dockwire/dockwire.yaml`` (if exists)
    """
    overrides: dict[str, Any] = {}

    install_config = Path.home() / _CONFIG_DIRNAME / _CONFIG_FILENAME
    if install_config.is_file():
        _merge_yaml(overrides, install_config)

    if project_root is not None:
        project_config = project_root / _CONFIG_DIRNAME / _CONFIG_FILENAME
        if project_config.is_file():
            _merge_yaml(overrides, project_config)

    return _build_config(overrides)


def default_log_dir() -> Path:
    """Where request history goes when ``log_dir`` is not set."""
    return Path.home() / _CONFIG_DIRNAME / "logs"


def _merge_yaml(target: dict[str, Any], path: Path) -> None:
    """Parse a YAML file and merge its values into *target*."""
    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError:
        return
    if not isinstance(data, dict):
        return

    for key, value in data.items():
        if key == "logging" and isinstance(value, dict):
            # logging: {auto_log: ..., log_dir: ...} sits at the top level here
            target.update(value)
        else:
            target[key] = value


def _build_config(overrides: dict[str, Any]) -> DockwireConfig:
    """Build a ``DockwireConfig`` from a dict of overrides."""
    field_names = {f.name for f in dataclasses.fields(DockwireConfig)}
    filtered = {
        k: v for k, v in overrides.items() if k in field_names and _valid_value(k, v)
    }
    if "timeout" in filtered:
        filtered["timeout"] = float(filtered["timeout"])
    return DockwireConfig(**filtered)


def _valid_value(key: str, value: Any) -> bool:
    """Whether *value* has the right type for config field *key*."""
    if key == "timeout":
        return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0
    if key == "auto_log":
        return isinstance(value, bool)
    if key == "socket":
        return value is None or isinstance(value, str)
    return isinstance(value, str)
