from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


def ensure_directory(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def expand_env(value: Any) -> Any:
    if isinstance(value, str):
        return os.path.expandvars(value)
    if isinstance(value, list):
        return [expand_env(item) for item in value]
    if isinstance(value, dict):
        return {key: expand_env(val) for key, val in value.items()}
    return value


def load_yaml_file(path: Path) -> Dict[str, Any]:
    """Load a YAML mapping, expanding environment variables in string values.

    An empty document loads as an empty mapping. A document whose top level is
    not a mapping raises ``ValueError``.
    """
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a mapping at the top level")
    return expand_env(data)


def dump_yaml_file(path: Path, data: Dict[str, Any]) -> None:
    ensure_directory(path.parent)
    with path.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(data, handle, sort_keys=False, allow_unicode=True, default_flow_style=False)


def is_directory_empty(path: Path) -> bool:
    with os.scandir(path) as entries:
        return next(entries, None) is None


def format_relative(path: Optional[Path], root: Path) -> str:
    """Format ``path`` relative to ``root`` when possible.

    Returns the absolute path string when ``path`` lies outside ``root`` and an
    empty string when there is no path at all.
    """
    if path is None:
        return ""
    try:
        relative = path.relative_to(root)
    except ValueError:
        return str(path)
    return str(relative)


def xdg_config_home() -> Path:
    raw = os.getenv("XDG_CONFIG_HOME")
    if raw:
        return Path(raw).expanduser()
    return Path.home() / ".config"
