"""Configuration loading with layered overrides."""

from pathlib import Path
from typing import Any

import yaml

PROJECT_CONFIG = ".machineflags.yaml"


def user_config_path() -> Path:
    """Return the per-user config file path."""
    return Path.home() / ".config" / "machineflags" / "config.yaml"


def load_config_file(path: Path) -> dict[str, Any]:
    """Load a YAML config file if it exists."""
    if not path.exists():
        return {}
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError):
        return {}
    return data if isinstance(data, dict) else {}


def get_config_value(key: str) -> Any | None:
    """Get config value with project -> user -> None precedence."""
    for path in (Path(PROJECT_CONFIG), user_config_path()):
        data = load_config_file(path)
        if key in data:
            return data[key]

    return None


def resolve_drivers_dir(override: Path | None = None) -> Path:
    """Resolve the driver manifest directory: override, config, then ./drivers."""
    if override is not None:
        return override

    configured = get_config_value("drivers_dir")
    if configured:
        return Path(configured).expanduser()

    return Path.cwd() / "drivers"


def resolve_log_dir(override: Path | None = None) -> Path | None:
    """Resolve the journal directory; None means the journal default."""
    if override is not None:
        return override

    configured = get_config_value("log_dir")
    if configured:
        return Path(configured).expanduser()

    return None
