"""Driver manifest loading and validation."""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from machineflags.core.flags import BoolFlag, Flag, IntFlag, StringFlag, StringSliceFlag


class DriverError(Exception):
    """Error loading or validating a driver manifest."""

    pass


# Manifest type names to descriptor classes
FLAG_TYPES: dict[str, type[Flag]] = {
    "bool": BoolFlag,
    "int": IntFlag,
    "string": StringFlag,
    "stringslice": StringSliceFlag,
}

# Flag names are kebab-case
FLAG_NAME_PATTERN = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")


@dataclass
class Driver:
    """A provisioning driver and the flags it declares."""

    name: str
    description: str
    flags: list[Flag] = field(default_factory=list)
    path: Path | None = None

    def flag_names(self) -> list[str]:
        """Return flag names in declaration order."""
        return [f.name for f in self.flags]


def _check_default(type_name: str, default: Any, source: str) -> Any:
    if type_name == "bool":
        ok = isinstance(default, bool)
    elif type_name == "int":
        ok = isinstance(default, int) and not isinstance(default, bool)
    elif type_name == "string":
        ok = isinstance(default, str)
    else:
        ok = isinstance(default, list) and all(isinstance(v, str) for v in default)

    if not ok:
        raise DriverError(f"Default {default!r} is not a valid {type_name} value: {source}")
    return default


def parse_flag(data: Any, source: str) -> Flag:
    """
    Build a flag descriptor from one manifest entry.

    Args:
        data: Parsed YAML mapping for the flag
        source: Description of where the entry came from, for errors

    Returns:
        Flag descriptor

    Raises:
        DriverError: If the entry is malformed
    """
    if not isinstance(data, dict):
        raise DriverError(f"Flag entry must be a mapping: {source}")
    if "name" not in data:
        raise DriverError(f"Flag missing required field 'name': {source}")

    name = str(data["name"])
    type_name = str(data.get("type", "string")).lower()
    if type_name not in FLAG_TYPES:
        raise DriverError(f"Unknown flag type '{type_name}' for {name}: {source}")

    kwargs: dict[str, Any] = {"name": name}
    for key, attr in (("usage", "usage"), ("env", "env_var")):
        text = data.get(key)
        if text is None:
            continue
        if not isinstance(text, str):
            raise DriverError(f"Field '{key}' must be a string for {name}: {source}")
        kwargs[attr] = text
    if data.get("default") is not None:
        kwargs["value"] = _check_default(type_name, data["default"], f"{name} in {source}")

    return FLAG_TYPES[type_name](**kwargs)


def load_driver(path: Path) -> Driver:
    """
    Load a driver manifest from a YAML file.

    Args:
        path: Path to the manifest

    Returns:
        Loaded Driver object

    Raises:
        DriverError: If file not found or invalid
    """
    if not path.exists():
        raise DriverError(f"Driver manifest not found: {path}")

    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise DriverError(f"Invalid YAML in driver manifest {path}: {e}")

    if not isinstance(data, dict):
        raise DriverError(f"Driver manifest must be a YAML mapping: {path}")

    if "name" not in data:
        raise DriverError(f"Driver manifest missing required field 'name': {path}")
    if "flags" not in data:
        raise DriverError(f"Driver manifest missing required field 'flags': {path}")

    entries = data["flags"] or []
    if not isinstance(entries, list):
        raise DriverError(f"Driver 'flags' must be a list: {path}")

    return Driver(
        name=str(data["name"]),
        description=data.get("description", ""),
        flags=[parse_flag(entry, str(path)) for entry in entries],
        path=path,
    )


def validate_driver(driver: Driver) -> list[str]:
    """
    Validate a driver and return warnings.

    Args:
        driver: Driver to validate

    Returns:
        List of warning messages (empty if valid)
    """
    warnings = []

    if not driver.flags:
        warnings.append(f"Driver '{driver.name}' declares no flags")

    seen: set[str] = set()
    for name in driver.flag_names():
        if name in seen:
            warnings.append(f"Flag '{name}' is declared more than once")
        seen.add(name)

        if not FLAG_NAME_PATTERN.match(name):
            warnings.append(f"Flag '{name}' should be kebab-case")
        elif not name.startswith(f"{driver.name}-"):
            warnings.append(f"Flag '{name}' should be prefixed with '{driver.name}-'")

    return warnings


def find_drivers(directory: Path) -> list[Driver]:
    """
    Find all driver manifests in a directory.

    Args:
        directory: Directory to search

    Returns:
        List of loaded Driver objects, sorted by name
    """
    drivers = []

    if not directory.exists():
        return drivers

    for pattern in ("*.yaml", "*.yml"):
        for path in directory.glob(pattern):
            try:
                drivers.append(load_driver(path))
            except DriverError:
                # Skip invalid manifests
                continue

    return sorted(drivers, key=lambda d: d.name)


def get_driver(directory: Path, name: str) -> Driver:
    """
    Find a driver by name.

    Raises:
        DriverError: If no valid manifest declares that driver
    """
    for driver in find_drivers(directory):
        if driver.name == name:
            return driver
    raise DriverError(f"Driver not found: {name}")
