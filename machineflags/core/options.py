"""Extraction of parsed flag values into driver options."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from types import MappingProxyType
from typing import Any, Protocol, runtime_checkable

from machineflags.core import flags


@runtime_checkable
class Getter(Protocol):
    """A parsed flag value that can report its current value."""

    def get(self) -> Any: ...


class CommandLine(Protocol):
    """
    Parsed command-line state, keyed by flag name.

    Scalar flags are exposed through ``generic``, whose entries are usable
    when they satisfy ``Getter``. Repeatable string flags are not getters and
    are read through ``string_slice`` instead.
    """

    def generic(self, name: str) -> Any | None: ...

    def string_slice(self, name: str) -> list[str] | None: ...


class DriverOptions(Mapping[str, Any]):
    """Read-only option values handed to a driver."""

    def __init__(self, values: Mapping[str, Any] | None = None):
        self._values = MappingProxyType(dict(values or {}))

    def __getitem__(self, name: str) -> Any:
        return self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"DriverOptions({dict(self._values)!r})"

    def bool(self, name: str) -> bool:
        """Return a boolean option, False if unset."""
        value = self._values.get(name)
        return value if isinstance(value, bool) else False

    def int(self, name: str) -> int:
        """Return an integer option, 0 if unset."""
        value = self._values.get(name)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        return 0

    def string(self, name: str) -> str:
        """Return a string option, empty if unset."""
        value = self._values.get(name)
        return value if isinstance(value, str) else ""

    def string_slice(self, name: str) -> list[str]:
        """Return a list option, empty if unset."""
        value = self._values.get(name)
        return list(value) if isinstance(value, list) else []

    def as_dict(self) -> dict[str, Any]:
        """Return a plain copy of all values."""
        return {
            name: list(value) if isinstance(value, list) else value
            for name, value in self._values.items()
        }


# Zero values for scalar descriptor kinds, checked in order.
_SCALAR_KINDS: tuple[tuple[type[flags.Flag], type, Any], ...] = (
    (flags.BoolFlag, bool, False),
    (flags.IntFlag, int, 0),
    (flags.StringFlag, str, ""),
)


def _read_scalar(command_line: CommandLine, name: str, kind: type, zero: Any) -> Any:
    entry = command_line.generic(name)
    # Mappings have a get() that needs a key
    if isinstance(entry, Mapping) or not isinstance(entry, Getter):
        return zero

    value = entry.get()
    if kind is int and isinstance(value, bool):
        return zero
    return value if isinstance(value, kind) else zero


def _read_string_slice(command_line: CommandLine, name: str) -> list[str]:
    value = command_line.string_slice(name)
    if value is None:
        return []
    return list(value)


def get_driver_opts(
    command_line: CommandLine,
    driver_flags: Sequence[flags.Flag],
) -> DriverOptions:
    """
    Read the values of a driver's flags from the parsed command line.

    Missing entries resolve to the type's zero value rather than the
    descriptor default; the parser has already applied defaults to anything
    it returns.

    Args:
        command_line: Parsed command-line state
        driver_flags: Descriptors declared by the driver

    Returns:
        DriverOptions with one entry per recognized descriptor
    """
    values: dict[str, Any] = {}

    for flag in driver_flags:
        if isinstance(flag, flags.StringSliceFlag):
            values[flag.name] = _read_string_slice(command_line, flag.name)
            continue

        for descriptor_kind, kind, zero in _SCALAR_KINDS:
            if isinstance(flag, descriptor_kind):
                values[flag.name] = _read_scalar(command_line, flag.name, kind, zero)
                break

    return DriverOptions(values)
