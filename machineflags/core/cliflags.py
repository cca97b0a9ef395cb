"""Concrete flags registered with the command-line parser.

Booleans come in two kinds: ``BoolFlag`` is off unless passed, ``BoolTFlag``
is on unless turned off. The parser adapter in ``machineflags.core.parser``
decides how each kind maps onto argparse actions.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Flag:
    """Base class for parser-facing flags."""

    name: str
    usage: str = ""
    env_var: str = ""


@dataclass(frozen=True)
class BoolFlag(Flag):
    """Boolean flag that defaults to false."""

    @property
    def value(self) -> bool:
        return False


@dataclass(frozen=True)
class BoolTFlag(Flag):
    """Boolean flag that defaults to true."""

    @property
    def value(self) -> bool:
        return True


@dataclass(frozen=True)
class IntFlag(Flag):
    """Integer flag."""

    value: int = 0


@dataclass(frozen=True)
class StringFlag(Flag):
    """String flag."""

    value: str = ""


@dataclass(frozen=True)
class StringSliceFlag(Flag):
    """Flag that may be given several times, collecting strings."""

    value: list[str] | None = None
