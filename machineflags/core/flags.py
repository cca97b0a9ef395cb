"""Driver-declared flag descriptors."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Flag:
    """Base class for a configuration option declared by a driver."""

    name: str
    usage: str = ""
    env_var: str = ""

    def __str__(self) -> str:
        return self.name

    def default(self) -> Any:
        """Return the declared default value."""
        return getattr(self, "value", None)


@dataclass(frozen=True)
class BoolFlag(Flag):
    """Boolean option."""

    value: bool = False


@dataclass(frozen=True)
class IntFlag(Flag):
    """Integer option."""

    value: int = 0


@dataclass(frozen=True)
class StringFlag(Flag):
    """String option."""

    value: str = ""


@dataclass(frozen=True)
class StringSliceFlag(Flag):
    """Repeatable string option."""

    value: list[str] | None = None
