"""Registration of concrete flags with argparse and access to parsed values."""

import argparse
from collections.abc import Sequence
from typing import Any

from machineflags.core import cliflags
from machineflags.core.context import Context


class FlagEnvError(Exception):
    """Environment variable bound to a flag holds an unusable value."""

    pass


TRUE_VALUES = {"1", "t", "true", "yes", "on"}
FALSE_VALUES = {"0", "f", "false", "no", "off"}


def parse_bool(text: str) -> bool:
    """
    Parse a boolean from environment text.

    Raises:
        ValueError: If text is not a recognized boolean
    """
    lowered = text.strip().lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    raise ValueError(f"invalid boolean: {text!r}")


def parse_slice(text: str) -> list[str]:
    """Split comma separated environment text into a list."""
    return [part.strip() for part in text.split(",") if part.strip()]


def _help_text(flag: cliflags.Flag) -> str:
    # argparse applies %-formatting to help strings
    usage = flag.usage.replace("%", "%%")
    if flag.env_var:
        return f"{usage} [${flag.env_var}]".lstrip()
    return usage


def _env_default(flag: cliflags.Flag, context: Context) -> Any:
    """Return the flag default, overridden by its bound environment variable."""
    default = flag.value
    if not flag.env_var:
        return default

    raw = context.get_env(flag.env_var)
    if raw is None:
        return default

    try:
        if isinstance(flag, (cliflags.BoolFlag, cliflags.BoolTFlag)):
            return parse_bool(raw)
        if isinstance(flag, cliflags.IntFlag):
            return int(raw.strip())
        if isinstance(flag, cliflags.StringSliceFlag):
            return parse_slice(raw)
    except ValueError as e:
        raise FlagEnvError(
            f"Could not parse ${flag.env_var}={raw!r} for flag --{flag.name}: {e}"
        ) from e

    return raw


def register_flags(
    parser: argparse.ArgumentParser,
    cli_flags: Sequence[cliflags.Flag],
    context: Context | None = None,
) -> None:
    """
    Add concrete flags to an argparse parser.

    Args:
        parser: Parser (or argument group) to add arguments to
        cli_flags: Flags in registration order
        context: Execution context (for testing)

    Raises:
        FlagEnvError: If a bound environment variable cannot be parsed
    """
    if context is None:
        context = Context()

    for flag in cli_flags:
        option = f"--{flag.name}"
        default = _env_default(flag, context)
        help_text = _help_text(flag)

        if isinstance(flag, cliflags.BoolTFlag):
            parser.add_argument(
                option,
                dest=flag.name,
                action=argparse.BooleanOptionalAction,
                default=default,
                help=help_text,
            )
        elif isinstance(flag, cliflags.BoolFlag):
            parser.add_argument(
                option, dest=flag.name, action="store_true", default=default, help=help_text
            )
        elif isinstance(flag, cliflags.IntFlag):
            parser.add_argument(
                option, dest=flag.name, type=int, default=default, help=help_text
            )
        elif isinstance(flag, cliflags.StringSliceFlag):
            # append would extend a list default in place; defaults are applied after parsing
            parser.add_argument(
                option, dest=flag.name, action="append", default=None, help=help_text
            )
        else:
            parser.add_argument(option, dest=flag.name, default=default, help=help_text)


class FlagValue:
    """Parsed value of a scalar flag."""

    def __init__(self, value: Any):
        self._value = value

    def get(self) -> Any:
        """Return the parsed value."""
        return self._value

    def __repr__(self) -> str:
        return f"FlagValue({self._value!r})"


class ParsedCommandLine:
    """
    Command-line accessor over an argparse namespace.

    Only flags registered through ``register_flags`` are visible.
    """

    def __init__(
        self,
        namespace: argparse.Namespace,
        cli_flags: Sequence[cliflags.Flag],
        context: Context | None = None,
    ):
        self.namespace = namespace
        self._flags = {flag.name: flag for flag in cli_flags}
        self._context = context or Context()

    def names(self) -> list[str]:
        """Return the names of the registered flags."""
        return list(self._flags)

    def generic(self, name: str) -> FlagValue | None:
        """Return a getter for a scalar flag, or None."""
        flag = self._flags.get(name)
        if flag is None or isinstance(flag, cliflags.StringSliceFlag):
            return None
        if not hasattr(self.namespace, name):
            return None
        return FlagValue(getattr(self.namespace, name))

    def string_slice(self, name: str) -> list[str] | None:
        """Return the values of a repeatable flag, falling back to its default."""
        flag = self._flags.get(name)
        if not isinstance(flag, cliflags.StringSliceFlag):
            return None

        values = getattr(self.namespace, name, None)
        if values is not None:
            return list(values)

        default = _env_default(flag, self._context)
        return list(default) if default is not None else None
