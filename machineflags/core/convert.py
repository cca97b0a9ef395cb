"""Conversion of driver flag descriptors into parser flags."""

from collections.abc import Sequence

from machineflags.core import cliflags, flags


class ConversionError(Exception):
    """A flag descriptor could not be converted."""

    pass


def convert_flag(flag: flags.Flag) -> cliflags.Flag:
    """
    Convert a single driver flag descriptor.

    Args:
        flag: Descriptor declared by a driver

    Returns:
        The matching concrete flag

    Raises:
        ConversionError: If the descriptor kind is not recognized
    """
    if isinstance(flag, flags.BoolFlag):
        if flag.value:
            return cliflags.BoolTFlag(name=flag.name, usage=flag.usage, env_var=flag.env_var)
        return cliflags.BoolFlag(name=flag.name, usage=flag.usage, env_var=flag.env_var)

    if isinstance(flag, flags.IntFlag):
        return cliflags.IntFlag(
            name=flag.name, usage=flag.usage, env_var=flag.env_var, value=flag.value
        )

    if isinstance(flag, flags.StringFlag):
        return cliflags.StringFlag(
            name=flag.name, usage=flag.usage, env_var=flag.env_var, value=flag.value
        )

    if isinstance(flag, flags.StringSliceFlag):
        return cliflags.StringSliceFlag(
            name=flag.name, usage=flag.usage, env_var=flag.env_var, value=flag.value
        )

    name = getattr(flag, "name", flag)
    raise ConversionError(f"Unsupported flag type {type(flag).__name__} for flag: {name}")


def convert_flags(driver_flags: Sequence[flags.Flag]) -> list[cliflags.Flag]:
    """
    Convert driver flag descriptors into parser flags.

    Args:
        driver_flags: Descriptors in declaration order

    Returns:
        Concrete flags in the same order

    Raises:
        ConversionError: If any descriptor kind is not recognized
    """
    return [convert_flag(flag) for flag in driver_flags]
