"""Core machineflags functionality."""

from machineflags.core.context import Context
from machineflags.core.convert import ConversionError, convert_flag, convert_flags
from machineflags.core.drivers import (
    Driver,
    DriverError,
    find_drivers,
    get_driver,
    load_driver,
    validate_driver,
)
from machineflags.core.options import CommandLine, DriverOptions, Getter, get_driver_opts
from machineflags.core.output import Output
from machineflags.core.parser import FlagEnvError, FlagValue, ParsedCommandLine, register_flags
from machineflags.core.swarm import ValidationError, validate_swarm_discovery

__all__ = [
    "CommandLine",
    "Context",
    "ConversionError",
    "Driver",
    "DriverError",
    "DriverOptions",
    "FlagEnvError",
    "FlagValue",
    "Getter",
    "Output",
    "ParsedCommandLine",
    "ValidationError",
    "convert_flag",
    "convert_flags",
    "find_drivers",
    "get_driver",
    "get_driver_opts",
    "load_driver",
    "register_flags",
    "validate_driver",
    "validate_swarm_discovery",
]
