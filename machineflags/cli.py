"""Command-line interface for machineflags."""

import argparse
import json
import sys
from datetime import date
from pathlib import Path

from machineflags import __version__
from machineflags.core import (
    Context,
    ConversionError,
    DriverError,
    FlagEnvError,
    Output,
    ParsedCommandLine,
    ValidationError,
    convert_flags,
    find_drivers,
    get_driver,
    get_driver_opts,
    load_driver,
    register_flags,
    validate_driver,
    validate_swarm_discovery,
)
from machineflags.core.config import get_config_value, resolve_drivers_dir, resolve_log_dir
from machineflags.core.journal import OUTCOMES, REJECTED, Invocation, InvocationJournal

# Environment variable naming the default driver for create
DRIVER_ENV = "MACHINE_DRIVER"


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="machineflags",
        description="Driver flag registration and option resolution for machine provisioning",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"machineflags {__version__}",
    )
    parser.add_argument(
        "--drivers-dir",
        type=Path,
        default=None,
        help="Directory containing driver manifests (default: ./drivers)",
    )
    parser.add_argument(
        "--log-dir",
        type=Path,
        default=None,
        help="Directory for the invocation journal (default: ~/var/log/machineflags)",
    )
    parser.add_argument(
        "--format",
        choices=["plain", "json"],
        default="plain",
        help="Output format (default: plain)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("drivers", help="List available drivers")

    flags_parser = subparsers.add_parser("flags", help="Show the command-line flags of a driver")
    flags_parser.add_argument("driver", help="Driver name")

    lint_parser = subparsers.add_parser("lint", help="Validate driver manifests")
    lint_parser.add_argument(
        "drivers",
        nargs="*",
        help="Specific manifests to lint (default: all)",
    )

    # Driver flags are only known once the driver is; the rest is parsed in a second pass
    create_cmd_parser = subparsers.add_parser(
        "create",
        help="Resolve driver options for a new machine (dry run)",
        add_help=False,
        allow_abbrev=False,
    )
    create_cmd_parser.add_argument("--driver", "-d", help=f"Driver to use [${DRIVER_ENV}]")

    logs_parser = subparsers.add_parser("logs", help="Show journaled create invocations")
    logs_parser.add_argument("--driver", help="Only invocations using this driver")
    logs_parser.add_argument("--machine", help="Only invocations for this machine")
    logs_parser.add_argument("--outcome", choices=OUTCOMES, help="Only resolved or rejected invocations")
    logs_parser.add_argument(
        "--date",
        type=date.fromisoformat,
        default=None,
        help="UTC day to show, YYYY-MM-DD (default: today)",
    )
    logs_parser.add_argument("--last", type=int, default=None, help="Show only the most recent N")

    return parser


def create_driver_parser(
    driver_name: str | None,
    cli_flags: list,
    context: Context,
) -> argparse.ArgumentParser:
    """
    Create the second-pass parser for create, including driver flags.

    Raises:
        FlagEnvError: If a driver flag's environment variable is unusable
        argparse.ArgumentError: If a driver flag collides with a create option
    """
    parser = argparse.ArgumentParser(
        prog="machineflags create",
        allow_abbrev=False,
        description=f"Resolve options for a new machine using the {driver_name or '<driver>'} driver",
    )
    parser.add_argument("--driver", "-d", help=f"Driver to use [${DRIVER_ENV}]")
    parser.add_argument(
        "--swarm-discovery",
        default="",
        help="Discovery service to use with Swarm (e.g. token://<token>)",
    )
    parser.add_argument("name", help="Machine name")

    if cli_flags:
        group = parser.add_argument_group(f"{driver_name} driver options")
        register_flags(group, cli_flags, context=context)

    return parser


def cmd_drivers(args: argparse.Namespace) -> int:
    """List available drivers."""
    drivers = find_drivers(args.drivers_dir)

    if not drivers:
        print("No drivers found.")
        return 0

    for driver in drivers:
        if args.format == "json":
            print(json.dumps({
                "name": driver.name,
                "description": driver.description,
                "flags": len(driver.flags),
            }))
        else:
            print(f"{driver.name:20} {driver.description}")

    return 0


def cmd_flags(args: argparse.Namespace) -> int:
    """Show the converted flags of a driver."""
    try:
        driver = get_driver(args.drivers_dir, args.driver)
        cli_flags = convert_flags(driver.flags)
    except (DriverError, ConversionError) as e:
        print(str(e), file=sys.stderr)
        return 2

    output = Output()
    output.emit({
        "driver": driver.name,
        "flags": [
            {
                "name": flag.name,
                "kind": type(flag).__name__,
                "default": flag.value,
                "env": flag.env_var,
            }
            for flag in cli_flags
        ],
    })
    output.render(args.format)
    return 0


def cmd_lint(args: argparse.Namespace) -> int:
    """Validate driver manifests."""
    if args.drivers:
        paths = []
        for name in args.drivers:
            path = args.drivers_dir / name
            if not path.suffix:
                path = path.with_suffix(".yaml")
            paths.append(path)
    else:
        paths = sorted(args.drivers_dir.glob("*.yaml")) + sorted(args.drivers_dir.glob("*.yml"))

    results = []
    for path in paths:
        errors: list[str] = []
        warnings: list[str] = []
        try:
            warnings = validate_driver(load_driver(path))
        except DriverError as e:
            errors.append(str(e))
        results.append({"path": str(path), "errors": errors, "warnings": warnings})

    total_errors = sum(len(r["errors"]) for r in results)
    total_warnings = sum(len(r["warnings"]) for r in results)

    if args.format == "json":
        print(json.dumps({"results": results, "errors": total_errors, "warnings": total_warnings}, indent=2))
    else:
        for result in results:
            if result["errors"] or result["warnings"]:
                print(f"\n{result['path']}:")
                for error in result["errors"]:
                    print(f"  ERROR: {error}")
                for warning in result["warnings"]:
                    print(f"  WARNING: {warning}")

        print(f"\nLinted {len(results)} manifest(s): {total_errors} error(s), {total_warnings} warning(s)")

    return 1 if total_errors > 0 else 0


def cmd_create(args: argparse.Namespace, extra: list[str], context: Context | None = None) -> int:
    """Resolve driver options for a new machine without provisioning it."""
    if context is None:
        context = Context()

    driver_name = args.driver or context.get_env(DRIVER_ENV) or get_config_value("driver")

    if not driver_name:
        if "-h" in extra or "--help" in extra:
            create_driver_parser(None, [], context).print_help()
            return 0
        print(f"A driver is required: pass --driver or set ${DRIVER_ENV}", file=sys.stderr)
        return 2

    try:
        driver = get_driver(args.drivers_dir, driver_name)
        cli_flags = convert_flags(driver.flags)
        parser = create_driver_parser(driver.name, cli_flags, context)
    except (DriverError, FlagEnvError, argparse.ArgumentError) as e:
        print(str(e), file=sys.stderr)
        return 2
    except ConversionError as e:
        print(f"Cannot register flags for driver {driver_name}: {e}", file=sys.stderr)
        return 1

    create_args = parser.parse_args(["--driver", driver.name] + extra)

    try:
        validate_swarm_discovery(create_args.swarm_discovery)
    except ValidationError as e:
        InvocationJournal(args.log_dir).record(Invocation(
            machine=create_args.name,
            driver=driver.name,
            outcome=REJECTED,
            swarm_discovery=create_args.swarm_discovery,
            error=str(e),
        ))
        print(str(e), file=sys.stderr)
        return 2

    command_line = ParsedCommandLine(create_args, cli_flags, context=context)
    driver_opts = get_driver_opts(command_line, driver.flags)

    InvocationJournal(args.log_dir).record(Invocation(
        machine=create_args.name,
        driver=driver.name,
        swarm_discovery=create_args.swarm_discovery,
        options=driver_opts.as_dict(),
    ))

    output = Output()
    output.emit({
        "name": create_args.name,
        "driver": driver.name,
        "swarm_discovery": create_args.swarm_discovery,
        "options": driver_opts.as_dict(),
    })
    output.render(args.format)
    return 0


def cmd_logs(args: argparse.Namespace) -> int:
    """Show journaled create invocations."""
    invocations = InvocationJournal(args.log_dir).read(
        day=args.date,
        driver=args.driver,
        machine=args.machine,
        outcome=args.outcome,
        last=args.last,
    )

    if not invocations:
        print("No invocations recorded.")
        return 0

    for invocation in invocations:
        if args.format == "json":
            print(json.dumps(invocation.to_record()))
        else:
            line = f"{invocation.timestamp} {invocation.outcome:8} {invocation.driver:12} {invocation.machine}"
            if invocation.error:
                line += f"  ({invocation.error})"
            print(line)

    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args, extra = parser.parse_known_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    if args.command != "create" and extra:
        parser.error(f"unrecognized arguments: {' '.join(extra)}")

    args.drivers_dir = resolve_drivers_dir(args.drivers_dir)
    args.log_dir = resolve_log_dir(args.log_dir)

    if args.command == "create":
        return cmd_create(args, extra)

    commands = {
        "drivers": cmd_drivers,
        "flags": cmd_flags,
        "lint": cmd_lint,
        "logs": cmd_logs,
    }

    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
