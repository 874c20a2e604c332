import argparse
import signal
import sys
from types import ModuleType
from typing import Any

from apps.cli.commands import health, ingest, search, setup
from entity_search.logging import LogLevel, setup_logging

COMMANDS: list[ModuleType] = [
    health,
    ingest,
    search,
    setup,
]

COMMON_ARGUMENTS = [
    {
        "name": "log-level",
        "type": str,
        "required": False,
        "choices": [level.value for level in LogLevel],
        "default": LogLevel.WARNING.value,
        "help": "Set the logging level (default: WARNING)",
    },
    {
        "name": "no-timestamp",
        "action": "store_true",
        "required": False,
        "help": "Disable timestamps in log output",
    },
]


def on_interrupt(sig: int, _: Any) -> None:
    """Exit quietly on Ctrl+C; chunks already sent stay indexed."""
    print("\nInterrupted\n", file=sys.stderr)
    sys.exit(130)


def validate_command(command: Any) -> None:
    """
    Check that a command module exposes DEFINITION and main.

    Raises:
        ValueError: If the module is not a valid command
    """
    definition = getattr(command, "DEFINITION", None)
    if not isinstance(definition, dict):
        raise ValueError(f"Command {command} must define a DEFINITION dictionary")
    if not callable(getattr(command, "main", None)):
        raise ValueError(f"Command {command} must define a callable main")

    missing = {"name", "description", "arguments"} - definition.keys()
    if missing:
        raise ValueError(f"Command {command} DEFINITION is missing {sorted(missing)}")
    for argument in definition["arguments"]:
        if "name" not in argument:
            raise ValueError(f"Command {definition['name']} has an argument without a 'name'")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Entity search CLI for OpenSearch indexes")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    for command in COMMANDS:
        validate_command(command)
        definition = command.DEFINITION

        command_parser = subparsers.add_parser(definition["name"], help=definition["description"])

        # Flags are listed alphabetically in --help
        for argument in sorted(
            [*COMMON_ARGUMENTS, *definition["arguments"]], key=lambda x: x["name"]
        ):
            options = {k: v for k, v in argument.items() if k != "name"}
            command_parser.add_argument(f"--{argument['name']}", **options)

    return parser


def main(argv: list[str] | None = None) -> None:
    signal.signal(signal.SIGINT, on_interrupt)

    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(0)

    setup_logging(level=args.log_level, include_timestamp=not args.no_timestamp)

    command = next(c for c in COMMANDS if c.DEFINITION["name"] == args.command)
    accepted = {argument["name"].replace("-", "_") for argument in command.DEFINITION["arguments"]}
    command.main(**{key: value for key, value in vars(args).items() if key in accepted})
    sys.exit(0)


if __name__ == "__main__":
    main()
