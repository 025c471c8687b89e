"""cputime - command-line entry point."""

import argparse
import logging
import sys
from collections.abc import Sequence
from dataclasses import dataclass

from cputime.collectors import UsageCollector
from cputime.report import render_report
from cputime.runner import ProcessRunner, RunError

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(message)s"
LOG_DATE_FORMAT = "%Y/%m/%d %H:%M:%S"


@dataclass(slots=True, frozen=True)
class CliConfig:
    """Explicit configuration for one cputime invocation."""

    prog: str = "cputime"
    # Return the child's exit code instead of always succeeding.
    propagate_exit_code: bool = False
    collector: UsageCollector | None = None
    log_level: int = logging.WARNING


@dataclass(slots=True, frozen=True)
class Invocation:
    """Parsed command line: the command to run and its arguments."""

    command: tuple[str, ...]


class UsageError(Exception):
    """The command line can't be acted upon; show the usage text."""

    def __init__(self, usage: str, help_requested: bool = False) -> None:
        super().__init__("missing command" if not help_requested else "help requested")
        self.usage = usage
        self.help_requested = help_requested


def build_parser(config: CliConfig) -> argparse.ArgumentParser:
    """Build a fresh argument parser for ``config``."""
    parser = argparse.ArgumentParser(
        prog=config.prog,
        usage="%(prog)s [flags...] command [args...]",
        description=(
            "Run a command, then print its wall time and CPU usage "
            "(user, system and total) to stderr."
        ),
        add_help=False,
    )
    parser.add_argument(
        "command",
        nargs=argparse.REMAINDER,
        help="command to run, followed by its arguments",
    )
    flags = parser.add_argument_group("flags")
    flags.add_argument(
        "-h",
        "--help",
        action="store_true",
        help="show this help message and exit",
    )
    return parser


def parse_args(argv: Sequence[str] | None, config: CliConfig) -> Invocation:
    """
    Split the tool's arguments into the command to run.

    Everything from the first positional argument on belongs to the
    command, including arguments that look like flags.

    Raises:
        UsageError: If help was requested or no command was given.
    """
    parser = build_parser(config)
    args = parser.parse_args(sys.argv[1:] if argv is None else list(argv))

    command = list(args.command)
    if command and command[0] == "--":
        command = command[1:]

    if args.help:
        raise UsageError(parser.format_help(), help_requested=True)
    if not command:
        raise UsageError(parser.format_help())
    return Invocation(command=tuple(command))


def configure_logging(level: int = logging.WARNING) -> logging.Logger:
    """
    Send cputime log records to stderr in a ``log``-style format.

    Calling this again replaces the handler rather than adding another.
    """
    package_logger = logging.getLogger("cputime")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    return package_logger


def exit_status(returncode: int) -> int:
    """Map a child's return code to a shell-style exit status."""
    if returncode < 0:
        return 128 - returncode
    return returncode


def main(argv: Sequence[str] | None = None, config: CliConfig | None = None) -> int:
    """Run cputime and return its exit status."""
    config = config if config is not None else CliConfig()
    configure_logging(config.log_level)

    try:
        invocation = parse_args(argv, config)
    except UsageError as e:
        sys.stderr.write(e.usage)
        return 0 if e.help_requested else 1

    runner = ProcessRunner(config.collector)
    try:
        result = runner.run(invocation.command)
    except RunError as e:
        logger.critical("Run: %s", e)
        return 1
    except KeyboardInterrupt:
        return 130

    sys.stderr.write(render_report(result))
    sys.stderr.flush()

    if config.propagate_exit_code:
        return exit_status(result.returncode)
    return 0


def run() -> None:
    """Console-script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
