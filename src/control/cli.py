"""Command-line surface: run the application or remote-control a running one."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, TextIO

from contracts.bus_protocol import U32_MAX

from .client import DEFAULT_EXTEND_SECONDS, ControlClient
from .errors import ControlCallError, ControlNotRunningError
from .labels import resolve_language

NOT_RUNNING_MESSAGE = "Pomodoro is not running. Start the application first."

_CONFIRMATIONS = {
    "toggle": "Timer toggled.",
    "start": "Timer started.",
    "stop": "Timer stopped.",
    "skip": "Session skipped.",
    "reset": "Timer reset.",
}


def _u32(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError as error:
        raise argparse.ArgumentTypeError(f"invalid seconds value: {raw!r}") from error
    if not 0 <= value <= U32_MAX:
        raise argparse.ArgumentTypeError(f"seconds must be in [0, {U32_MAX}]")
    return value


def _add_common_options(parser: argparse.ArgumentParser, *, suppress: bool = False) -> None:
    # Subcommand copies must not overwrite values given before the command.
    config_default = argparse.SUPPRESS if suppress else None
    verbose_default = argparse.SUPPRESS if suppress else False
    parser.add_argument("--config", default=config_default, help="path to config.toml")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=verbose_default,
        help="enable debug logging",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pomodoro",
        description=(
            "Pomodoro timer. Without a command the application starts; "
            "with a command the running instance is controlled over D-Bus."
        ),
    )
    _add_common_options(parser)

    commands = parser.add_subparsers(dest="command", metavar="COMMAND")

    def add_command(name: str, help_text: str) -> argparse.ArgumentParser:
        command = commands.add_parser(name, help=help_text)
        _add_common_options(command, suppress=True)
        return command

    add_command("toggle", "start or pause the timer")
    add_command("start", "start the timer")
    add_command("stop", "stop the timer")
    add_command("skip", "skip the current session")
    add_command("reset", "reset the timer")
    extend = add_command(
        "extend",
        f"add time to the timer (default {DEFAULT_EXTEND_SECONDS} seconds)",
    )
    extend.add_argument(
        "seconds",
        nargs="?",
        type=_u32,
        default=DEFAULT_EXTEND_SECONDS,
    )
    add_command("status", "show the timer status")
    return parser


def run_command(
    args: argparse.Namespace,
    *,
    client: Optional[ControlClient] = None,
    language: Optional[str] = None,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> int:
    """Execute one client command; returns the process exit code."""
    out = stdout or sys.stdout
    err = stderr or sys.stderr
    client = client or ControlClient(logger=logging.getLogger("control.client"))

    try:
        if args.command == "status":
            status = client.status()
            print(status.format(language or resolve_language()), file=out)
        elif args.command == "extend":
            client.send("extend", seconds=args.seconds)
            print(f"Timer extended by {args.seconds} seconds.", file=out)
        else:
            client.send(args.command)
            print(_CONFIRMATIONS[args.command], file=out)
    except ControlNotRunningError:
        print(NOT_RUNNING_MESSAGE, file=err)
        return 1
    except ControlCallError as error:
        print(f"D-Bus error: {error}", file=err)
        return 1

    return 0

