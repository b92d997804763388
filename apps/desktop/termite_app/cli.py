"""Command line entrypoint for the termite terminal."""

from __future__ import annotations

import argparse
import os
import pwd
import shlex
import sys
from dataclasses import dataclass, field
from importlib import metadata

from termite_core.logging_setup import configure_logging, get_logger


TERM_NAME = "xterm-256color"


@dataclass(frozen=True)
class LaunchOptions:
    command: list[str] = field(default_factory=list)
    role: str | None = None
    hold: bool = False
    config_file: str | None = None


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: option parsing failed: {message}\n")


def _installed_version() -> str:
    try:
        return metadata.version("termite")
    except metadata.PackageNotFoundError:
        return "0.1.0"


def default_shell() -> str:
    shell = os.environ.get("SHELL")
    if shell:
        return shell
    try:
        return pwd.getpwuid(os.getuid()).pw_shell or "/bin/sh"
    except KeyError:
        return "/bin/sh"


def command_argv(execute: str | None) -> list[str]:
    """Split --exec the way a shell would, or fall back to the user's shell."""
    if execute is None:
        return [default_shell()]
    argv = shlex.split(execute)
    if not argv:
        raise ValueError("empty command")
    return argv


def build_parser() -> argparse.ArgumentParser:
    parser = _Parser(prog="termite", description="Keyboard-centric terminal")
    parser.add_argument("-v", "--version", action="store_true", help="Version info")
    parser.add_argument("-e", "--exec", dest="execute", default=None, metavar="COMMAND", help="Command to execute")
    parser.add_argument("-r", "--role", default=None, metavar="ROLE", help="The role to use")
    parser.add_argument("-d", "--directory", default=None, metavar="DIRECTORY", help="Change to directory")
    parser.add_argument("--hold", action="store_true", help="Remain open after child process exits")
    parser.add_argument("-c", "--config", dest="config_file", default=None, metavar="CONFIG", help="Path of config file")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"termite {_installed_version()}")
        return 0

    configure_logging()
    logger = get_logger()

    if args.directory:
        try:
            os.chdir(args.directory)
        except OSError as exc:
            print(f"chdir: {exc}", file=sys.stderr)
            return 1

    try:
        command = command_argv(args.execute)
    except ValueError as exc:
        print(f"failed to parse command: {exc}", file=sys.stderr)
        logger.error(f"failed to parse command: {exc}", extra={"event": "bad_command"})
        return 1

    from .app import run_gui

    return run_gui(
        LaunchOptions(
            command=command,
            role=args.role,
            hold=bool(args.hold),
            config_file=args.config_file,
        )
    )


if __name__ == "__main__":
    raise SystemExit(main())
