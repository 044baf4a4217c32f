"""CLI entrypoint: ``bootwrap [options] [--] [command ...]``."""

from __future__ import annotations

import argparse

from bootwrap.main import run


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bootwrap",
        description="Launch one child process, relay its streams and mirror its exit code",
    )
    parser.add_argument("--log-level", help="Diagnostic log level (default: INFO)")
    parser.add_argument("--log-format", choices=["console", "json"], help="Diagnostic log format")
    parser.add_argument("--name", help="Display name for the child in diagnostics")
    parser.add_argument(
        "command",
        nargs=argparse.REMAINDER,
        help="Command to run instead of the configured one",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    command = list(args.command)
    if command and command[0] == "--":
        command = command[1:]

    run(command or None, log_level=args.log_level, log_format=args.log_format, name=args.name)


if __name__ == "__main__":
    main()
