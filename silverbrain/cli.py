"""Command line entry points."""

from __future__ import annotations

import argparse
import logging
import os
from typing import Sequence

from silverbrain.http import start

DEFAULT_DATA_PATH = "~/.silver-brain"
DEFAULT_PORT = 5000
_MAX_PORT_VALUE = (1 << 32) - 1


def _port(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid port: {text!r}") from None
    if not 0 <= value <= _MAX_PORT_VALUE:
        raise argparse.ArgumentTypeError(f"port out of range: {text!r}")
    return value


def _add_start_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-d",
        "--data-path",
        default=None,
        help=f"The path of root data directory. Defaults to {DEFAULT_DATA_PATH}",
    )
    parser.add_argument(
        "-p",
        "--port",
        type=_port,
        default=DEFAULT_PORT,
        help="The port to listen on.",
    )


def build_parser() -> argparse.ArgumentParser:
    """Return the parser of the ``silver-brain`` command."""
    parser = argparse.ArgumentParser(
        prog="silver-brain",
        description="Silver Brain - Your external brain.\n\n"
        "This is the CLI program to manipulate Silver Brain.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    commands = parser.add_subparsers(dest="command", required=True)
    server = commands.add_parser("server", help="Server related commands")
    server_commands = server.add_subparsers(dest="server_command", required=True)
    _add_start_arguments(server_commands.add_parser("start", help="Start the server"))
    return parser


def build_server_parser() -> argparse.ArgumentParser:
    """Return the parser of the ``silver-brain-server`` command."""
    parser = argparse.ArgumentParser(
        prog="silver-brain-server",
        description="Silver Brain Server\n\nStarts a server that serves all sort of clients!",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    commands = parser.add_subparsers(dest="command", required=True)
    _add_start_arguments(commands.add_parser("start", help="Starts the server."))
    return parser


def _run_start(args: argparse.Namespace) -> int:
    data_path = os.path.expanduser(args.data_path or DEFAULT_DATA_PATH)
    start(data_path, args.port)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run the ``silver-brain`` command."""
    args = build_parser().parse_args(argv)
    return _run_start(args)


def server_main(argv: Sequence[str] | None = None) -> int:
    """Run the ``silver-brain-server`` command with debug logging."""
    args = build_server_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG)
    return _run_start(args)