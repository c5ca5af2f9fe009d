"""
NoteStore — Command-Line Entry Point
======================================

What:  Parses the server options, builds Settings, and runs uvicorn.
Why:   Host, port and storage directory are required. The process must refuse
       to start, before binding any socket, when one of them is missing.

Usage:
    notestore -h 127.0.0.1 -p 8080 -c ./notes
    python -m notestore --host 0.0.0.0 --port 8080 --cache /var/lib/notes

`-h` is the host option, so help lives on `--help` only.
"""

import argparse
from typing import List, Optional

import pydantic
import uvicorn

from notestore import __version__
from notestore.config import Settings
from notestore.main import create_app


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="notestore",
        description="Serve plain-text notes stored as .txt files over HTTP.",
        add_help=False,
    )
    parser.add_argument("-h", "--host", help="address to bind the server to (required)")
    parser.add_argument("-p", "--port", help="port to bind the server to (required)")
    parser.add_argument("-c", "--cache", help="directory holding the note files (required)")
    parser.add_argument(
        "--log-level",
        default=None,
        help="DEBUG, INFO, WARNING, ERROR or CRITICAL (default: INFO)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--help", action="help", help="show this help message and exit")
    return parser


def load_settings(argv: Optional[List[str]] = None) -> Settings:
    """
    Turn command-line arguments into a validated Settings object.

    Exits the process (status 2, diagnostic on stderr) when a required option
    is missing or a value fails validation.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    required = (("--host", args.host), ("--port", args.port), ("--cache", args.cache))
    missing = [flag for flag, value in required if not value]
    if missing:
        parser.error(f"missing required options: {', '.join(missing)}")

    overrides = {}
    if args.log_level:
        overrides["log_level"] = args.log_level

    try:
        return Settings(host=args.host, port=args.port, storage_dir=args.cache, **overrides)
    except pydantic.ValidationError as e:
        parser.error(f"invalid configuration:\n{e}")


def main(argv: Optional[List[str]] = None) -> None:
    settings = load_settings(argv)
    app = create_app(settings)
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
