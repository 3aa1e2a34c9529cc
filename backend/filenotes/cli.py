"""
FileNotes: Command-Line Launcher
===================================

Usage:
    filenotes --host 127.0.0.1 --port 8080 --cache ./notes
    python -m filenotes -H 0.0.0.0 -p 8080 -c /var/lib/filenotes

All three of host, port, and cache (the note directory) are required.
"""

import argparse
import sys
from typing import List, Optional

import uvicorn
from pydantic import ValidationError as SettingsValidationError

from filenotes import __version__
from filenotes.config import Settings
from filenotes.main import create_app


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="filenotes",
        description="Serve plain-text notes from a directory over HTTP.",
    )
    parser.add_argument("-H", "--host", required=True, help="server host")
    parser.add_argument("-p", "--port", required=True, type=int, help="server port")
    parser.add_argument(
        "-c", "--cache", required=True, metavar="PATH",
        help="directory holding the notes (created if missing)",
    )
    parser.add_argument(
        "--log-level", default="INFO",
        help="DEBUG, INFO, WARNING, ERROR or CRITICAL (default: INFO)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def settings_from_args(argv: Optional[List[str]] = None) -> Settings:
    """Parse argv into Settings; argparse exits with status 2 on bad input."""
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return Settings(
            host=args.host,
            port=args.port,
            storage_root=args.cache,
            log_level=args.log_level,
        )
    except SettingsValidationError as e:
        parser.error(str(e))


def main(argv: Optional[List[str]] = None) -> None:
    settings = settings_from_args(argv)
    app = create_app(settings)
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    sys.exit(main())
