from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from .app import PokeApp
from .config import DEFAULT_TIMEOUT
from .errors import LoadError
from .http_client import HttpExecutor
from .logging_setup import configure_logging
from .store import load_store

logger = logging.getLogger(__name__)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="poke", description="Interactive HTTP client for .http files.")
    parser.add_argument("file", type=Path, metavar="FILE", help="Path to the .http file.")
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help=f"Per-request timeout in seconds (default: {DEFAULT_TIMEOUT:g}).",
    )
    parser.add_argument(
        "--insecure",
        action="store_true",
        help="Do not verify TLS certificates.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging to poke.log in the current directory.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Write the debug log here instead of ./poke.log (implies --debug).",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    debug = args.debug or args.log_file is not None
    log_path = configure_logging(debug, args.log_file)
    if debug and log_path is None:
        logger.warning("Debug logging requested but log file could not be created.")

    try:
        store = load_store(args.file)
    except LoadError as exc:
        print(f"poke: {exc}", file=sys.stderr)
        return 1

    executor = HttpExecutor(timeout=args.timeout, verify_tls=not args.insecure)
    try:
        PokeApp(store, executor).run()
    except KeyboardInterrupt:
        pass
    return 0
