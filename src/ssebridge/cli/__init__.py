"""ssebridge CLI — stream a URL's events to stdout as JSON lines.

Entry point registered as ``ssebridge`` in ``pyproject.toml``::

    [project.scripts]
    ssebridge = "ssebridge.cli:main"
"""

import argparse
import sys

from ssebridge.config import DEFAULT_IDLE_TIMEOUT


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``ssebridge`` command."""
    parser = argparse.ArgumentParser(
        prog="ssebridge",
        description="ssebridge — a single-connection Server-Sent Events client.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- ssebridge listen -------------------------------------------------
    listen_parser = subparsers.add_parser("listen", help="Connect and print events")
    listen_parser.add_argument("url", help="SSE endpoint URL")
    listen_parser.add_argument(
        "--auth",
        default=None,
        help="Authorization header value, sent verbatim (e.g. 'Bearer abc123')",
    )
    listen_parser.add_argument(
        "--idle-timeout",
        type=float,
        default=DEFAULT_IDLE_TIMEOUT,
        help="Seconds without data before the connection is declared dead",
    )
    listen_parser.add_argument(
        "--log-level",
        default="warning",
        choices=["debug", "info", "warning", "error"],
        help="Log verbosity (logs go to stderr)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "listen":
        from ssebridge.cli._listen import run_listen

        sys.exit(run_listen(args))
