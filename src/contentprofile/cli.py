# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Content Profile CLI.

Usage:
    python -m contentprofile.cli extract [FILE|-] [--url URL] [--indent N] [--json-logs] [-v]
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from contentprofile.config import ExtractionLimits
from contentprofile.errors import ConfigError
from contentprofile.logging_config import configure

logger = logging.getLogger(__name__)


def _read_input(source: str) -> str:
    """Read HTML from a file path, or stdin for ``-``."""
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8", errors="replace")


def cmd_extract(args: argparse.Namespace) -> None:
    """Extract a ContentProfile and print it as JSON."""
    from .extractor import extract
    from .serializer import to_json

    try:
        html = _read_input(args.file)
    except OSError as e:
        print(f"Error: cannot read {args.file}: {e.strerror or e}", file=sys.stderr)
        sys.exit(1)

    try:
        limits = ExtractionLimits.from_env()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    profile = extract(html, page_url=args.url, limits=limits)
    indent = args.indent if args.indent and args.indent > 0 else None
    print(to_json(profile, indent=indent))


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Content Profile CLI",
        prog="python -m contentprofile.cli",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    parser.add_argument("--json-logs", action="store_true", help="Emit logs as JSON lines on stderr")
    subparsers = parser.add_subparsers(dest="command", required=True)

    _extract_epilog = """\
examples:
  %(prog)s page.html                                 Profile a saved page
  %(prog)s page.html --url https://example.com/blog/ Classify with its source URL
  curl -s https://example.com | %(prog)s -            Read HTML from stdin
"""
    p_extract = subparsers.add_parser(
        "extract",
        help="Extract a content profile from HTML",
        epilog=_extract_epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p_extract.add_argument("file", nargs="?", default="-", metavar="FILE", help="HTML file, or - for stdin (default)")
    p_extract.add_argument("--url", type=str, metavar="URL", help="Source URL of the page")
    p_extract.add_argument("--indent", type=int, default=2, metavar="N", help="JSON indentation, 0 for one line")

    commands = {"extract": cmd_extract}

    args = parser.parse_args(argv)

    configure(json_output=args.json_logs, level="DEBUG" if args.verbose else None)

    try:
        commands[args.command](args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(130)


if __name__ == "__main__":
    main()
