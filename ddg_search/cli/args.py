"""Command-line argument parsing and validation."""

import argparse
import re
import sys
from dataclasses import dataclass
from typing import NoReturn

from ddg_search.cli.usage import usage
from ddg_search.core.config import settings
from ddg_search.output.formatters import FORMATTERS
from ddg_search.scraping.models import TimeRange

SUPPORTED_FORMATS = list(FORMATTERS)
TIME_RANGES = [t.value for t in TimeRange]


@dataclass
class CliArgs:
    """Validated command-line arguments."""

    query: str
    max_pages: int  # 0 = unlimited
    max_results: int | None
    format: str = "json"
    region: str | None = None
    time_range: TimeRange | None = None
    verbose: bool = False


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports errors as ``Error: ...`` and exits 1."""

    def error(self, message: str) -> NoReturn:
        _fail(f"Error: {message}")


def _build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(prog="ddg-search", add_help=False)
    parser.add_argument("query", nargs="*")
    parser.add_argument("-f", "--format", default="json")
    parser.add_argument("-p", "--pages")
    parser.add_argument("-n", "--max-results")
    parser.add_argument("-r", "--region")
    parser.add_argument("-t", "--time")
    parser.add_argument("-v", "--verbose", action="store_true")
    parser.add_argument("-h", "--help", action="store_true")
    return parser


def parse_cli_args(argv: list[str] | None = None) -> CliArgs:
    """Parse and validate arguments.

    Exits with status 1 after printing a message on stderr when the query is
    missing, help was requested or a value is invalid.

    Args:
        argv: Arguments without the program name (defaults to sys.argv[1:])

    Returns:
        CliArgs
    """
    args = _build_parser().parse_intermixed_args(sys.argv[1:] if argv is None else argv)

    if args.help or not args.query:
        usage()

    if args.format not in SUPPORTED_FORMATS:
        _fail(f"Unknown format: {args.format}. Supported: {', '.join(SUPPORTED_FORMATS)}")

    max_pages = settings.default_pages
    if args.pages is not None:
        max_pages = _parse_int(args.pages)
        if max_pages is None or max_pages < 0:
            _fail("--pages must be a non-negative integer (0 for unlimited)")

    max_results = None
    if args.max_results is not None:
        max_results = _parse_int(args.max_results)
        if max_results is None or max_results < 1:
            _fail("--max-results must be a positive integer")

    time_range = None
    if args.time:
        if args.time not in TIME_RANGES:
            _fail(f"Unknown time range: {', '.join(TIME_RANGES)}")
        time_range = TimeRange(args.time)

    return CliArgs(
        query=" ".join(args.query),
        max_pages=max_pages,
        max_results=max_results,
        format=args.format,
        region=args.region or None,
        time_range=time_range,
        verbose=args.verbose,
    )


def _parse_int(value: str) -> int | None:
    # plain digits only; int() would also take "1_000" and " 3 "
    if not re.fullmatch(r"-?\d+", value):
        return None
    return int(value)


def _fail(message: str) -> NoReturn:
    print(message, file=sys.stderr)
    sys.exit(1)
