"""ddg-search command entry point."""

import asyncio
import signal
import sys
from typing import Any, Awaitable, Callable, TextIO

from ddg_search.cli.args import parse_cli_args
from ddg_search.monitoring.logger import get_logger, setup_logging
from ddg_search.output.formatters import FORMATTERS
from ddg_search.scraping.engine import SearchOptions, search
from ddg_search.scraping.errors import SearchCancelledError
from ddg_search.scraping.models import SearchResponse
from ddg_search.scraping.transport import CancellationToken

logger = get_logger(__name__)

SearchFn = Callable[[str, SearchOptions], Awaitable[SearchResponse]]

EXIT_ERROR = 1
EXIT_CANCELLED = 130


async def run(
    argv: list[str] | None = None,
    *,
    search_impl: SearchFn = search,
    stdout: TextIO | None = None,
    cancel_token: CancellationToken | None = None,
) -> int:
    """Parse arguments, run the search and write the formatted output.

    Args:
        argv: Arguments without the program name
        search_impl: Search coroutine (injectable for tests)
        stdout: Output stream (defaults to sys.stdout)
        cancel_token: Token cancelling the search

    Returns:
        Process exit code
    """
    args = parse_cli_args(argv)
    stdout = stdout or sys.stdout

    if args.verbose:
        setup_logging("DEBUG")

    options = SearchOptions(
        max_pages=args.max_pages,
        max_results=args.max_results,
        region=args.region,
        time_range=args.time_range,
        cancel_token=cancel_token,
    )

    try:
        data = await search_impl(args.query, options)
        output = FORMATTERS[args.format](data)
    except SearchCancelledError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_CANCELLED
    except Exception as e:
        logger.opt(exception=e).debug("Search failed")
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    stdout.write(output + "\n")
    return 0


async def _run_with_interrupt(argv: list[str] | None, **run_kwargs: Any) -> int:
    token = CancellationToken()
    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGINT, token.cancel)
    except (NotImplementedError, RuntimeError):
        # no signal handler support on this platform/loop
        return await run(argv, cancel_token=token, **run_kwargs)

    try:
        return await run(argv, cancel_token=token, **run_kwargs)
    finally:
        loop.remove_signal_handler(signal.SIGINT)


def main(argv: list[str] | None = None) -> None:
    """Console script entry point."""
    setup_logging()
    sys.exit(asyncio.run(_run_with_interrupt(argv)))


if __name__ == "__main__":
    main()
