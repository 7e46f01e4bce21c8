"""Pagination engine: fetch, parse and aggregate results pages."""

import sys
import time
from dataclasses import dataclass, field
from typing import TextIO
from urllib.parse import urlencode

from ddg_search.core.config import settings
from ddg_search.monitoring.logger import get_logger, log_search_event
from ddg_search.scraping.delay import DelayFn, RandomDelay
from ddg_search.scraping.errors import BotDetectedError, SearchError
from ddg_search.scraping.models import SearchResponse, SearchResult, TimeRange
from ddg_search.scraping.parser import is_bot_detection, parse_page
from ddg_search.scraping.transport import CancellationToken, HttpTransport, Transport

logger = get_logger(__name__)


@dataclass
class SearchOptions:
    """Options for one search."""

    # Pagination
    max_pages: int = field(default_factory=lambda: settings.default_pages)  # 0 = unlimited
    max_results: int | None = None

    # Filters
    region: str | None = None
    time_range: TimeRange | None = None

    # Collaborators
    cancel_token: CancellationToken | None = None
    transport: Transport | None = None
    delay: DelayFn | None = None
    stderr: TextIO | None = None

    def __post_init__(self) -> None:
        if self.max_pages < 0:
            raise ValueError("max_pages must be >= 0 (0 for unlimited)")
        if self.max_results is not None and self.max_results < 1:
            raise ValueError("max_results must be a positive integer")
        if self.time_range is not None:
            self.time_range = TimeRange(self.time_range)


def build_search_url(query: str, region: str | None = None, time_range: TimeRange | None = None) -> str:
    """Build the first-page URL for a query.

    Args:
        query: Search terms
        region: Region code (``kl``), e.g. us-en
        time_range: Time filter (``df``)

    Returns:
        Absolute GET URL
    """
    params = {"q": query}
    if region:
        params["kl"] = region
    if time_range:
        params["df"] = TimeRange(time_range).value
    return f"{settings.base_url}?{urlencode(params)}"


async def search(query: str, options: SearchOptions | None = None) -> SearchResponse:
    """Run a search, following "Next" pages until a stop condition is met.

    Pagination stops when a page has no continuation, when it carries the
    end-of-results marker, when ``max_pages`` pages were fetched, when
    ``max_results`` results were collected, or when a later page hits the
    anti-bot interstitial. In the last case the results gathered so far are
    returned.

    Args:
        query: Search terms
        options: Search options

    Returns:
        SearchResponse with results from every fetched page

    Raises:
        BotDetectedError: If the first page is an anti-bot challenge
        HttpError: On a non-success HTTP status for any page
        SearchCancelledError: If the cancellation token fires
    """
    options = options or SearchOptions()
    transport = options.transport or HttpTransport()
    delay = options.delay or RandomDelay()
    stream = options.stderr or sys.stderr
    show_progress = _is_interactive(stream)
    limit = options.max_results

    start_time = time.time()
    all_results: list[SearchResult] = []
    page = 0

    try:
        url = build_search_url(query, options.region, options.time_range)
        logger.info(f"Starting search: {query!r}")
        first_html = await transport.fetch(url, None, options.cancel_token)

        if is_bot_detection(first_html):
            raise BotDetectedError()

        parsed = parse_page(first_html)
        all_results.extend(parsed.results)
        spelling = parsed.spelling
        zero_click = parsed.zero_click
        page += 1
        _report_page(stream, show_progress, page, len(parsed.results), len(all_results))

        while (
            parsed.next_page_data is not None
            and not parsed.no_more_results
            and (options.max_pages == 0 or page < options.max_pages)
            and (limit is None or len(all_results) < limit)
        ):
            await delay()

            html = await transport.fetch(settings.base_url, dict(parsed.next_page_data), options.cancel_token)

            if is_bot_detection(html):
                logger.info(f"Anti-bot detection on page {page + 1}, keeping {len(all_results)} results")
                if show_progress:
                    stream.write("\n")
                    stream.write("Anti-bot detection hit. Returning results collected so far.\n")
                break

            parsed = parse_page(html)
            all_results.extend(parsed.results)
            page += 1
            _report_page(stream, show_progress, page, len(parsed.results), len(all_results))

    except SearchError:
        log_search_event(
            query=query,
            results_count=len(all_results),
            pages=page,
            duration=time.time() - start_time,
            success=False,
        )
        raise

    if show_progress:
        stream.write("\n")

    if limit is not None and len(all_results) > limit:
        all_results = all_results[:limit]

    log_search_event(
        query=query,
        results_count=len(all_results),
        pages=page,
        duration=time.time() - start_time,
    )

    return SearchResponse(
        query=query,
        results=tuple(all_results),
        spelling=spelling,
        zero_click=zero_click,
        pages_scraped=page,
    )


def _report_page(stream: TextIO, show_progress: bool, page: int, count: int, total: int) -> None:
    logger.debug(f"Page {page} | results={count} | total={total}")
    if show_progress:
        stream.write(f"\rPage {page}: {count} results ({total} total)")


def _is_interactive(stream: TextIO) -> bool:
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())
