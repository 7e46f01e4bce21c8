"""Scraping module - Engine, Parser, Transport, Delay policy."""

from .delay import RandomDelay, no_delay
from .engine import SearchOptions, build_search_url, search
from .errors import BotDetectedError, HttpError, RequestError, SearchCancelledError, SearchError
from .models import ParsedPage, SearchResponse, SearchResult, SpellingCorrection, TimeRange, ZeroClick
from .parser import DOMParser, is_bot_detection, parse_page
from .transport import CancellationToken, HttpTransport

__all__ = [
    "BotDetectedError",
    "CancellationToken",
    "DOMParser",
    "HttpError",
    "HttpTransport",
    "ParsedPage",
    "RandomDelay",
    "RequestError",
    "SearchCancelledError",
    "SearchError",
    "SearchOptions",
    "SearchResponse",
    "SearchResult",
    "SpellingCorrection",
    "TimeRange",
    "ZeroClick",
    "build_search_url",
    "is_bot_detection",
    "no_delay",
    "parse_page",
    "search",
]
