"""Search result data models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping


class TimeRange(str, Enum):
    """Time filters accepted by the ``df`` query parameter."""

    DAY = "d"
    WEEK = "w"
    MONTH = "m"
    YEAR = "y"


@dataclass(frozen=True)
class SearchResult:
    """One organic listing."""

    title: str
    url: str
    description: str = ""
    display_url: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "url": self.url,
            "description": self.description,
            "displayUrl": self.display_url,
        }


@dataclass(frozen=True)
class ZeroClick:
    """Direct-answer panel shown above the organic results."""

    heading: str
    url: str
    abstract: str
    image: str | None = None
    source: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "heading": self.heading,
            "url": self.url,
            "abstract": self.abstract,
        }
        if self.image:
            data["image"] = self.image
        if self.source:
            data["source"] = self.source
        return data


@dataclass(frozen=True)
class SpellingCorrection:
    """'Did you mean' suggestion."""

    corrected: str
    original: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"corrected": self.corrected}
        if self.original is not None:
            data["original"] = self.original
        return data


@dataclass(frozen=True)
class ParsedPage:
    """Everything extracted from a single results page.

    ``next_page_data`` holds the hidden form fields needed to request the
    following page, or None when no "Next" control exists.
    ``no_more_results`` is set independently when the page carries the
    end-of-results placeholder.

    ``next_page_data`` is a read-only mapping and is left out of the hash.
    """

    results: tuple[SearchResult, ...] = ()
    spelling: SpellingCorrection | None = None
    zero_click: ZeroClick | None = None
    no_more_results: bool = False
    next_page_data: Mapping[str, str] | None = field(default=None, hash=False)


@dataclass(frozen=True)
class SearchResponse:
    """Results aggregated across every page fetched for one query."""

    query: str
    results: tuple[SearchResult, ...] = ()
    spelling: SpellingCorrection | None = None
    zero_click: ZeroClick | None = None
    pages_scraped: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary.

        Returns:
            Dictionary representation
        """
        return {
            "query": self.query,
            "results": [r.to_dict() for r in self.results],
            "spelling": self.spelling.to_dict() if self.spelling else None,
            "zeroClick": self.zero_click.to_dict() if self.zero_click else None,
            "pagesScraped": self.pages_scraped,
        }
