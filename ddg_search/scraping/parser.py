"""DOM parsing of DuckDuckGo HTML results pages with BeautifulSoup."""

import copy
from types import MappingProxyType
from typing import Mapping

from bs4 import BeautifulSoup, Tag

from ddg_search.monitoring.logger import get_logger
from ddg_search.scraping.models import ParsedPage, SearchResult, SpellingCorrection, ZeroClick

logger = get_logger(__name__)

# Substrings only present on the anomaly / challenge interstitial
BOT_DETECTION_MARKERS = ("anomaly-modal", "challenge-form")

NEXT_PAGE_LABEL = "Next"

RESULT_SELECTOR = ".result.web-result:not(.result--ad):not(.result--no-result)"
NO_RESULT_SELECTOR = ".result--no-result"


class DOMParser:
    """DOM parser using BeautifulSoup."""

    def __init__(self, html: str, parser: str = "lxml") -> None:
        """Initialize parser with HTML content.

        Args:
            html: HTML content to parse
            parser: BeautifulSoup parser (lxml, html.parser, html5lib)
        """
        self.soup = BeautifulSoup(html, parser)
        self._parser = parser

    def select(self, selector: str, scope: Tag | None = None) -> list[Tag]:
        """Select elements using CSS selector.

        Args:
            selector: CSS selector
            scope: Element to search under (whole document if None)

        Returns:
            List of matching elements
        """
        root = self.soup if scope is None else scope
        try:
            return root.select(selector)
        except Exception as e:
            logger.warning(f"CSS select failed: {selector} | {e}")
            return []

    def select_one(self, selector: str, scope: Tag | None = None) -> Tag | None:
        """Select single element using CSS selector.

        Args:
            selector: CSS selector
            scope: Element to search under (whole document if None)

        Returns:
            First matching element or None
        """
        root = self.soup if scope is None else scope
        try:
            return root.select_one(selector)
        except Exception as e:
            logger.warning(f"CSS select_one failed: {selector} | {e}")
            return None

    def get_text(self, element: Tag | None, strip: bool = True, separator: str = "") -> str:
        """Extract text from element.

        Args:
            element: BeautifulSoup Tag
            strip: Strip surrounding whitespace
            separator: Text separator

        Returns:
            Element text content, empty when the element is missing
        """
        if element is None:
            return ""

        text = element.get_text(separator=separator)
        return text.strip() if strip else text

    def get_attribute(self, element: Tag | None, attr: str) -> str | None:
        """Get element attribute value.

        Args:
            element: BeautifulSoup Tag
            attr: Attribute name

        Returns:
            Attribute value or None
        """
        if element is None:
            return None

        value = element.get(attr)
        if isinstance(value, list):
            # multi-valued attributes such as class
            return " ".join(value)
        return value

    def get_href(self, element: Tag | None) -> str | None:
        """Get href attribute from element."""
        return self.get_attribute(element, "href")

    def get_src(self, element: Tag | None) -> str | None:
        """Get src attribute from element."""
        return self.get_attribute(element, "src")

    def text_without(self, element: Tag | None, selector: str) -> str:
        """Get element text with matching descendants removed.

        Works on a copy so the parsed document is left untouched.

        Args:
            element: BeautifulSoup Tag
            selector: CSS selector for descendants to drop

        Returns:
            Stripped text of what remains
        """
        if element is None:
            return ""

        clone = copy.copy(element)
        for child in clone.select(selector):
            child.decompose()
        return self.get_text(clone)


def is_bot_detection(html: str) -> bool:
    """Check whether markup is DuckDuckGo's anti-automation interstitial."""
    return any(marker in html for marker in BOT_DETECTION_MARKERS)


def parse_page(html: str) -> ParsedPage:
    """Extract structured data from one results page.

    Never raises on unexpected markup; missing structure yields empty
    results and None fields.

    Args:
        html: Raw HTML of the results page

    Returns:
        ParsedPage with results, spelling, zero-click answer and pagination data
    """
    parser = DOMParser(html)

    results = _extract_results(parser)
    no_more_results = parser.select_one(NO_RESULT_SELECTOR) is not None

    page = ParsedPage(
        results=tuple(results),
        spelling=_extract_spelling(parser),
        zero_click=_extract_zero_click(parser),
        no_more_results=no_more_results,
        next_page_data=_extract_next_page_data(parser),
    )

    logger.debug(
        f"Parsed page | results={len(page.results)} | "
        f"no_more_results={page.no_more_results} | has_next={page.next_page_data is not None}"
    )
    return page


def _extract_spelling(parser: DOMParser) -> SpellingCorrection | None:
    did_you_mean = parser.select_one("#did_you_mean")
    if did_you_mean is None:
        return None

    links = parser.select("a", scope=did_you_mean)
    if not links:
        return None

    corrected = parser.get_text(links[0])
    original = None
    if len(links) > 1:
        original = parser.get_text(links[1]).removeprefix('"').removesuffix('"')

    return SpellingCorrection(corrected=corrected, original=original)


def _extract_zero_click(parser: DOMParser) -> ZeroClick | None:
    panel = parser.select_one(".zci-wrapper .zci")
    if panel is None:
        return None

    heading_anchor = parser.select_one(".zci__heading a", scope=panel)
    heading = parser.get_text(heading_anchor)
    if not heading:
        return None

    abstract_el = parser.select_one("#zero_click_abstract", scope=panel)
    image_el = source_el = None
    if abstract_el is not None:
        image_el = parser.select_one(".zci__image", scope=abstract_el)
        source_el = parser.select_one("a q", scope=abstract_el)

    return ZeroClick(
        heading=heading,
        url=parser.get_href(heading_anchor) or "",
        # inline "More at ..." links would otherwise leak into the abstract
        abstract=parser.text_without(abstract_el, "a"),
        image=parser.get_src(image_el) or None,
        source=parser.get_text(source_el) or None,
    )


def _extract_results(parser: DOMParser) -> list[SearchResult]:
    results = []

    for container in parser.select(RESULT_SELECTOR):
        title_el = parser.select_one(".result__a", scope=container)
        title = parser.get_text(title_el)
        url = parser.get_href(title_el) or ""

        if not title or not url:
            continue

        results.append(
            SearchResult(
                title=title,
                url=url,
                description=parser.get_text(parser.select_one(".result__snippet", scope=container)),
                display_url=parser.get_text(parser.select_one(".result__url", scope=container)),
            )
        )

    return results


def _extract_next_page_data(parser: DOMParser) -> Mapping[str, str] | None:
    for nav_link in parser.select(".nav-link"):
        for form in parser.select("form", scope=nav_link):
            submit = parser.select_one('input[type="submit"]', scope=form)
            if parser.get_attribute(submit, "value") != NEXT_PAGE_LABEL:
                continue

            data = {}
            for hidden in parser.select('input[type="hidden"]', scope=form):
                name = parser.get_attribute(hidden, "name")
                if name:
                    data[name] = parser.get_attribute(hidden, "value") or ""
            return MappingProxyType(data)

    return None
