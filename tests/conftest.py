"""Pytest configuration and fixtures."""

import io
import os
import sys
from pathlib import Path

import pytest
from loguru import logger

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Keep the test run independent of any local environment overrides
os.environ["DDG_SEARCH_LOG_LEVEL"] = "WARNING"
os.environ.pop("DDG_SEARCH_BASE_URL", None)
os.environ.pop("DDG_SEARCH_DEFAULT_PAGES", None)

from ddg_search.scraping.models import SearchResponse, SearchResult, SpellingCorrection, ZeroClick  # noqa: E402

FIXTURES_DIR = Path(__file__).parent / "fixtures"


class FakeStream(io.StringIO):
    """In-memory stream that can pretend to be a terminal."""

    def __init__(self, tty: bool = False) -> None:
        super().__init__()
        self._tty = tty

    def isatty(self) -> bool:
        return self._tty


class FakeTransport:
    """Transport returning canned pages and recording every call."""

    def __init__(self, pages: list[str]) -> None:
        self.pages = list(pages)
        self.calls: list[dict] = []

    async def fetch(self, url, data=None, cancel_token=None) -> str:
        self.calls.append({"url": url, "data": data, "cancel_token": cancel_token})
        if cancel_token is not None:
            cancel_token.raise_if_cancelled()
        return self.pages.pop(0)


class PageBuilder:
    """Builds small results-page snippets."""

    @staticmethod
    def result(index: int, *classes: str) -> str:
        extra = " ".join(classes)
        return f"""
        <div class="result web-result {extra}">
          <a class="result__a" href="https://example.com/{index}">Title {index}</a>
          <div class="result__snippet">Snippet {index}</div>
          <span class="result__url">example.com/{index}</span>
        </div>
        """

    @staticmethod
    def next_form(**fields: str) -> str:
        hidden = "".join(
            f'<input type="hidden" name="{name}" value="{value}" />' for name, value in fields.items()
        )
        return f"""
        <div class="nav-link">
          <form>
            {hidden}
            <input type="submit" value="Next" />
          </form>
        </div>
        """

    @staticmethod
    def no_more_results() -> str:
        return '<div class="result--no-result"></div>'


@pytest.fixture
def page() -> type[PageBuilder]:
    return PageBuilder


@pytest.fixture
def fake_transport() -> type[FakeTransport]:
    return FakeTransport


@pytest.fixture
def read_fixture():
    def _read(name: str) -> str:
        return (FIXTURES_DIR / name).read_text(encoding="utf-8")

    return _read


@pytest.fixture
def tty_stream() -> FakeStream:
    return FakeStream(tty=True)


@pytest.fixture
def quiet_stream() -> FakeStream:
    return FakeStream(tty=False)


@pytest.fixture
def sample_response() -> SearchResponse:
    """Two-result response used by the formatter tests."""
    return SearchResponse(
        query="example query",
        pages_scraped=2,
        spelling=SpellingCorrection(corrected="exam ple", original="example"),
        results=(
            SearchResult(
                title="Result One",
                url="https://one.test",
                description="First snippet",
                display_url="one.test",
            ),
            SearchResult(
                title="Result Two",
                url="https://two.test",
                description="Second snippet",
                display_url="two.test",
            ),
        ),
    )


@pytest.fixture
def zero_click() -> ZeroClick:
    return ZeroClick(
        heading="Test Topic",
        url="https://en.wikipedia.org/wiki/Test",
        abstract="Test is a thing.",
        image="https://example.com/img.png",
        source="Wikipedia",
    )


@pytest.fixture
def log_records():
    """Collect log records from ddg_search while the test runs."""
    records = []
    logger.enable("ddg_search")
    sink_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(sink_id)
    logger.disable("ddg_search")


@pytest.fixture
def restore_logging():
    """Undo setup_logging() after the test."""
    yield
    logger.remove()
    logger.disable("ddg_search")
