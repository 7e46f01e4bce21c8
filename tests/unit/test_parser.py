"""Tests for results-page extraction."""

import pytest

from ddg_search.scraping.models import SpellingCorrection
from ddg_search.scraping.parser import DOMParser, is_bot_detection, parse_page


class TestBotDetection:
    """Tests for is_bot_detection."""

    def test_anomaly_marker(self):
        """Test anomaly modal is detected."""
        assert is_bot_detection('<div class="anomaly-modal">block</div>') is True

    def test_challenge_marker(self):
        """Test challenge form is detected."""
        assert is_bot_detection('<form id="challenge-form"></form>') is True

    def test_normal_page(self):
        """Test regular markup is not flagged."""
        assert is_bot_detection("<html><body>No issues</body></html>") is False


class TestParseResults:
    """Tests for organic result extraction."""

    def test_extracts_fields(self, page):
        """Test title, link, snippet and display URL are read."""
        parsed = parse_page(page.result(1))

        assert len(parsed.results) == 1
        result = parsed.results[0]
        assert result.title == "Title 1"
        assert result.url == "https://example.com/1"
        assert result.description == "Snippet 1"
        assert result.display_url == "example.com/1"

    def test_skips_ads(self, page):
        """Test ad containers contribute nothing even with a valid title and link."""
        html = page.result(1) + page.result(2, "result--ad")
        parsed = parse_page(html)

        assert [r.title for r in parsed.results] == ["Title 1"]

    def test_skips_missing_href(self):
        """Test a result without href is dropped."""
        html = """
        <div class="result web-result">
          <a class="result__a">Missing href</a>
          <div class="result__snippet">Snippet</div>
        </div>
        """
        assert parse_page(html).results == ()

    def test_skips_empty_title(self):
        """Test a result with blank title is dropped."""
        html = """
        <div class="result web-result">
          <a class="result__a" href="https://example.com/x">   </a>
        </div>
        """
        assert parse_page(html).results == ()

    def test_preserves_page_order(self, page):
        """Test results come back in document order."""
        html = "".join(page.result(i) for i in (3, 1, 2))
        parsed = parse_page(html)

        assert [r.title for r in parsed.results] == ["Title 3", "Title 1", "Title 2"]

    def test_inline_markup_in_snippet(self):
        """Test bold highlights do not add spacing."""
        html = """
        <div class="result web-result">
          <a class="result__a" href="https://example.com">Title</a>
          <a class="result__snippet">Learn <b>Python</b> today</a>
        </div>
        """
        assert parse_page(html).results[0].description == "Learn Python today"

    def test_optional_fields_default_to_empty(self):
        """Test missing snippet and display URL become empty strings."""
        html = '<div class="result web-result"><a class="result__a" href="https://e.com">T</a></div>'
        result = parse_page(html).results[0]

        assert result.description == ""
        assert result.display_url == ""


class TestNoMoreResults:
    """Tests for the end-of-results flag."""

    def test_flag_set(self, page):
        """Test placeholder sets the flag while results are still read."""
        parsed = parse_page(page.no_more_results() + page.result(1))

        assert parsed.no_more_results is True
        assert len(parsed.results) == 1

    def test_flag_unset(self, page):
        """Test pages without placeholder."""
        assert parse_page(page.result(1)).no_more_results is False

    def test_placeholder_is_not_a_result(self):
        """Test a no-result container flagged as web result is excluded."""
        html = """
        <div class="result web-result result--no-result">
          <a class="result__a" href="https://example.com">No more results</a>
        </div>
        """
        parsed = parse_page(html)

        assert parsed.results == ()
        assert parsed.no_more_results is True


class TestSpelling:
    """Tests for the did-you-mean suggestion."""

    def test_corrected_and_original(self):
        """Test both anchors are read and quotes trimmed."""
        html = """
        <div id="did_you_mean">
          <a>Corrected Term</a>
          <a>"original term"</a>
        </div>
        """
        parsed = parse_page(html)

        assert parsed.spelling == SpellingCorrection(corrected="Corrected Term", original="original term")

    def test_only_corrected(self):
        """Test original is None with a single anchor."""
        parsed = parse_page('<div id="did_you_mean"><a>Only</a></div>')

        assert parsed.spelling == SpellingCorrection(corrected="Only")
        assert parsed.spelling.original is None

    def test_region_without_anchor(self):
        """Test region without links yields no suggestion."""
        assert parse_page('<div id="did_you_mean">nothing</div>').spelling is None

    def test_absent(self, page):
        """Test pages without the region."""
        assert parse_page(page.result(1)).spelling is None

    def test_fixture_strips_single_quote_pair(self, read_fixture):
        """Test only one leading and one trailing quote are removed."""
        parsed = parse_page(read_fixture("spelling.html"))

        assert parsed.spelling == SpellingCorrection(corrected="Nikola Tesla", original='Nikolii" Tesla')
        assert parsed.results[0].title == "Nikola Tesla - Wikipedia"


class TestZeroClick:
    """Tests for the zero-click answer panel."""

    def test_fixture_panel(self, read_fixture):
        """Test heading, link, abstract, image and source are extracted."""
        zc = parse_page(read_fixture("first_page.html")).zero_click

        assert zc is not None
        assert zc.heading == "Microsoft"
        assert zc.url == "https://en.wikipedia.org/wiki/Microsoft"
        assert zc.abstract.startswith("Microsoft Corporation is an American multinational")
        assert "More at" not in zc.abstract
        assert "Wikipedia" not in zc.abstract
        assert zc.image == "https://i.duckduckgo.com/i/e8be2f834e440d99.png"
        assert zc.source == "Wikipedia"

    def test_empty_heading_discards_panel(self):
        """Test a panel with an empty heading does not count."""
        html = """
        <div class="zci-wrapper"><div class="zci">
          <h1 class="zci__heading"><a href="https://example.com"></a></h1>
          <div id="zero_click_abstract">Some text</div>
        </div></div>
        """
        assert parse_page(html).zero_click is None

    def test_optional_parts_missing(self):
        """Test image and source stay None when absent."""
        html = """
        <div class="zci-wrapper"><div class="zci">
          <h1 class="zci__heading"><a href="https://example.com/topic">Topic</a></h1>
          <div id="zero_click_abstract">Plain abstract.</div>
        </div></div>
        """
        zc = parse_page(html).zero_click

        assert zc.heading == "Topic"
        assert zc.abstract == "Plain abstract."
        assert zc.image is None
        assert zc.source is None

    def test_parsing_leaves_document_intact(self, read_fixture):
        """Test the anchor removal does not affect the parsed tree."""
        parser = DOMParser(read_fixture("first_page.html"))
        abstract = parser.select_one("#zero_click_abstract")

        assert "Wikipedia" not in parser.text_without(abstract, "a")
        assert "Wikipedia" in parser.get_text(abstract)

    def test_absent(self, read_fixture):
        """Test pages without a panel."""
        assert parse_page(read_fixture("spelling.html")).zero_click is None


class TestNextPageData:
    """Tests for continuation form extraction."""

    def test_hidden_fields_collected(self, page):
        """Test hidden inputs of the Next form are collected."""
        parsed = parse_page(page.next_form(s="30", token="abc"))

        assert parsed.next_page_data == {"s": "30", "token": "abc"}

    def test_missing_value_defaults_to_empty(self):
        """Test a hidden field without value maps to an empty string."""
        html = """
        <div class="nav-link"><form>
          <input type="hidden" name="token" />
          <input type="submit" value="Next" />
        </form></div>
        """
        assert parse_page(html).next_page_data == {"token": ""}

    def test_nameless_field_skipped(self):
        """Test a hidden field without name is omitted."""
        html = """
        <div class="nav-link"><form>
          <input type="hidden" value="no-name" />
          <input type="submit" value="Next" />
        </form></div>
        """
        assert parse_page(html).next_page_data == {}

    def test_previous_only(self, read_fixture):
        """Test a page with only a Previous control has no continuation."""
        parsed = parse_page(read_fixture("last_page.html"))

        assert parsed.next_page_data is None
        assert parsed.no_more_results is True
        assert parsed.results == ()

    def test_first_match_wins(self):
        """Test only the first Next control is used."""
        html = """
        <div class="nav-link"><form>
          <input type="submit" value="Previous" />
          <input type="hidden" name="s" value="0" />
        </form></div>
        <div class="nav-link"><form>
          <input type="submit" value="Next" />
          <input type="hidden" name="s" value="10" />
        </form></div>
        <div class="nav-link"><form>
          <input type="submit" value="Next" />
          <input type="hidden" name="s" value="20" />
        </form></div>
        """
        assert parse_page(html).next_page_data == {"s": "10"}

    def test_absent(self, page):
        """Test pages without navigation."""
        assert parse_page(page.result(1)).next_page_data is None

    def test_read_only(self, page):
        """Test the continuation cannot be changed and the page stays hashable."""
        html = page.result(1) + page.next_form(s="10")
        parsed = parse_page(html)

        with pytest.raises(TypeError):
            parsed.next_page_data["s"] = "20"
        assert hash(parsed) == hash(parse_page(html))


class TestParsePage:
    """Whole-page tests."""

    def test_fixture_first_page(self, read_fixture):
        """Test a realistic first page."""
        parsed = parse_page(read_fixture("first_page.html"))

        assert parsed.spelling is None
        assert parsed.no_more_results is False
        assert parsed.next_page_data["s"] == "10"
        assert parsed.next_page_data["nextParams"] == ""
        assert [r.url for r in parsed.results] == [
            "https://www.microsoft.com/en-us",
            "https://en.wikipedia.org/wiki/Microsoft",
            "https://github.com/microsoft",
        ]
        assert parsed.results[0].title.startswith("Microsoft - AI")
        assert parsed.results[0].display_url == "www.microsoft.com/en-us"
        assert not any("Official Site" in r.title for r in parsed.results)

    def test_every_result_has_title_and_url(self, read_fixture):
        """Test no empty titles or links are emitted."""
        for name in ("first_page.html", "last_page.html", "spelling.html"):
            for result in parse_page(read_fixture(name)).results:
                assert result.title
                assert result.url

    def test_deterministic(self, read_fixture):
        """Test parsing the same markup twice gives equal pages."""
        html = read_fixture("first_page.html")

        assert parse_page(html) == parse_page(html)

    def test_malformed_markup(self):
        """Test garbage input yields an empty page instead of raising."""
        parsed = parse_page("<div><a class='result__a' <<< not html")

        assert parsed.results == ()
        assert parsed.spelling is None
        assert parsed.zero_click is None
        assert parsed.no_more_results is False
        assert parsed.next_page_data is None

    def test_empty_string(self):
        """Test empty input."""
        assert parse_page("").results == ()
