"""Render a SearchResponse as text in the supported output formats."""

import json
from datetime import datetime, timezone
from typing import Any, Callable
from urllib.parse import quote
from xml.sax.saxutils import escape

from ddg_search.core.config import settings
from ddg_search.scraping.models import SearchResponse

# Characters left unescaped by JavaScript's encodeURIComponent
_URI_COMPONENT_SAFE = "!'()*"


def escape_csv(value: str) -> str:
    """Quote a CSV field when it contains a quote, comma or newline."""
    if '"' in value or "," in value or "\n" in value:
        return '"' + value.replace('"', '""') + '"'
    return value


def escape_xml(value: str) -> str:
    """Escape the five XML special characters."""
    return escape(value, {'"': "&quot;", "'": "&apos;"})


def format_json(data: SearchResponse) -> str:
    """OpenSearch 1.1 response conventions in JSON."""
    output: dict[str, Any] = {
        "opensearch:totalResults": len(data.results),
        "opensearch:startIndex": 1,
        "opensearch:itemsPerPage": len(data.results),
        "opensearch:Query": {
            "role": "request",
            "searchTerms": data.query,
        },
        "pagesScraped": data.pages_scraped,
    }

    if data.spelling:
        output["spelling"] = data.spelling.to_dict()

    if data.zero_click:
        output["zeroClick"] = data.zero_click.to_dict()

    output["items"] = [
        {
            "position": i,
            "title": r.title,
            "link": r.url,
            "description": r.description,
            "displayUrl": r.display_url,
        }
        for i, r in enumerate(data.results, start=1)
    ]

    return json.dumps(output, indent=2, ensure_ascii=False)


def format_jsonl(data: SearchResponse) -> str:
    """One JSON object per line, zero-click answer first when present."""
    lines = []
    if data.zero_click:
        lines.append(_compact_json({"type": "zeroClick", **data.zero_click.to_dict()}))

    for i, r in enumerate(data.results, start=1):
        lines.append(
            _compact_json(
                {
                    "position": i,
                    "title": r.title,
                    "link": r.url,
                    "description": r.description,
                }
            )
        )
    return "\n".join(lines)


def format_csv(data: SearchResponse) -> str:
    """CSV with a header row."""
    lines = ["position,title,link,description"]
    for i, r in enumerate(data.results, start=1):
        lines.append(",".join([str(i), escape_csv(r.title), escape_csv(r.url), escape_csv(r.description)]))
    return "\n".join(lines)


def format_opensearch(data: SearchResponse) -> str:
    """OpenSearch 1.1 Atom feed."""
    now = datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    search_url = f"{settings.base_url}?q={quote(data.query, safe=_URI_COMPONENT_SAFE)}"
    count = len(data.results)

    parts = [
        '<?xml version="1.0" encoding="UTF-8"?>\n',
        '<feed xmlns="http://www.w3.org/2005/Atom"\n',
        '      xmlns:opensearch="http://a9.com/-/spec/opensearch/1.1/">\n',
        f"  <title>DuckDuckGo: {escape_xml(data.query)}</title>\n",
        f'  <link href="{escape_xml(search_url)}"/>\n',
        f"  <updated>{now}</updated>\n",
        f"  <id>{escape_xml(search_url)}</id>\n",
        f"  <opensearch:totalResults>{count}</opensearch:totalResults>\n",
        "  <opensearch:startIndex>1</opensearch:startIndex>\n",
        f"  <opensearch:itemsPerPage>{count}</opensearch:itemsPerPage>\n",
        f'  <opensearch:Query role="request" searchTerms="{escape_xml(data.query)}"/>\n',
    ]

    if data.zero_click:
        zc = data.zero_click
        parts += [
            "  <entry>\n",
            f'    <title type="text">{escape_xml(zc.heading)}</title>\n',
            f'    <link href="{escape_xml(zc.url)}"/>\n',
            f"    <id>{escape_xml(zc.url)}</id>\n",
            f"    <summary>{escape_xml(zc.abstract)}</summary>\n",
            '    <category term="zeroClick"/>\n',
            "  </entry>\n",
        ]

    for r in data.results:
        parts += [
            "  <entry>\n",
            f"    <title>{escape_xml(r.title)}</title>\n",
            f'    <link href="{escape_xml(r.url)}"/>\n',
            f"    <id>{escape_xml(r.url)}</id>\n",
            f"    <summary>{escape_xml(r.description)}</summary>\n",
            "  </entry>\n",
        ]

    parts.append("</feed>")
    return "".join(parts)


def format_markdown(data: SearchResponse) -> str:
    """Numbered markdown list."""
    lines = [
        f"# Search: {data.query}",
        f"{len(data.results)} results from {data.pages_scraped} page(s)\n",
    ]

    if data.spelling:
        lines.append(f"> **Did you mean:** {data.spelling.corrected}\n")

    if data.zero_click:
        zc = data.zero_click
        lines.append(f"> **{zc.heading}** — {zc.abstract}")
        suffix = f" ({zc.source})" if zc.source else ""
        lines.append(f"> [Read more]({zc.url}){suffix}\n")

    for i, r in enumerate(data.results, start=1):
        lines.append(f"{i}. [{r.title}]({r.url})")
        if r.description:
            lines.append(f"   {r.description}")
        lines.append("")

    return "\n".join(lines)


def format_compact(data: SearchResponse) -> str:
    """Minimal line-oriented format for LLM context windows."""
    lines = [
        f"query: {data.query}",
        f"results: {len(data.results)}",
    ]
    if data.spelling:
        lines.append(f"did_you_mean: {data.spelling.corrected}")
    if data.zero_click:
        lines.append(f"zero_click: {data.zero_click.heading}")
        lines.append(f"    {data.zero_click.url}")
        lines.append(f"    {data.zero_click.abstract}")
    lines.append("---")

    for i, r in enumerate(data.results, start=1):
        lines.append(f"[{i}] {r.title}")
        lines.append(f"    {r.url}")
        if r.description:
            lines.append(f"    {r.description}")

    return "\n".join(lines)


def _compact_json(obj: dict[str, Any]) -> str:
    return json.dumps(obj, ensure_ascii=False, separators=(",", ":"))


FORMATTERS: dict[str, Callable[[SearchResponse], str]] = {
    "json": format_json,
    "jsonl": format_jsonl,
    "csv": format_csv,
    "opensearch": format_opensearch,
    "markdown": format_markdown,
    "compact": format_compact,
}
