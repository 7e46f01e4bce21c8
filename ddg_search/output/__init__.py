"""Output module - formatters for search responses."""

from .formatters import (
    FORMATTERS,
    escape_csv,
    escape_xml,
    format_compact,
    format_csv,
    format_json,
    format_jsonl,
    format_markdown,
    format_opensearch,
)

__all__ = [
    "FORMATTERS",
    "escape_csv",
    "escape_xml",
    "format_compact",
    "format_csv",
    "format_json",
    "format_jsonl",
    "format_markdown",
    "format_opensearch",
]
