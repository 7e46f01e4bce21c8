"""ddg-search - DuckDuckGo HTML search client with structured output."""

from loguru import logger

__version__ = "1.0.0"

# Silent as a library; the CLI turns logging on through setup_logging()
logger.disable("ddg_search")
