"""Centralized logging configuration using Loguru."""

import sys
from typing import Any

from loguru import logger

from ddg_search.core.config import settings


def setup_logging(level: str | None = None) -> None:
    """Configure Loguru logging for the command line.

    Args:
        level: Override for the configured log level
    """
    # Remove default handler
    logger.remove()

    console_format = (
        "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
        "<level>{message}</level>"
    )

    file_format = (
        "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
        "{level: <8} | "
        "{name}:{function}:{line} | "
        "{message} | "
        "{extra}"
    )

    level = level or settings.log_level

    logger.enable("ddg_search")

    # stdout carries results, so logs always go to stderr
    logger.add(
        sys.stderr,
        format=console_format,
        level=level,
        colorize=True,
        backtrace=True,
        diagnose=False,
    )

    if settings.log_file:
        logger.add(
            settings.log_file,
            format=file_format,
            level="DEBUG",
            rotation="10 MB",
            retention="14 days",
            compression="gz",
            backtrace=True,
            diagnose=True,
        )

    logger.debug(f"Logging initialized | level={level}")


def get_logger(name: str) -> Any:
    """Get a logger instance with the given name.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured logger instance
    """
    return logger.bind(name=name)


def log_search_event(
    query: str,
    results_count: int,
    pages: int,
    duration: float,
    success: bool = True,
    **extra: Any,
) -> None:
    """Log the outcome of one search.

    Args:
        query: Search query
        results_count: Number of results returned
        pages: Number of pages fetched and parsed
        duration: Search duration in seconds
        success: Whether the search completed
        **extra: Additional context
    """
    status = "SUCCESS" if success else "FAILED"
    bound = logger.bind(
        query=query,
        results_count=results_count,
        pages=pages,
        duration=duration,
        success=success,
        **extra,
    )
    log_func = bound.info if success else bound.warning

    # bind() keeps braces in the query away from str.format
    log_func(
        f"Search | query={query!r} | results={results_count} | pages={pages} | "
        f"status={status} | duration={duration:.2f}s"
    )
