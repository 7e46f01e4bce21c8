"""Politeness delay between page requests."""

import asyncio
import random
from dataclasses import dataclass, field
from typing import Awaitable, Callable

from ddg_search.core.config import settings
from ddg_search.monitoring.logger import get_logger

logger = get_logger(__name__)

DelayFn = Callable[[], Awaitable[None]]


@dataclass
class RandomDelay:
    """Sleep for a random duration between ``min_delay`` and ``max_delay`` seconds."""

    min_delay: float = field(default_factory=lambda: settings.delay_min)
    max_delay: float = field(default_factory=lambda: settings.delay_max)

    def __post_init__(self) -> None:
        if self.min_delay < 0 or self.max_delay < self.min_delay:
            raise ValueError("delay bounds must satisfy 0 <= min_delay <= max_delay")

    def calculate_delay(self) -> float:
        """Pick the next wait.

        Returns:
            Delay in seconds
        """
        return random.uniform(self.min_delay, self.max_delay)

    async def __call__(self) -> None:
        delay = self.calculate_delay()
        logger.debug(f"Waiting {delay:.2f}s before next page")
        await asyncio.sleep(delay)


async def no_delay() -> None:
    """Delay policy that returns immediately."""
