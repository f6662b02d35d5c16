"""Timed pauses for UI animations that expose no completion signal."""

import asyncio
import logging
from typing import Optional


logger = logging.getLogger(__name__)


async def delay(milliseconds: Optional[int]) -> None:
    """Suspend for the given number of milliseconds.

    Args:
        milliseconds: Duration to wait; None or 0 returns without suspending
    """
    if not milliseconds:
        return
    logger.debug(f"Waiting {milliseconds}ms")
    await asyncio.sleep(milliseconds / 1000)
