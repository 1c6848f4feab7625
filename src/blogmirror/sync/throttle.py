"""Delay policies used to space out remote API calls."""

import asyncio
from typing import Protocol


class DelayPolicy(Protocol):
    """Waits between consecutive remote requests."""

    async def wait(self) -> None: ...


class FixedDelay:
    """Sleep for the same interval before every follow-up request."""

    def __init__(self, seconds: float = 1.0) -> None:
        if seconds < 0:
            raise ValueError("seconds must be non-negative")
        self.seconds = seconds

    async def wait(self) -> None:
        await asyncio.sleep(self.seconds)


class NoDelay:
    """Never wait. Useful for tests and local mock servers."""

    async def wait(self) -> None:
        return None
