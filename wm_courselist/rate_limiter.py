"""
Rate limiting for polite scraping of the Open Course List
"""

import asyncio
import logging
import time
import warnings
from typing import Awaitable, Callable, Optional

from .errors import ConfigurationError

DEFAULT_INTERVAL_MS = 500


class RateLimitWarning(UserWarning):
    """Issued when the request interval is set below the default"""


def validate_interval(interval_ms) -> float:
    """Return the interval if it is a non-negative number of milliseconds"""
    if isinstance(interval_ms, bool) or not isinstance(interval_ms, (int, float)):
        raise ConfigurationError(f"Rate limit must be a number of milliseconds, got {interval_ms!r}")
    if interval_ms < 0:
        raise ConfigurationError(f"Rate limit cannot be negative, got {interval_ms}")
    return interval_ms


class RateLimiter:
    """Keeps consecutive requests at least ``interval_ms`` apart.

    The timestamp is recorded after any wait, so spacing is measured from one
    permitted request to the next rather than from when each caller arrived.
    """

    def __init__(self,
                 interval_ms: float = DEFAULT_INTERVAL_MS,
                 logger: Optional[logging.Logger] = None,
                 clock: Callable[[], float] = time.monotonic,
                 sleep: Callable[[float], Awaitable[None]] = asyncio.sleep):
        self.logger = logger or logging.getLogger(__name__)
        self._clock = clock
        self._sleep = sleep
        self.interval_ms = DEFAULT_INTERVAL_MS
        self.last_request_at: Optional[float] = None
        self.set_interval(interval_ms)

    def set_interval(self, interval_ms: float):
        """Set a custom interval. Values below 500ms are allowed but warned about."""
        validate_interval(interval_ms)
        if interval_ms < DEFAULT_INTERVAL_MS:
            message = (f"Rate limit set to {interval_ms}ms. You are responsible for setting "
                       f"a reasonable rate limit! Default is {DEFAULT_INTERVAL_MS}ms.")
            warnings.warn(message, RateLimitWarning, stacklevel=2)
            self.logger.warning(message)
        self.interval_ms = interval_ms

    async def wait(self) -> float:
        """Suspend until the interval has passed, then record the request time.

        Returns the number of seconds spent waiting.
        """
        waited = 0.0
        if self.last_request_at is not None:
            interval = self.interval_ms / 1000.0
            remaining = interval - (self._clock() - self.last_request_at)
            if remaining > 0:
                self.logger.debug(f"Rate limit reached. Waiting {remaining * 1000:.0f}ms...")
            # Loop because event loop timers may fire slightly early
            while remaining > 0:
                await self._sleep(remaining)
                waited += remaining
                remaining = interval - (self._clock() - self.last_request_at)
        self.last_request_at = self._clock()
        return waited
