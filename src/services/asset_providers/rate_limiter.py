"""Two-window (per-minute / per-day) request counter for asset providers."""

import logging
import threading
import time
from typing import Callable, Optional

from models.asset import RateLimit
from utils.errors import RateLimitError

logger = logging.getLogger(__name__)

MINUTE_WINDOW_SECONDS = 60
DAY_WINDOW_SECONDS = 24 * 60 * 60


class RateLimiter:
    """Counts requests against a provider's per-minute and per-day ceilings.

    The minute counter resets once more than 60 seconds have passed since the
    last admitted request; the day counter resets once more than 24 hours have
    passed since the day window started. A limiter without a ``RateLimit``
    admits everything (but still counts).

    ``acquire()`` checks and increments under one lock, so concurrent searches
    against the same provider are all accounted for.
    """

    def __init__(
        self,
        provider_name: str,
        rate_limit: Optional[RateLimit] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize the limiter.

        Args:
            provider_name: Provider name used in errors and logs
            rate_limit: Ceilings to enforce, or None for unlimited
            clock: Monotonic time source in seconds (injectable for tests)
        """
        self.provider_name = provider_name
        self.rate_limit = rate_limit
        self._clock = clock
        self._lock = threading.Lock()
        self.requests_this_minute = 0
        self.requests_today = 0
        self.last_request_time: Optional[float] = None
        self.day_start_time = clock()

    def acquire(self) -> None:
        """Admit one request or raise.

        Raises:
            RateLimitError: If the minute or day ceiling has been reached
        """
        with self._lock:
            now = self._clock()

            if now - self.day_start_time > DAY_WINDOW_SECONDS:
                self.requests_today = 0
                self.day_start_time = now

            if (
                self.last_request_time is None
                or now - self.last_request_time > MINUTE_WINDOW_SECONDS
            ):
                self.requests_this_minute = 0

            if self.rate_limit is not None:
                if self.requests_this_minute >= self.rate_limit.requests_per_minute:
                    logger.warning(f"[{self.provider_name}] Per-minute rate limit reached")
                    raise RateLimitError(
                        self.provider_name, "minute", self.rate_limit.requests_per_minute
                    )
                if self.requests_today >= self.rate_limit.requests_per_day:
                    logger.warning(f"[{self.provider_name}] Daily rate limit reached")
                    raise RateLimitError(
                        self.provider_name, "day", self.rate_limit.requests_per_day
                    )

            self.requests_this_minute += 1
            self.requests_today += 1
            self.last_request_time = now
