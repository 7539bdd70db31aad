"""
Per-host request spacing for the fetcher.
"""
from __future__ import annotations

import threading
from typing import Dict, Optional

from crawlcore.crawler.clock import Clock, MonotonicClock
from crawlcore.logger import logger


class HostThrottle:
    """
    Spaces request sends to the same host at least ``min_interval`` seconds apart.

    Each caller reserves a send slot inside a short critical section (read the
    host's last slot, compute the next one, store it) and then sleeps outside the
    lock until its slot arrives. The stored value is the send time, so a slow
    response does not shorten the gap to the next request.
    """

    def __init__(self, min_interval: float, clock: Optional[Clock] = None) -> None:
        if min_interval < 0:
            raise ValueError("min_interval must be >= 0")
        self.min_interval = min_interval
        self.clock: Clock = clock or MonotonicClock()
        self._last_sent: Dict[str, float] = {}
        self._lock = threading.Lock()

    def reserve(self, host: str) -> float:
        """Claim the next send slot for *host* and return how long to wait for it."""
        with self._lock:
            now = self.clock.monotonic()
            last = self._last_sent.get(host)
            slot = now if last is None else max(now, last + self.min_interval)
            self._last_sent[host] = slot
        return slot - now

    async def wait(self, host: str) -> float:
        """Suspend until *host* may receive the next request; return the delay applied."""
        delay = self.reserve(host)
        if delay > 0:
            logger.debug("Throttling %s for %.3f s", host, delay)
            await self.clock.sleep(delay)
        return delay

    def last_sent(self, host: str) -> Optional[float]:
        with self._lock:
            return self._last_sent.get(host)
