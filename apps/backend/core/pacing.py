"""
Pacing between sources within a run.

Sources are scraped one after another; a pacer is awaited between two
sources so that a run never hammers government servers back to back.
"""
import time
import asyncio
import logging
from typing import Optional

logger = logging.getLogger(__name__)


class Pacer:
    """Waits between consecutive sources"""

    async def wait(self) -> None:
        raise NotImplementedError


class NoPacer(Pacer):
    async def wait(self) -> None:
        return None


class FixedDelayPacer(Pacer):
    """Sleep a fixed delay between sources (default 1 second)"""

    def __init__(self, delay_seconds: float = 1.0):
        self.delay_seconds = max(0.0, delay_seconds)

    async def wait(self) -> None:
        if self.delay_seconds > 0:
            await asyncio.sleep(self.delay_seconds)


class TokenBucket:
    """Simple token bucket"""

    def __init__(self, tokens: float, refill_rate: float):
        """
        Args:
            tokens: Initial tokens and max capacity
            refill_rate: Tokens added per second
        """
        self.capacity = tokens
        self.tokens = tokens
        self.refill_rate = refill_rate
        self.last_refill = time.monotonic()

    def _refill(self):
        now = time.monotonic()
        elapsed = now - self.last_refill
        self.tokens = min(self.capacity, self.tokens + elapsed * self.refill_rate)
        self.last_refill = now

    def consume(self, tokens: float = 1.0) -> bool:
        """Try to consume tokens. Returns True if successful."""
        self._refill()
        if self.tokens >= tokens:
            self.tokens -= tokens
            return True
        return False

    def wait_time(self, tokens: float = 1.0) -> float:
        """Seconds until `tokens` can be consumed"""
        self._refill()
        if self.tokens >= tokens:
            return 0.0
        return (tokens - self.tokens) / self.refill_rate


class TokenBucketPacer(Pacer):
    """Allow short bursts of sources, then settle at `sources_per_minute`"""

    def __init__(self, sources_per_minute: float = 30.0, burst: int = 1):
        refill_rate = max(0.01, sources_per_minute) / 60.0
        self.bucket = TokenBucket(float(max(1, burst)), refill_rate)
        self._lock: Optional[asyncio.Lock] = None
        self._lock_loop: Optional[asyncio.AbstractEventLoop] = None

    def _get_lock(self) -> asyncio.Lock:
        # One lock per event loop; the pacer may be built before the server loop starts
        loop = asyncio.get_running_loop()
        if self._lock is None or self._lock_loop is not loop:
            self._lock = asyncio.Lock()
            self._lock_loop = loop
        return self._lock

    async def wait(self) -> None:
        async with self._get_lock():
            while not self.bucket.consume():
                wait_time = self.bucket.wait_time()
                logger.debug(f"[pacing] Waiting {wait_time:.2f}s for next source slot")
                await asyncio.sleep(wait_time)


def build_pacer(mode: str = "fixed", delay_seconds: float = 1.0, sources_per_minute: float = 30.0) -> Pacer:
    """Pacer for a configuration mode: fixed, token_bucket or none"""
    mode = (mode or "fixed").lower()
    if mode == "token_bucket":
        return TokenBucketPacer(sources_per_minute)
    if mode == "none":
        return NoPacer()
    if mode != "fixed":
        logger.warning(f"[pacing] Unknown pacing mode '{mode}', using fixed delay")
    return FixedDelayPacer(delay_seconds)
