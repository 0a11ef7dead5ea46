"""
In-process TTL cache with single-flight refresh.

One ``TTLCache`` holds one payload and the time it was fetched. ``get_or_refresh``
serves the payload while it is fresh; once stale, exactly one caller runs the
loader while concurrent callers wait on the same lock and then read the new
value. If the loader fails and an older payload exists, the stale payload is
served instead of the error and the next attempt waits ``retry_after_seconds``.
"""

import asyncio
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, TypeVar

import structlog

logger = structlog.get_logger(__name__)

T = TypeVar("T")


@dataclass
class CacheEntry(Generic[T]):
    data: T
    fetched_at: float


class TTLCache(Generic[T]):
    """
    Usage:
        cache = TTLCache("global_data", ttl_seconds=86400, retry_after_seconds=300)
        payload = await cache.get_or_refresh(fetch_payload)
    """

    def __init__(
        self,
        name: str,
        ttl_seconds: float,
        retry_after_seconds: float = 300,
        clock: Callable[[], float] = time.monotonic,
        on_lookup: Callable[[str], Any] | None = None,
    ):
        self.name = name
        self.ttl_seconds = ttl_seconds
        self.retry_after_seconds = min(retry_after_seconds, ttl_seconds)
        self._clock = clock
        self._on_lookup = on_lookup
        self._entry: CacheEntry[T] | None = None
        self._lock = asyncio.Lock()

    @property
    def entry(self) -> CacheEntry[T] | None:
        return self._entry

    def is_fresh(self) -> bool:
        return (
            self._entry is not None
            and self._clock() - self._entry.fetched_at < self.ttl_seconds
        )

    def set(self, data: T) -> None:
        self._entry = CacheEntry(data=data, fetched_at=self._clock())

    def _defer_retry(self) -> None:
        # Stale entry reads as fresh for retry_after_seconds more
        self._entry.fetched_at = self._clock() - self.ttl_seconds + self.retry_after_seconds

    def clear(self) -> None:
        self._entry = None

    def _record(self, result: str) -> None:
        if self._on_lookup is not None:
            self._on_lookup(result)

    async def get_or_refresh(self, loader: Callable[[], Awaitable[T]]) -> T:
        """
        Raises:
            Exception: whatever ``loader`` raised, when no previous payload exists
        """
        if self.is_fresh():
            self._record("hit")
            return self._entry.data

        async with self._lock:
            # Another caller may have refreshed while we waited
            if self.is_fresh():
                self._record("hit")
                return self._entry.data

            try:
                data = await loader()
            except Exception as e:
                if self._entry is None:
                    self._record("error")
                    raise
                self._record("stale")
                self._defer_retry()
                logger.warning(
                    "cache_refresh_failed_serving_stale",
                    cache=self.name,
                    error=str(e),
                    retry_after_seconds=self.retry_after_seconds,
                )
                return self._entry.data

            self.set(data)
            self._record("miss")
            logger.info("cache_refreshed", cache=self.name)
            return data
