"""
Global sustainability data from the World Bank, cached for a day.
"""

from datetime import datetime, timezone

from app.config import settings
from app.core.cache import TTLCache
from app.core.metrics import global_data_cache_total
from app.integrations import world_bank


def _count_lookup(result: str) -> None:
    global_data_cache_total.labels(result=result).inc()


global_data_cache: TTLCache[dict] = TTLCache(
    "global_sustainability",
    ttl_seconds=settings.global_data_ttl_seconds,
    retry_after_seconds=settings.global_data_retry_after_seconds,
    on_lookup=_count_lookup,
)


async def _load_payload() -> dict:
    dataset = await world_bank.fetch_global_dataset()
    return {
        **dataset,
        "source": "World Bank Open Data",
        "fetched_at": datetime.now(timezone.utc).isoformat(),
    }


async def get_global_sustainability() -> dict:
    """
    Cached payload; refreshed at most once per TTL.

    Raises:
        ExternalServiceError: refresh failed and nothing was cached before
    """
    return await global_data_cache.get_or_refresh(_load_payload)
