"""Cache-backed tax rate resolution."""

from __future__ import annotations

import logging
import time

from zipsalestax.core.protocols import IKnownZipIndex, IRateCache, IRateFetcher
from zipsalestax.core.types import Clock
from zipsalestax.models.settings import ResolverConfig
from zipsalestax.rates.zip_code import normalize_zip

logger = logging.getLogger(__name__)

CACHE_KEY_PREFIX = "sst_rate_"


def cache_key(zip_code: str) -> str:
    return f"{CACHE_KEY_PREFIX}{zip_code}"


class RateResolver:
    """Resolve a raw postal code to a tax percentage.

    Cache hits are served without touching the network. Misses call the
    fetcher exactly once; failures propagate unchanged and nothing is
    cached, so the next tax calculation simply tries again. Concurrent
    misses for the same ZIP are not deduplicated: they all compute the same
    value and the last write wins.
    """

    def __init__(
        self,
        *,
        cache: IRateCache,
        index: IKnownZipIndex,
        fetcher: IRateFetcher,
        clock: Clock = time.time,
    ) -> None:
        self._cache = cache
        self._index = index
        self._fetcher = fetcher
        self._clock = clock

    def resolve(self, postal_code: str, config: ResolverConfig) -> float:
        """Return the percentage for ``postal_code``.

        Raises:
            RateLookupError: InvalidInput before any cache access, or
                whatever the fetcher raised on a miss.
        """
        zip_code = normalize_zip(postal_code)
        key = cache_key(zip_code)

        cached = self._cache.get(key)
        if cached is not None:
            percentage, expires_at = cached
            if expires_at > self._clock():
                return percentage

        percentage = self._fetcher.fetch(zip_code, config)

        ttl_seconds = max(1, config.cache_ttl_minutes) * 60
        self._cache.put(key, percentage, ttl_seconds)
        self._index.add(zip_code)
        logger.debug("Cached rate %s%% for ZIP %s (ttl=%ss)", percentage, zip_code, ttl_seconds)
        return percentage
