"""ZIP code normalization, upstream rate fetch and cached resolution."""

from __future__ import annotations

from zipsalestax.rates.fetcher import RapidAPIRateFetcher
from zipsalestax.rates.resolver import CACHE_KEY_PREFIX, RateResolver, cache_key
from zipsalestax.rates.zip_code import normalize_zip

__all__ = ["CACHE_KEY_PREFIX", "RapidAPIRateFetcher", "RateResolver", "cache_key", "normalize_zip"]
