"""Bulk invalidation of cached ZIP rates."""

from __future__ import annotations

import logging
import re

from zipsalestax.core.protocols import IKnownZipIndex, IRateCache
from zipsalestax.rates.resolver import CACHE_KEY_PREFIX, cache_key

logger = logging.getLogger(__name__)

_ZIP = re.compile(r"^[0-9]{5}$")


def purge_cached_rates(cache: IRateCache, index: IKnownZipIndex) -> int:
    """Delete every cached rate and empty the known-ZIP index.

    Entries listed in the index go first. A prefix scan then catches
    anything written without an index entry.

    Returns:
        Number of well-formed ZIPs purged through the index.
    """
    purged = 0
    for zip_code in index.list():
        if not _ZIP.match(str(zip_code)):
            continue
        cache.delete(cache_key(zip_code))
        purged += 1

    for key in cache.keys():
        if key.startswith(CACHE_KEY_PREFIX):
            cache.delete(key)

    index.clear()
    logger.info("Purged cached rates for %d ZIP codes", purged)
    return purged
