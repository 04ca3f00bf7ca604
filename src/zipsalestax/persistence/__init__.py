"""Pluggable persistence backends behind Protocol interfaces."""

from __future__ import annotations

import redis

from zipsalestax.core.config import AppSettings
from zipsalestax.core.protocols import IKnownZipIndex, IRateCache, ISettingsStore
from zipsalestax.models.settings import StoreSettings
from zipsalestax.persistence.memory_backend import (
    MemoryKnownZipIndex,
    MemoryRateCache,
    MemorySettingsStore,
)
from zipsalestax.persistence.redis_backend import (
    RedisKnownZipIndex,
    RedisRateCache,
    RedisSettingsStore,
)


def create_persistence(
    settings: AppSettings | None = None,
) -> tuple[IRateCache, IKnownZipIndex, ISettingsStore]:
    """Create wired-up persistence backends from application settings.

    Returns:
        Tuple of (rate_cache, known_zip_index, settings_store).
    """
    if settings is None:
        settings = AppSettings()

    defaults = StoreSettings.from_app_settings(settings)

    if settings.backend == "memory":
        return MemoryRateCache(), MemoryKnownZipIndex(), MemorySettingsStore(defaults)

    client = redis.Redis(
        host=settings.redis.host,
        port=settings.redis.port,
        db=settings.redis.db,
        decode_responses=True,
    )
    return (
        RedisRateCache(client=client),
        RedisKnownZipIndex(client=client),
        RedisSettingsStore(defaults=defaults, client=client),
    )
