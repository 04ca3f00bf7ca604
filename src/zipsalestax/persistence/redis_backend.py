"""Redis backends implementing IRateCache, IKnownZipIndex and ISettingsStore."""

from __future__ import annotations

import json
import logging
import time
from typing import Optional

import redis
from pydantic import ValidationError

from zipsalestax.core.exceptions import CacheError, SettingsStoreError
from zipsalestax.core.types import Clock
from zipsalestax.models.settings import StoreSettings

logger = logging.getLogger(__name__)

CACHED_ZIPS_KEY = "sst_cached_zips"
SETTINGS_KEY = "sst_settings"


def _connect(host: str, port: int, db: int) -> redis.Redis:
    return redis.Redis(host=host, port=port, db=db, decode_responses=True)


class RedisRateCache:
    """Production IRateCache backed by Redis SETEX entries."""

    def __init__(self, host: str = "localhost", port: int = 6379, db: int = 0,
                 key_prefix: str = "sst_rate_", client: Optional[redis.Redis] = None,
                 clock: Clock = time.time) -> None:
        self._key_prefix = key_prefix
        self._clock = clock
        self._client = client if client is not None else _connect(host, port, db)

    def get(self, key: str) -> Optional[tuple[float, float]]:
        try:
            raw = self._client.get(key)
        except Exception as exc:
            raise CacheError(f"Redis GET failed for key={key!r}: {exc}") from exc
        if raw is None:
            return None
        try:
            entry = json.loads(raw)
            rate, expires_at = float(entry["rate"]), float(entry["expires_at"])
        except (ValueError, TypeError, KeyError):
            logger.warning("Ignoring unreadable cache entry %s", key)
            return None
        if expires_at <= self._clock():
            return None
        return rate, expires_at

    def put(self, key: str, percentage: float, ttl: int) -> None:
        value = json.dumps({"rate": percentage, "expires_at": self._clock() + ttl})
        try:
            self._client.setex(key, ttl, value)
        except Exception as exc:
            raise CacheError(f"Redis SETEX failed for key={key!r}: {exc}") from exc

    def delete(self, key: str) -> None:
        try:
            self._client.delete(key)
        except Exception as exc:
            raise CacheError(f"Redis DELETE failed for key={key!r}: {exc}") from exc

    def keys(self) -> list[str]:
        try:
            return sorted(self._client.scan_iter(match=f"{self._key_prefix}*"))
        except Exception as exc:
            raise CacheError(f"Redis SCAN failed for prefix={self._key_prefix!r}: {exc}") from exc


class RedisKnownZipIndex:
    """IKnownZipIndex stored as a Redis set. Never expires."""

    def __init__(self, host: str = "localhost", port: int = 6379, db: int = 0,
                 client: Optional[redis.Redis] = None) -> None:
        self._client = client if client is not None else _connect(host, port, db)

    def add(self, zip_code: str) -> None:
        try:
            self._client.sadd(CACHED_ZIPS_KEY, zip_code)
        except Exception as exc:
            raise CacheError(f"Redis SADD failed for zip={zip_code!r}: {exc}") from exc

    def list(self) -> list[str]:
        try:
            return sorted(self._client.smembers(CACHED_ZIPS_KEY))
        except Exception as exc:
            raise CacheError(f"Redis SMEMBERS failed: {exc}") from exc

    def clear(self) -> None:
        try:
            self._client.delete(CACHED_ZIPS_KEY)
        except Exception as exc:
            raise CacheError(f"Redis DELETE failed for key={CACHED_ZIPS_KEY!r}: {exc}") from exc


class RedisSettingsStore:
    """ISettingsStore keeping the record as one JSON document.

    Stored fields are laid over ``defaults``, so fields added in later
    releases pick up their default values.
    """

    def __init__(self, host: str = "localhost", port: int = 6379, db: int = 0,
                 defaults: Optional[StoreSettings] = None,
                 client: Optional[redis.Redis] = None) -> None:
        self._defaults = defaults if defaults is not None else StoreSettings()
        self._client = client if client is not None else _connect(host, port, db)

    def load(self) -> StoreSettings:
        try:
            raw = self._client.get(SETTINGS_KEY)
        except Exception as exc:
            raise SettingsStoreError(f"Redis GET failed for key={SETTINGS_KEY!r}: {exc}") from exc
        if raw is None:
            return self._defaults.model_copy()
        try:
            saved = json.loads(raw)
            if not isinstance(saved, dict):
                raise ValueError("settings record is not an object")
            return StoreSettings.model_validate({**self._defaults.model_dump(), **saved})
        except (ValueError, ValidationError) as exc:
            logger.warning("Stored settings unreadable, using defaults: %s", exc)
            return self._defaults.model_copy()

    def save(self, settings: StoreSettings) -> None:
        try:
            self._client.set(SETTINGS_KEY, settings.model_dump_json())
        except Exception as exc:
            raise SettingsStoreError(f"Redis SET failed for key={SETTINGS_KEY!r}: {exc}") from exc
