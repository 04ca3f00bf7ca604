"""Seed the Redis settings record and optionally purge cached ZIP rates.

Usage:
    python scripts/seed_settings.py --host localhost --port 6379
    python scripts/seed_settings.py --purge-cache
"""

from __future__ import annotations

import argparse
from typing import Any

import redis

from zipsalestax.core.config import AppSettings
from zipsalestax.models.settings import StoreSettings
from zipsalestax.persistence.redis_backend import (
    SETTINGS_KEY,
    RedisKnownZipIndex,
    RedisRateCache,
    RedisSettingsStore,
)
from zipsalestax.services.cache import purge_cached_rates


def seed_settings(client: Any, settings: AppSettings, force: bool = False) -> bool:
    """Write the settings record from environment defaults.

    Skips an existing record unless ``force`` is set. Returns True if written.
    """
    if client.exists(SETTINGS_KEY) and not force:
        print(f"  {SETTINGS_KEY} already exists, skipping")
        return False
    store = RedisSettingsStore(client=client)
    store.save(StoreSettings.from_app_settings(settings))
    print(f"  Wrote {SETTINGS_KEY}")
    return True


def purge_cache(client: Any) -> int:
    purged = purge_cached_rates(RedisRateCache(client=client), RedisKnownZipIndex(client=client))
    print(f"  Purged {purged} cached ZIP rates")
    return purged


def main() -> None:
    settings = AppSettings()
    parser = argparse.ArgumentParser(description="Seed Redis settings for ZIP Sales Tax")
    parser.add_argument("--host", default=settings.redis.host)
    parser.add_argument("--port", type=int, default=settings.redis.port)
    parser.add_argument("--db", type=int, default=settings.redis.db)
    parser.add_argument("--force", action="store_true", help="Overwrite an existing settings record")
    parser.add_argument("--purge-cache", action="store_true", help="Delete all cached ZIP rates")
    args = parser.parse_args()

    client = redis.Redis(host=args.host, port=args.port, db=args.db, decode_responses=True)

    print("Seeding settings...")
    seed_settings(client, settings, force=args.force)

    if args.purge_cache:
        print("Purging rate cache...")
        purge_cache(client)

    print("Done.")


if __name__ == "__main__":
    main()
