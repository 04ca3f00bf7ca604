"""In-memory backends for unit tests and single-process dev runs: dict-backed."""

from __future__ import annotations

import time
from typing import Optional

from zipsalestax.core.types import Clock
from zipsalestax.models.settings import StoreSettings


class MemoryRateCache:
    """Dict-backed IRateCache with lazy expiration."""

    def __init__(self, clock: Clock = time.time) -> None:
        self._clock = clock
        self._store: dict[str, tuple[float, float]] = {}

    def get(self, key: str) -> Optional[tuple[float, float]]:
        entry = self._store.get(key)
        if entry is None:
            return None
        if entry[1] <= self._clock():
            self._store.pop(key, None)
            return None
        return entry

    def put(self, key: str, percentage: float, ttl: int) -> None:
        self._store[key] = (percentage, self._clock() + ttl)

    def delete(self, key: str) -> None:
        self._store.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._store)


class MemoryKnownZipIndex:
    """List-backed IKnownZipIndex."""

    def __init__(self) -> None:
        self._zips: list[str] = []

    def add(self, zip_code: str) -> None:
        if zip_code not in self._zips:
            self._zips.append(zip_code)

    def list(self) -> list[str]:
        return list(self._zips)

    def clear(self) -> None:
        self._zips.clear()


class MemorySettingsStore:
    """Holds the settings record in process memory."""

    def __init__(self, defaults: Optional[StoreSettings] = None) -> None:
        self._settings = defaults if defaults is not None else StoreSettings()

    def load(self) -> StoreSettings:
        return self._settings.model_copy()

    def save(self, settings: StoreSettings) -> None:
        self._settings = settings.model_copy()
