"""Shared test doubles: memory backends plus a scripted fetcher and clock."""

from __future__ import annotations

from typing import Optional

from zipsalestax.models.settings import ResolverConfig
from zipsalestax.persistence.memory_backend import (
    MemoryKnownZipIndex,
    MemoryRateCache,
    MemorySettingsStore,
)


class FakeClock:
    """Manually advanced clock returning epoch seconds."""

    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeRateFetcher:
    """IRateFetcher returning a canned rate or raising a canned error."""

    def __init__(self, rate: float = 8.25, error: Optional[Exception] = None) -> None:
        self.rate = rate
        self.error = error
        self.calls: list[tuple[str, ResolverConfig]] = []

    def fetch(self, postal_code: str, config: ResolverConfig) -> float:
        self.calls.append((postal_code, config))
        if self.error is not None:
            raise self.error
        return self.rate


__all__ = [
    "FakeClock",
    "FakeRateFetcher",
    "MemoryKnownZipIndex",
    "MemoryRateCache",
    "MemorySettingsStore",
]
