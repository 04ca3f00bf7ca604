"""Protocol interfaces for all ZIP Sales Tax abstractions.

All inter-layer communication uses these Protocols: structural typing,
no inheritance required, easy to test with isinstance().
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol, runtime_checkable

from zipsalestax.core.types import CacheKey, ExpiresAt, Percentage

if TYPE_CHECKING:
    from zipsalestax.models.settings import ResolverConfig, StoreSettings
    from zipsalestax.models.tax import TaxLocation, TaxRateRecord


# ---------------------------------------------------------------------------
# Persistence: Rate Cache
# ---------------------------------------------------------------------------

@runtime_checkable
class IRateCache(Protocol):
    """TTL cache of tax percentages keyed by ``sst_rate_<zip>``."""

    def get(self, key: CacheKey) -> Optional[tuple[Percentage, ExpiresAt]]:
        """Return ``(percentage, expires_at)`` or None when absent or expired."""
        ...

    def put(self, key: CacheKey, percentage: Percentage, ttl: int) -> None:
        """Store ``percentage`` for ``ttl`` seconds."""
        ...

    def delete(self, key: CacheKey) -> None: ...

    def keys(self) -> list[CacheKey]: ...


# ---------------------------------------------------------------------------
# Persistence: Known ZIP index
# ---------------------------------------------------------------------------

@runtime_checkable
class IKnownZipIndex(Protocol):
    """Durable list of every ZIP ever cached, used for bulk invalidation."""

    def add(self, zip_code: str) -> None: ...

    def list(self) -> list[str]: ...

    def clear(self) -> None: ...


# ---------------------------------------------------------------------------
# Persistence: Settings Store
# ---------------------------------------------------------------------------

@runtime_checkable
class ISettingsStore(Protocol):
    """Single persisted settings record."""

    def load(self) -> StoreSettings: ...

    def save(self, settings: StoreSettings) -> None: ...


# ---------------------------------------------------------------------------
# External rate source
# ---------------------------------------------------------------------------

@runtime_checkable
class IRateFetcher(Protocol):
    """Fetch a validated percentage for a normalized ZIP from upstream."""

    def fetch(self, postal_code: str, config: ResolverConfig) -> float: ...


# ---------------------------------------------------------------------------
# Host tax pipeline
# ---------------------------------------------------------------------------

@runtime_checkable
class TaxRateProvider(Protocol):
    """Supplies a replacement tax rate for a location, or None to defer."""

    def rate_for(self, location: TaxLocation) -> Optional[TaxRateRecord]: ...
