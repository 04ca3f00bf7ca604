"""Adapter between registered TaxRateProviders and the host's matched rates."""

from __future__ import annotations

from zipsalestax.core.protocols import TaxRateProvider
from zipsalestax.models.tax import TaxLocation, TaxRateRecord


class TaxPipeline:
    """Ordered providers consulted when the host matches tax rates.

    Providers are registered explicitly at startup. The first provider that
    returns a record replaces the whole matched set; if none does, the
    host's matched rates pass through untouched.
    """

    def __init__(self) -> None:
        self._providers: list[TaxRateProvider] = []

    def register(self, provider: TaxRateProvider) -> None:
        self._providers.append(provider)

    @property
    def providers(self) -> list[TaxRateProvider]:
        return list(self._providers)

    def matched_tax_rates(
        self, location: TaxLocation, matched: dict[str, TaxRateRecord]
    ) -> dict[str, TaxRateRecord]:
        for provider in self._providers:
            record = provider.rate_for(location)
            if record is not None:
                return {record.id: record}
        return matched
