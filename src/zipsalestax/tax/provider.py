"""ZIP-based TaxRateProvider."""

from __future__ import annotations

import logging
from typing import Optional

from zipsalestax.core.config import LOG_SOURCE
from zipsalestax.core.exceptions import InvalidInput, ZipSalesTaxError
from zipsalestax.core.protocols import ISettingsStore
from zipsalestax.models.tax import TaxLocation, TaxRateRecord
from zipsalestax.rates.resolver import RateResolver
from zipsalestax.rates.zip_code import normalize_zip

logger = logging.getLogger(__name__)

RATE_ID_PREFIX = "sst_"


class ZipTaxRateProvider:
    """TaxRateProvider that swaps in the upstream rate for US ZIP codes.

    Fails open: any lookup failure returns None so the host's own matched
    rates apply and checkout is never blocked.
    """

    def __init__(self, *, settings_store: ISettingsStore, resolver: RateResolver) -> None:
        self._settings_store = settings_store
        self._resolver = resolver

    def rate_for(self, location: TaxLocation) -> Optional[TaxRateRecord]:
        try:
            settings = self._settings_store.load()
        except ZipSalesTaxError as exc:
            logger.error("Falling back to default tax rates, settings unavailable: %s", exc,
                         extra={"source": LOG_SOURCE})
            return None
        if not settings.enabled:
            return None
        if location.country.strip().upper() != "US":
            return None

        try:
            zip_code = normalize_zip(location.postcode)
        except InvalidInput:
            return None

        if not settings.rapidapi_key.strip():
            return None

        config = settings.resolver_config()
        try:
            rate = self._resolver.resolve(zip_code, config)
        except ZipSalesTaxError as exc:
            if config.debug_log:
                logger.error("Falling back to default tax rates for ZIP %s: %s", zip_code, exc,
                             extra={"source": LOG_SOURCE})
            return None

        return TaxRateRecord(
            id=f"{RATE_ID_PREFIX}{zip_code}",
            rate=rate,
            label=settings.tax_label,
            shipping="no" if settings.tax_shipping == "no" else "yes",
            compound="no",
        )
