"""Manual "test connection" action for the admin surface."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from zipsalestax.core.exceptions import MissingCredentials
from zipsalestax.core.protocols import IRateFetcher
from zipsalestax.models.api import ConnectionTestResult
from zipsalestax.models.settings import StoreSettings
from zipsalestax.rates.zip_code import normalize_zip

EXAMPLE_SUBTOTAL = Decimal("10.00")


def example_tax(rate_percent: float) -> float:
    """Tax on a $10.00 subtotal, rounded half-up to cents."""
    amount = EXAMPLE_SUBTOTAL * Decimal(str(rate_percent)) / Decimal("100")
    return float(amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def run_connection_test(raw_zip: str, settings: StoreSettings, fetcher: IRateFetcher) -> ConnectionTestResult:
    """Query upstream once for ``raw_zip`` with the saved credentials.

    Goes straight to the fetcher: the rate cache is neither read nor
    written, so checkout totals are unaffected.

    Raises:
        InvalidInput: ``raw_zip`` has fewer than 5 digits.
        MissingCredentials: no API key saved.
        RateLookupError: any upstream failure.
    """
    zip_code = normalize_zip(raw_zip)
    if not settings.rapidapi_key.strip():
        raise MissingCredentials("Missing RapidAPI key. Save your key first.")

    rate = fetcher.fetch(zip_code, settings.resolver_config())
    return ConnectionTestResult(
        zip=zip_code,
        rate_percent=rate,
        example_tax=example_tax(rate),
        message=f"Success. ZIP {zip_code} -> {rate:g}%",
    )
