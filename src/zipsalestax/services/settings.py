"""Admin settings update and health warnings."""

from __future__ import annotations

from typing import Any

from zipsalestax.models.settings import StoreSettings, StoreSettingsUpdate

_URL_SCHEMES = ("http://", "https://")


def _to_ttl_minutes(value: Any) -> int:
    try:
        minutes = int(float(str(value).strip()))
    except (TypeError, ValueError, OverflowError):
        minutes = 0
    return max(1, minutes)


def _clean_url(value: str) -> str:
    url = value.strip()
    return url if url.lower().startswith(_URL_SCHEMES) else ""


def update_settings(current: StoreSettings, update: StoreSettingsUpdate) -> StoreSettings:
    """Apply a sanitized partial update to the stored record.

    Fields left out of ``update`` keep their current values.
    """
    changes: dict[str, Any] = {}
    submitted = update.model_dump(exclude_unset=True)

    for name in ("rapidapi_key", "rapidapi_host", "endpoint_path", "tax_label"):
        if submitted.get(name) is not None:
            changes[name] = submitted[name].strip()

    for name in ("enabled", "debug_log"):
        if submitted.get(name) is not None:
            changes[name] = bool(submitted[name])

    if "tax_shipping" in submitted:
        changes["tax_shipping"] = "no" if submitted["tax_shipping"] == "no" else "yes"

    if "cache_ttl_minutes" in submitted:
        changes["cache_ttl_minutes"] = _to_ttl_minutes(submitted["cache_ttl_minutes"])

    for name in ("api_listing_url", "privacy_policy_url"):
        if submitted.get(name) is not None:
            changes[name] = _clean_url(submitted[name])

    return current.model_copy(update=changes)


def settings_warnings(settings: StoreSettings) -> list[str]:
    """Configuration problems an operator should see."""
    warnings: list[str] = []
    if settings.enabled and not settings.rapidapi_key.strip():
        warnings.append("Simple Sales Taxes is enabled but missing a RapidAPI key.")
    return warnings
