"""Persisted store settings and the per-lookup resolver snapshot."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from zipsalestax.core.config import AppSettings


class ResolverConfig(BaseModel):
    """Immutable configuration consumed by a single rate resolution."""

    model_config = ConfigDict(frozen=True)

    api_key: str = Field(default="", repr=False)
    api_host: str = ""
    endpoint_path: str = "/{zip}"
    cache_ttl_minutes: int = Field(default=720, ge=1)
    debug_log: bool = False


class StoreSettings(BaseModel):
    """The single persisted configuration record (``sst_settings``)."""

    enabled: bool = False
    rapidapi_key: str = Field(default="", repr=False)
    rapidapi_host: str = "u-s-a-sales-taxes-per-zip-code.p.rapidapi.com"
    endpoint_path: str = "/{zip}"
    tax_label: str = "Sales Tax"
    tax_shipping: Literal["yes", "no"] = "yes"
    cache_ttl_minutes: int = 720
    debug_log: bool = False
    api_listing_url: str = ""
    privacy_policy_url: str = ""

    @classmethod
    def from_app_settings(cls, settings: AppSettings) -> StoreSettings:
        """Seed a record from environment-provided defaults."""
        return cls(
            enabled=settings.store.enabled,
            rapidapi_key=settings.rapidapi.key,
            rapidapi_host=settings.rapidapi.host,
            endpoint_path=settings.rapidapi.endpoint_path,
            tax_label=settings.store.tax_label,
            tax_shipping=settings.store.tax_shipping,
            cache_ttl_minutes=settings.store.cache_ttl_minutes,
            debug_log=settings.store.debug_log,
            api_listing_url=settings.rapidapi.listing_url,
            privacy_policy_url=settings.store.privacy_policy_url,
        )

    def resolver_config(self) -> ResolverConfig:
        return ResolverConfig(
            api_key=self.rapidapi_key.strip(),
            api_host=self.rapidapi_host.strip(),
            endpoint_path=self.endpoint_path,
            cache_ttl_minutes=max(1, self.cache_ttl_minutes),
            debug_log=self.debug_log,
        )

    def masked(self) -> dict:
        """Dump for admin display with the API key hidden."""
        data = self.model_dump()
        key = data["rapidapi_key"]
        data["rapidapi_key"] = f"****{key[-4:]}" if len(key) > 4 else ("****" if key else "")
        return data


class StoreSettingsUpdate(BaseModel):
    """Partial update submitted from the admin settings surface."""

    enabled: Optional[bool] = None
    rapidapi_key: Optional[str] = None
    rapidapi_host: Optional[str] = None
    endpoint_path: Optional[str] = None
    tax_label: Optional[str] = None
    tax_shipping: Optional[str] = None
    cache_ttl_minutes: Optional[int | str] = None
    debug_log: Optional[bool] = None
    api_listing_url: Optional[str] = None
    privacy_policy_url: Optional[str] = None
