"""Tests for configuration defaults and env overrides."""

from __future__ import annotations

from zipsalestax.core.config import AppSettings, RapidAPIConfig
from zipsalestax.models.settings import StoreSettings


def test_default_settings():
    settings = AppSettings()
    assert settings.environment == "dev"
    assert settings.backend == "memory"
    assert settings.admin_token == ""


def test_rapidapi_config_defaults():
    config = RapidAPIConfig()
    assert config.host == "u-s-a-sales-taxes-per-zip-code.p.rapidapi.com"
    assert config.endpoint_path == "/{zip}"
    assert config.timeout == 10.0


def test_env_override(monkeypatch):
    monkeypatch.setenv("ZST_RAPIDAPI_KEY", "env-key")
    settings = AppSettings(rapidapi=RapidAPIConfig())
    assert settings.rapidapi.key == "env-key"


def test_store_settings_seeded_from_app_settings():
    settings = AppSettings()
    record = StoreSettings.from_app_settings(settings)
    assert record.enabled is False
    assert record.tax_label == "Sales Tax"
    assert record.cache_ttl_minutes == 720
    assert record.api_listing_url.startswith("https://rapidapi.com/")


def test_resolver_config_trims_and_clamps():
    record = StoreSettings(rapidapi_key="  k  ", rapidapi_host=" h ", cache_ttl_minutes=0)
    config = record.resolver_config()
    assert config.api_key == "k"
    assert config.api_host == "h"
    assert config.cache_ttl_minutes == 1


def test_masked_hides_key():
    record = StoreSettings(rapidapi_key="abcdef123456")
    assert record.masked()["rapidapi_key"] == "****3456"
    assert StoreSettings().masked()["rapidapi_key"] == ""
