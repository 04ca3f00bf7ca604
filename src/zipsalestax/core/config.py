"""Application configuration using pydantic-settings with grouped env prefixes."""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings

LOG_SOURCE = "simple-sales-taxes"


class RapidAPIConfig(BaseSettings):
    """RapidAPI sales tax endpoint defaults."""

    model_config = {"env_prefix": "ZST_RAPIDAPI_"}

    key: str = ""
    host: str = "u-s-a-sales-taxes-per-zip-code.p.rapidapi.com"
    endpoint_path: str = "/{zip}"
    listing_url: str = "https://rapidapi.com/perodriguezl/api/u-s-a-sales-taxes-per-zip-code"
    timeout: float = 10.0


class RedisConfig(BaseSettings):
    """Redis cache and settings store configuration."""

    model_config = {"env_prefix": "ZST_REDIS_"}

    host: str = "localhost"
    port: int = 6379
    db: int = 0


class StoreDefaults(BaseSettings):
    """Initial values for the persisted store settings record."""

    model_config = {"env_prefix": "ZST_STORE_"}

    enabled: bool = False
    tax_label: str = "Sales Tax"
    tax_shipping: Literal["yes", "no"] = "yes"
    cache_ttl_minutes: int = 720
    debug_log: bool = False
    privacy_policy_url: str = ""


class AppSettings(BaseSettings):
    """Root application settings aggregating all sub-configs."""

    model_config = {"env_prefix": "ZST_"}

    environment: Literal["dev", "uat", "prod"] = "dev"
    log_level: str = "INFO"
    admin_token: str = ""
    backend: Literal["memory", "redis"] = "memory"

    rapidapi: RapidAPIConfig = RapidAPIConfig()
    redis: RedisConfig = RedisConfig()
    store: StoreDefaults = StoreDefaults()
