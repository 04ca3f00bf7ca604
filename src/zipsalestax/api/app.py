"""FastAPI application with lifespan and router mounting."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from zipsalestax import __version__
from zipsalestax.api.routes import admin, health, tax
from zipsalestax.core.config import AppSettings
from zipsalestax.core.exceptions import PermissionDenied
from zipsalestax.core.logging import configure_logging
from zipsalestax.core.protocols import IRateFetcher
from zipsalestax.models.api import ApiResponse
from zipsalestax.persistence import create_persistence
from zipsalestax.rates.fetcher import RapidAPIRateFetcher
from zipsalestax.rates.resolver import RateResolver
from zipsalestax.tax.pipeline import TaxPipeline
from zipsalestax.tax.provider import ZipTaxRateProvider


async def _permission_denied(request: Request, exc: PermissionDenied) -> JSONResponse:
    body = ApiResponse(success=False, data={"message": str(exc)})
    return JSONResponse(status_code=403, content=body.model_dump())


def create_app(
    settings: Optional[AppSettings] = None,
    fetcher: Optional[IRateFetcher] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    ``settings`` and ``fetcher`` default to environment settings and a live
    RapidAPI client.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Initialize and tear down application resources."""
        app_settings = settings or AppSettings()
        configure_logging(app_settings.log_level)

        rate_cache, zip_index, settings_store = create_persistence(app_settings)
        owned_fetcher = None
        rate_fetcher = fetcher
        if rate_fetcher is None:
            owned_fetcher = RapidAPIRateFetcher(timeout=app_settings.rapidapi.timeout)
            rate_fetcher = owned_fetcher

        resolver = RateResolver(cache=rate_cache, index=zip_index, fetcher=rate_fetcher)
        pipeline = TaxPipeline()
        pipeline.register(ZipTaxRateProvider(settings_store=settings_store, resolver=resolver))

        app.state.settings = app_settings
        app.state.rate_cache = rate_cache
        app.state.zip_index = zip_index
        app.state.settings_store = settings_store
        app.state.fetcher = rate_fetcher
        app.state.pipeline = pipeline
        yield
        if owned_fetcher is not None:
            owned_fetcher.close()

    app = FastAPI(
        title="ZIP Sales Tax",
        version=__version__,
        lifespan=lifespan,
    )
    app.add_exception_handler(PermissionDenied, _permission_denied)
    app.include_router(health.router)
    app.include_router(tax.router, prefix="/tax")
    app.include_router(admin.router, prefix="/admin")
    return app
