"""Admin endpoints for settings, connection testing and cache invalidation."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from zipsalestax.api.deps import (
    get_fetcher,
    get_rate_cache,
    get_settings_store,
    get_zip_index,
    require_admin,
)
from zipsalestax.core.exceptions import InvalidInput, MissingCredentials, RateLookupError
from zipsalestax.core.protocols import IKnownZipIndex, IRateCache, IRateFetcher, ISettingsStore
from zipsalestax.models.api import ApiResponse, ConnectionTestRequest
from zipsalestax.models.settings import StoreSettingsUpdate
from zipsalestax.services.cache import purge_cached_rates
from zipsalestax.services.connection import run_connection_test
from zipsalestax.services.settings import settings_warnings, update_settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["admin"], dependencies=[Depends(require_admin)])

INVALID_ZIP_MESSAGE = "Invalid ZIP code. Please enter 5 digits."
UPSTREAM_FAILED_MESSAGE = (
    "Request failed. Verify your RapidAPI key/subscription and endpoint settings. "
    "(Enable Debug Logging for details.)"
)


def _error(status_code: int, message: str) -> JSONResponse:
    body = ApiResponse(success=False, data={"message": message})
    return JSONResponse(status_code=status_code, content=body.model_dump())


@router.get("/settings")
def get_settings(settings_store: ISettingsStore = Depends(get_settings_store)) -> ApiResponse:
    """Return the stored settings with the API key masked."""
    settings = settings_store.load()
    return ApiResponse(success=True, data={
        "settings": settings.masked(),
        "warnings": settings_warnings(settings),
    })


@router.put("/settings")
def put_settings(
    update: StoreSettingsUpdate,
    settings_store: ISettingsStore = Depends(get_settings_store),
) -> ApiResponse:
    settings = update_settings(settings_store.load(), update)
    settings_store.save(settings)
    logger.info("Settings saved (enabled=%s)", settings.enabled)
    return ApiResponse(success=True, data={
        "settings": settings.masked(),
        "warnings": settings_warnings(settings),
        "message": "Simple Sales Taxes settings saved.",
    })


@router.get("/notices")
def get_notices(settings_store: ISettingsStore = Depends(get_settings_store)) -> ApiResponse:
    return ApiResponse(success=True, data={"notices": settings_warnings(settings_store.load())})


@router.post("/test-connection", response_model=ApiResponse)
def test_connection(
    body: ConnectionTestRequest,
    settings_store: ISettingsStore = Depends(get_settings_store),
    fetcher: IRateFetcher = Depends(get_fetcher),
):
    """Check the saved credentials against a ZIP code. Does not touch the rate cache."""
    try:
        result = run_connection_test(body.zip, settings_store.load(), fetcher)
    except InvalidInput:
        return _error(400, INVALID_ZIP_MESSAGE)
    except MissingCredentials as exc:
        return _error(400, str(exc))
    except RateLookupError as exc:
        logger.info("Connection test failed: %s", exc)
        return _error(502, UPSTREAM_FAILED_MESSAGE)
    return ApiResponse(success=True, data=result.model_dump())


@router.delete("/cache")
def delete_cache(
    cache: IRateCache = Depends(get_rate_cache),
    index: IKnownZipIndex = Depends(get_zip_index),
) -> ApiResponse:
    """Drop every cached ZIP rate."""
    purged = purge_cached_rates(cache, index)
    return ApiResponse(success=True, data={"purged": purged})
