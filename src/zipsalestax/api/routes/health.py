"""Health check endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from zipsalestax.api.deps import get_settings_store
from zipsalestax.core.exceptions import ZipSalesTaxError
from zipsalestax.core.protocols import ISettingsStore

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "healthy"}


@router.get("/ready")
def ready(settings_store: ISettingsStore = Depends(get_settings_store)) -> dict[str, str]:
    try:
        settings_store.load()
    except ZipSalesTaxError:
        return {"status": "degraded"}
    return {"status": "ready"}
