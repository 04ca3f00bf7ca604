"""Request-scoped dependencies pulled from application state."""

from __future__ import annotations

import secrets
from typing import Optional

from fastapi import Header, Request

from zipsalestax.core.exceptions import PermissionDenied
from zipsalestax.core.protocols import IKnownZipIndex, IRateCache, IRateFetcher, ISettingsStore
from zipsalestax.tax.pipeline import TaxPipeline


def get_settings_store(request: Request) -> ISettingsStore:
    return request.app.state.settings_store


def get_rate_cache(request: Request) -> IRateCache:
    return request.app.state.rate_cache


def get_zip_index(request: Request) -> IKnownZipIndex:
    return request.app.state.zip_index


def get_fetcher(request: Request) -> IRateFetcher:
    return request.app.state.fetcher


def get_pipeline(request: Request) -> TaxPipeline:
    return request.app.state.pipeline


def require_admin(
    request: Request,
    x_admin_token: Optional[str] = Header(default=None),
) -> None:
    """Reject callers without the configured admin token.

    An unset token locks the admin surface entirely.
    """
    expected = request.app.state.settings.admin_token
    if not expected or not x_admin_token or not secrets.compare_digest(x_admin_token, expected):
        raise PermissionDenied()
