"""Request and response bodies for the HTTP API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from zipsalestax.models.tax import TaxLocation, TaxRateRecord


class MatchedRatesRequest(BaseModel):
    location: TaxLocation
    matched_rates: dict[str, TaxRateRecord] = Field(default_factory=dict)


class MatchedRatesResponse(BaseModel):
    rates: dict[str, TaxRateRecord]


class ConnectionTestRequest(BaseModel):
    """Manual credentials check for a single ZIP code."""

    zip: str = ""


class ConnectionTestResult(BaseModel):
    zip: str
    rate_percent: float
    example_tax: float
    message: str


class ApiResponse(BaseModel):
    """``{success, data}`` envelope used by the admin endpoints."""

    success: bool
    data: dict[str, Any] = Field(default_factory=dict)
