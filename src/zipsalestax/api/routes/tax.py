"""Host tax-calculation hook."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from zipsalestax.api.deps import get_pipeline
from zipsalestax.models.api import MatchedRatesRequest, MatchedRatesResponse
from zipsalestax.tax.pipeline import TaxPipeline

router = APIRouter(tags=["tax"])


@router.post("/matched-rates")
def matched_rates(
    body: MatchedRatesRequest,
    pipeline: TaxPipeline = Depends(get_pipeline),
) -> MatchedRatesResponse:
    """Return the host's matched rates, or the single ZIP-based rate replacing them."""
    rates = pipeline.matched_tax_rates(body.location, body.matched_rates)
    return MatchedRatesResponse(rates=rates)
