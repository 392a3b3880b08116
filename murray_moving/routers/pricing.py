"""
Pricing endpoints — the tariff calculator over HTTP.

Nothing here is stored; the admin UI merges the returned fees into the job.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from .. import schemas, tariff
from ..auth import get_current_admin

logger = logging.getLogger(__name__)

router = APIRouter(tags=["pricing"])


@router.get("/tariff", response_model=schemas.RateCard)
def get_tariff():
    """Published rate card. Public, shown on the rates page."""
    return tariff.rate_card()


@router.post("/pricing/estimate", response_model=schemas.EstimateBreakdown)
def price_estimate(job: schemas.JobPricingInput, admin: str = Depends(get_current_admin)):
    """Pre-job estimate from estimated hours."""
    try:
        estimate = tariff.job_estimate(job)
    except tariff.TariffInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    logger.info(
        "Estimate priced: crew=%s hours=%s miles=%s total=%s",
        job.crew_size, job.estimated_hours, job.distance_miles, estimate.total_estimate,
    )
    return estimate


@router.post("/pricing/actual", response_model=schemas.ActualBreakdown)
def price_actual(job: schemas.ActualPricingInput, admin: str = Depends(get_current_admin)):
    """Final bill from actual hours and box count."""
    try:
        actual = tariff.job_actual(job)
    except tariff.TariffInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    logger.info(
        "Actual priced: crew=%s hours=%s boxes=%s total=%s",
        job.crew_size, job.actual_hours, job.actual_box_count, actual.total_actual,
    )
    return actual


@router.post("/pricing/profit", response_model=schemas.ProfitSummary)
def price_profit(request: schemas.ProfitRequest, admin: str = Depends(get_current_admin)):
    """Profit and margin for a job given its revenue and expenses."""
    return tariff.job_profit(request.revenue, request.expenses)
