"""
Job endpoints — pricing a job record and checking status changes.

Storage lives elsewhere: these endpoints take the job as the admin UI holds
it and hand back what should be saved.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from .. import lifecycle, schemas, tariff
from ..auth import get_current_admin
from ..numbering import generate_invoice_number, generate_job_number

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/jobs", tags=["jobs"])

# Fields a job needs before it can be priced at all
_REQUIRED_FOR_ESTIMATE = ("crew_size", "estimated_hours", "total_distance")
_REQUIRED_FOR_ACTUAL = ("crew_size", "actual_hours", "total_distance")


@router.post("/price", response_model=schemas.PricedJob)
def price_job(request: schemas.PriceJobRequest, admin: str = Depends(get_current_admin)):
    """
    Price a job record and return it with the fees merged in.

    - Assigns a job number when the job has none.
    - actual=False: estimate fields (labor_cost ... total_estimate).
    - actual=True: final fields including box_overage_fee and total_actual,
      plus an invoice number when the job has none.
    - A job missing crew size, hours or distance comes back unpriced.
    """
    job = request.job.model_dump()
    if not job.get("job_number"):
        job["job_number"] = generate_job_number()

    required = _REQUIRED_FOR_ACTUAL if request.actual else _REQUIRED_FOR_ESTIMATE
    missing = [f for f in required if job.get(f) is None]
    if missing:
        logger.info("Job %s not priced, missing %s", job["job_number"], ", ".join(missing))
        return schemas.PricedJob(job=job, priced=False)

    try:
        pricing_input = tariff.pricing_input_from_job(job, actual=request.actual)
        if request.actual:
            pricing = tariff.job_actual(pricing_input)
        else:
            pricing = tariff.job_estimate(pricing_input)
    except tariff.TariffInputError as e:
        raise HTTPException(status_code=400, detail=str(e))

    job.update(pricing.job_fields())
    if request.actual and not job.get("invoice_number"):
        job["invoice_number"] = generate_invoice_number()

    logger.info(
        "Job %s priced (%s): %s",
        job["job_number"],
        "actual" if request.actual else "estimate",
        job["total_actual"] if request.actual else job["total_estimate"],
    )
    return schemas.PricedJob(job=job, priced=True, pricing=pricing)


def _status_info(status: lifecycle.JobStatus) -> schemas.StatusInfo:
    return schemas.StatusInfo(
        status=status,
        display_name=lifecycle.display_name(status),
        color_class=lifecycle.color_class(status),
        terminal=lifecycle.is_terminal(status),
        forward_statuses=lifecycle.sorted_statuses(lifecycle.forward_statuses(status)),
        next_statuses=lifecycle.sorted_statuses(lifecycle.next_valid_statuses(status)),
    )


@router.get("/statuses", response_model=List[schemas.StatusInfo])
def list_statuses():
    """Every job status with its label, badge color and allowed moves."""
    return [_status_info(s) for s in lifecycle.JobStatus]


@router.post("/status-check", response_model=lifecycle.TransitionCheck)
def check_status_change(request: schemas.StatusCheckRequest, admin: str = Depends(get_current_admin)):
    """
    Validate a status change before the caller saves it.

    A disallowed change is still a 200: `allowed` is false and
    `next_statuses` lists what the job can move to instead.
    """
    result = lifecycle.check_transition(request.current_status, request.requested_status)
    if not result.allowed:
        logger.warning(
            "Rejected status change %s → %s",
            request.current_status, request.requested_status,
        )
    return result
