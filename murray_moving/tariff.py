"""
Tariff calculator — Murray Moving's published rate card.

Pure math, no I/O. Given crew, hours, distance and job-type flags, returns
every fee line plus the total. Money is Decimal, each line is rounded to
cents before it is added, so a total always equals the sum of its lines.

Rate card:
    2 movers + truck $149/hr, 3 movers $199/hr, 4 movers $249/hr,
    4 + additional mover $309/hr, labor only $59/hr (1) / $85/hr (2)
    Travel: $99 flat + $1.99/mi round trip
    Over 50 miles: $1.99/mi one way, on top of travel
    Boxes beyond 125% of the quote: $5/box
    Mattress bags: $15/bag
"""

import logging
from datetime import date
from decimal import ROUND_CEILING, ROUND_HALF_UP, Decimal
from typing import Mapping, Optional

from pydantic import ValidationError

from .schemas import (
    ActualBreakdown,
    ActualPricingInput,
    EstimateBreakdown,
    JobPricingInput,
    LaborBreakdown,
    LaborCost,
    ProfitExpenses,
    ProfitSummary,
    RateCard,
)

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")

HOURLY_RATES = {
    1: Decimal("59.00"),   # labor only, 1 mover
    2: Decimal("149.00"),  # 2 movers + van/truck
    3: Decimal("199.00"),
    4: Decimal("249.00"),
    5: Decimal("309.00"),  # 4 + additional mover ($60/hr)
}
DEFAULT_CREW_SIZE = 2

LABOR_ONLY_RATES = {
    1: Decimal("59.00"),
    2: Decimal("85.00"),
}
DEFAULT_LABOR_ONLY_CREW_SIZE = 1

MIN_CREW_SIZE = 1
MAX_CREW_SIZE = 5

TRAVEL_BASE_FEE = Decimal("99.00")
TRAVEL_MILEAGE_RATE = Decimal("1.99")  # per round-trip mile
LONG_DISTANCE_THRESHOLD_MILES = Decimal("50")
LONG_DISTANCE_RATE = Decimal("1.99")  # per one-way mile

BOX_OVERAGE_ALLOWANCE = Decimal("0.25")
BOX_OVERAGE_FEE = Decimal("5.00")
MATTRESS_BAG_FEE = Decimal("15.00")

ODD_JOB_MINIMUM_HOURS = Decimal("2.0")
BUSY_SEASON_MONTHS = range(5, 10)  # May–September

# crew size → minimum hours; crews above 4 use the 4-mover minimum
_BUSY_SEASON_MINIMUMS = {1: Decimal(3), 2: Decimal(4), 3: Decimal(6), 4: Decimal(7)}
_OFF_SEASON_MINIMUMS = {1: Decimal(3), 2: Decimal(3), 3: Decimal(5), 4: Decimal(6)}

SATURDAY_SURCHARGE_HOURS = Decimal(1)
SUNDAY_HOLIDAY_SURCHARGE_HOURS = Decimal(2)

_SATURDAY = 5
_SUNDAY = 6


class TariffInputError(ValueError):
    """Input the rate card has no price for (e.g. a 7-mover crew)."""


def _money(value) -> Decimal:
    return Decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


def _decimal(value) -> Decimal:
    # str() keeps floats like 1.99 from dragging in binary noise
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def reference_date(job_date: Optional[date] = None) -> date:
    """The date pricing runs against: the job's date, or today when unknown."""
    return job_date if job_date is not None else date.today()


def validate_crew_size(crew_size) -> int:
    if isinstance(crew_size, bool) or not isinstance(crew_size, int):
        raise TariffInputError(f"crew_size must be an integer, got {crew_size!r}")
    if not MIN_CREW_SIZE <= crew_size <= MAX_CREW_SIZE:
        raise TariffInputError(
            f"crew_size must be between {MIN_CREW_SIZE} and {MAX_CREW_SIZE}, got {crew_size}"
        )
    return crew_size


def hourly_rate(crew_size: int, is_labor_only: bool = False) -> Decimal:
    """Labor-only rates only exist for crews of one or two."""
    if is_labor_only and crew_size <= 2:
        return LABOR_ONLY_RATES.get(crew_size, LABOR_ONLY_RATES[DEFAULT_LABOR_ONLY_CREW_SIZE])
    return HOURLY_RATES.get(crew_size, HOURLY_RATES[DEFAULT_CREW_SIZE])


def is_busy_season(job_date: date) -> bool:
    return job_date.month in BUSY_SEASON_MONTHS


def day_surcharge_hours(job_date: date, is_weekend: bool = False, is_holiday: bool = False) -> Decimal:
    """
    Extra minimum hours for weekend and holiday work.

    Saturday +1, Sunday or holiday +2. The weekend rule needs both the flag and
    the date to agree. The two rules are independent, so a Saturday holiday
    gets +3.
    """
    extra = Decimal(0)
    weekday = job_date.weekday()
    if is_weekend and weekday == _SATURDAY:
        extra += SATURDAY_SURCHARGE_HOURS
    if is_holiday or (is_weekend and weekday == _SUNDAY):
        extra += SUNDAY_HOLIDAY_SURCHARGE_HOURS
    return extra


def minimum_hours(
    crew_size: int,
    is_odd_job: bool = False,
    job_date: Optional[date] = None,
    is_weekend: bool = False,
    is_holiday: bool = False,
) -> Decimal:
    """
    Contractual minimum billable hours.

    Odd jobs (van-only, small jobs) get a flat 2-hour minimum and skip every
    other rule. Otherwise the minimum depends on crew size and season
    (busy season May–September), plus any weekend/holiday surcharge.
    """
    validate_crew_size(crew_size)
    if is_odd_job:
        return ODD_JOB_MINIMUM_HOURS

    job_date = reference_date(job_date)
    table = _BUSY_SEASON_MINIMUMS if is_busy_season(job_date) else _OFF_SEASON_MINIMUMS
    base = table[min(crew_size, 4)]
    return base + day_surcharge_hours(job_date, is_weekend, is_holiday)


def labor_cost(
    crew_size: int,
    hours,
    is_labor_only: bool = False,
    is_odd_job: bool = False,
    job_date: Optional[date] = None,
    is_weekend: bool = False,
    is_holiday: bool = False,
) -> LaborCost:
    """Hourly rate × max(hours, minimum), with the numbers that produced it."""
    validate_crew_size(crew_size)
    job_date = reference_date(job_date)
    hours = _decimal(hours)

    rate = hourly_rate(crew_size, is_labor_only)
    minimum = minimum_hours(crew_size, is_odd_job, job_date, is_weekend, is_holiday)
    billable = max(hours, minimum)

    return LaborCost(
        cost=_money(rate * billable),
        breakdown=LaborBreakdown(
            hourly_rate=rate,
            minimum_hours=minimum,
            actual_hours=hours,
            billable_hours=billable,
            is_odd_job=is_odd_job,
            is_labor_only=is_labor_only,
            is_weekend=is_weekend,
            is_holiday=is_holiday,
            busy_season=is_busy_season(job_date),
            job_date=job_date,
        ),
    )


def travel_fee(distance_miles) -> Decimal:
    """$99 flat plus $1.99 per mile of the round trip."""
    round_trip = _decimal(distance_miles) * 2
    return _money(TRAVEL_BASE_FEE + round_trip * TRAVEL_MILEAGE_RATE)


def mileage_fee(distance_miles) -> Decimal:
    """Long-distance surcharge: one-way miles × $1.99, only past 50 miles."""
    distance = _decimal(distance_miles)
    if distance <= LONG_DISTANCE_THRESHOLD_MILES:
        return _money(0)
    return _money(distance * LONG_DISTANCE_RATE)


def box_overage_fee(quoted_boxes, actual_boxes) -> Decimal:
    """$5 per box beyond 125% of the quote, partial boxes rounded up."""
    threshold = _decimal(quoted_boxes) * (1 + BOX_OVERAGE_ALLOWANCE)
    actual = _decimal(actual_boxes)
    if actual <= threshold:
        return _money(0)
    overage = (actual - threshold).to_integral_value(rounding=ROUND_CEILING)
    return _money(overage * BOX_OVERAGE_FEE)


def mattress_bag_fee(count) -> Decimal:
    return _money(_decimal(count) * MATTRESS_BAG_FEE)


def job_estimate(job: JobPricingInput) -> EstimateBreakdown:
    """Pre-job estimate from estimated hours. No box overage yet."""
    job_date = reference_date(job.preferred_date)
    labor = labor_cost(
        job.crew_size,
        job.estimated_hours,
        is_labor_only=job.is_labor_only,
        is_odd_job=job.is_odd_job,
        job_date=job_date,
        is_weekend=job.is_weekend,
        is_holiday=job.is_holiday,
    )
    travel = travel_fee(job.distance_miles)
    mileage = mileage_fee(job.distance_miles)
    bags = mattress_bag_fee(job.mattress_bag_count)
    materials = _money(job.materials_cost)

    total = labor.cost + travel + mileage + bags + materials
    logger.debug(
        "Estimate: crew=%s hours=%s billable=%s total=%s",
        job.crew_size, job.estimated_hours, labor.breakdown.billable_hours, total,
    )
    return EstimateBreakdown(
        labor_cost=labor.cost,
        travel_fee=travel,
        mileage_fee=mileage,
        mattress_bag_fee=bags,
        materials_cost=materials,
        total_estimate=total,
        breakdown=labor.breakdown,
    )


def job_actual(job: ActualPricingInput) -> ActualBreakdown:
    """Post-job reconciliation from actual hours, including box overage."""
    job_date = reference_date(job.preferred_date)
    labor = labor_cost(
        job.crew_size,
        job.actual_hours,
        is_labor_only=job.is_labor_only,
        is_odd_job=job.is_odd_job,
        job_date=job_date,
        is_weekend=job.is_weekend,
        is_holiday=job.is_holiday,
    )
    travel = travel_fee(job.distance_miles)
    mileage = mileage_fee(job.distance_miles)
    overage = box_overage_fee(job.box_count_quoted, job.actual_box_count)
    bags = mattress_bag_fee(job.mattress_bag_count)
    materials = _money(job.materials_cost)

    total = labor.cost + travel + mileage + overage + bags + materials
    logger.debug(
        "Actual: crew=%s hours=%s boxes=%s/%s total=%s",
        job.crew_size, job.actual_hours, job.actual_box_count, job.box_count_quoted, total,
    )
    return ActualBreakdown(
        labor_cost=labor.cost,
        travel_fee=travel,
        mileage_fee=mileage,
        box_overage_fee=overage,
        mattress_bag_fee=bags,
        materials_cost=materials,
        total_actual=total,
        breakdown=labor.breakdown,
    )


def job_profit(revenue, expenses=None) -> ProfitSummary:
    """
    Profit and margin (percent) for a finished job.

    `expenses` is a ProfitExpenses or a plain dict with any of crew_pay,
    fuel_cost, rental_cost, materials_cost, other; missing or None items
    count as 0.
    No revenue means a 0% margin rather than a division by zero.
    """
    if expenses is None:
        expenses = ProfitExpenses()
    elif isinstance(expenses, Mapping):
        # unset costs on a stored record come through as None
        expenses = ProfitExpenses(**{k: v for k, v in expenses.items() if v is not None})

    revenue = _decimal(revenue)
    total_expenses = (
        expenses.crew_pay
        + expenses.fuel_cost
        + expenses.rental_cost
        + expenses.materials_cost
        + expenses.other
    )
    profit = revenue - total_expenses
    margin = (profit / revenue * 100) if revenue > 0 else Decimal(0)

    return ProfitSummary(
        total_expenses=_money(total_expenses),
        profit=_money(profit),
        profit_margin=_money(margin),
    )


def pricing_input_from_job(job: Mapping, actual: bool = False):
    """
    Build the pricing input for a stored job record.

    Reads crew_size, estimated_hours/actual_hours, total_distance,
    box_count_quoted, box_count_actual, mattress_bag_count, materials_cost,
    the job-type flags and preferred_date. Missing counts and costs are 0.
    Raises TariffInputError when the record can't be priced.
    """
    data = {
        "crew_size": job.get("crew_size"),
        "distance_miles": job.get("total_distance"),
        "box_count_quoted": job.get("box_count_quoted") or 0,
        "mattress_bag_count": job.get("mattress_bag_count") or 0,
        "materials_cost": job.get("materials_cost") or 0,
        "is_odd_job": bool(job.get("is_odd_job")),
        "is_labor_only": bool(job.get("is_labor_only")),
        "preferred_date": job.get("preferred_date"),
        "is_weekend": bool(job.get("is_weekend")),
        "is_holiday": bool(job.get("is_holiday")),
    }
    try:
        if actual:
            return ActualPricingInput(
                actual_hours=job.get("actual_hours"),
                actual_box_count=job.get("box_count_actual") or 0,
                **data,
            )
        return JobPricingInput(estimated_hours=job.get("estimated_hours"), **data)
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        raise TariffInputError(f"Job can't be priced, invalid or missing: {fields}") from e


def rate_card() -> RateCard:
    """The published tariff, for the public rates page."""
    return RateCard(
        hourly_rates=dict(HOURLY_RATES),
        labor_only_rates=dict(LABOR_ONLY_RATES),
        travel_base_fee=TRAVEL_BASE_FEE,
        travel_mileage_rate=TRAVEL_MILEAGE_RATE,
        long_distance_threshold_miles=LONG_DISTANCE_THRESHOLD_MILES,
        long_distance_rate=LONG_DISTANCE_RATE,
        box_overage_allowance_pct=BOX_OVERAGE_ALLOWANCE * 100,
        box_overage_fee=BOX_OVERAGE_FEE,
        mattress_bag_fee=MATTRESS_BAG_FEE,
        odd_job_minimum_hours=ODD_JOB_MINIMUM_HOURS,
        busy_season_minimum_hours=dict(_BUSY_SEASON_MINIMUMS),
        off_season_minimum_hours=dict(_OFF_SEASON_MINIMUMS),
        busy_season_months=list(BUSY_SEASON_MONTHS),
        saturday_surcharge_hours=SATURDAY_SURCHARGE_HOURS,
        sunday_holiday_surcharge_hours=SUNDAY_HOLIDAY_SURCHARGE_HOURS,
    )
