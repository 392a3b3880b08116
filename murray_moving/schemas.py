from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .lifecycle import JobStatus


# --- Pricing inputs ---

class PricingInputBase(BaseModel):
    crew_size: int = Field(ge=1, le=5)
    distance_miles: Decimal = Field(ge=0)  # one-way
    box_count_quoted: int = Field(default=0, ge=0)
    mattress_bag_count: int = Field(default=0, ge=0)
    materials_cost: Decimal = Field(default=Decimal("0"), ge=0)
    is_odd_job: bool = False
    is_labor_only: bool = False
    preferred_date: Optional[date] = None
    is_weekend: bool = False
    is_holiday: bool = False


class JobPricingInput(PricingInputBase):
    estimated_hours: Decimal = Field(gt=0)


class ActualPricingInput(PricingInputBase):
    actual_hours: Decimal = Field(gt=0)
    actual_box_count: int = Field(default=0, ge=0)


# --- Pricing outputs ---

class LaborBreakdown(BaseModel):
    """How the labor line was derived. Shown to the customer and kept for audit."""
    hourly_rate: Decimal
    minimum_hours: Decimal
    actual_hours: Decimal
    billable_hours: Decimal
    is_odd_job: bool
    is_labor_only: bool
    is_weekend: bool
    is_holiday: bool
    busy_season: bool
    job_date: date


class LaborCost(BaseModel):
    cost: Decimal
    breakdown: LaborBreakdown


class EstimateBreakdown(BaseModel):
    labor_cost: Decimal
    travel_fee: Decimal
    mileage_fee: Decimal
    mattress_bag_fee: Decimal
    materials_cost: Decimal
    total_estimate: Decimal
    breakdown: LaborBreakdown

    def job_fields(self) -> dict:
        """Fields merged back into the job record."""
        return self.model_dump(exclude={"breakdown"})


class ActualBreakdown(BaseModel):
    labor_cost: Decimal
    travel_fee: Decimal
    mileage_fee: Decimal
    box_overage_fee: Decimal
    mattress_bag_fee: Decimal
    materials_cost: Decimal
    total_actual: Decimal
    breakdown: LaborBreakdown

    def job_fields(self) -> dict:
        return self.model_dump(exclude={"breakdown"})


# --- Profit ---

class ProfitExpenses(BaseModel):
    crew_pay: Decimal = Decimal("0")
    fuel_cost: Decimal = Decimal("0")
    rental_cost: Decimal = Decimal("0")
    materials_cost: Decimal = Decimal("0")
    other: Decimal = Decimal("0")


class ProfitRequest(BaseModel):
    revenue: Decimal
    expenses: ProfitExpenses = Field(default_factory=ProfitExpenses)


class ProfitSummary(BaseModel):
    total_expenses: Decimal
    profit: Decimal
    profit_margin: Decimal  # percent


# --- Published tariff ---

class RateCard(BaseModel):
    hourly_rates: Dict[int, Decimal]
    labor_only_rates: Dict[int, Decimal]
    travel_base_fee: Decimal
    travel_mileage_rate: Decimal
    long_distance_threshold_miles: Decimal
    long_distance_rate: Decimal
    box_overage_allowance_pct: Decimal
    box_overage_fee: Decimal
    mattress_bag_fee: Decimal
    odd_job_minimum_hours: Decimal
    busy_season_minimum_hours: Dict[int, Decimal]
    off_season_minimum_hours: Dict[int, Decimal]
    busy_season_months: List[int]
    saturday_surcharge_hours: Decimal
    sunday_holiday_surcharge_hours: Decimal


# --- Job records ---

class JobRecord(BaseModel):
    """A stored job as the admin UI sends it. Unknown fields pass through untouched."""
    model_config = ConfigDict(extra="allow")

    id: Optional[int] = None
    title: Optional[str] = None
    status: JobStatus = JobStatus.LEAD
    job_number: Optional[str] = None
    invoice_number: Optional[str] = None
    crew_size: Optional[int] = None
    estimated_hours: Optional[Decimal] = None
    actual_hours: Optional[Decimal] = None
    total_distance: Optional[Decimal] = None
    box_count_quoted: Optional[int] = None
    box_count_actual: Optional[int] = None
    mattress_bag_count: Optional[int] = None
    materials_cost: Optional[Decimal] = None
    is_odd_job: bool = False
    is_labor_only: bool = False
    preferred_date: Optional[date] = None
    is_weekend: bool = False
    is_holiday: bool = False


class PriceJobRequest(BaseModel):
    job: JobRecord
    actual: bool = False  # True when finalizing with actual hours and boxes


class PricedJob(BaseModel):
    job: dict
    priced: bool
    pricing: Optional[Union[ActualBreakdown, EstimateBreakdown]] = None


# --- Status ---

class StatusCheckRequest(BaseModel):
    current_status: str
    requested_status: str


class StatusInfo(BaseModel):
    status: JobStatus
    display_name: str
    color_class: str
    terminal: bool
    forward_statuses: List[JobStatus]
    next_statuses: List[JobStatus]
