"""급여/청구 계산 Pydantic 스키마.

Billing (tiered) and earnings (flat rate) response schemas.
"""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field, model_validator

from app.schemas.common import DAY_TYPE_PATTERN, TIME_PATTERN


class TierLineResponse(BaseModel):
    """구간별 계산 내역."""

    tier_order: int
    hours_in_tier: Decimal | None
    hours_worked: Decimal
    rate_per_hour: int
    amount: int
    currency: str


class PayBreakdownResponse(BaseModel):
    """구간 급여 계산 결과.

    ``total_amount`` is rounded once from the exact tier sum.
    """

    day_type: str
    total_hours: Decimal
    total_amount: int
    currency: str
    tiers: list[TierLineResponse]
    unbilled_hours: Decimal
    explanation: str


class ShiftBillingResponse(BaseModel):
    """근무 한 건의 청구 계산."""

    shift_id: str
    user_id: str
    work_date: date
    start_time: str
    end_time: str
    holiday_description: str | None
    breakdown: PayBreakdownResponse


class UnconfiguredShift(BaseModel):
    """요율 미설정으로 계산하지 못한 근무."""

    shift_id: str
    user_id: str
    work_date: date
    day_type: str
    hours: Decimal


class BillingReportResponse(BaseModel):
    """기간 청구 보고서.

    Shifts without applicable tiers are listed under ``unconfigured``
    instead of being counted as zero.
    """

    start_date: date
    end_date: date
    currency: str
    total_hours: Decimal
    total_amount: int
    shifts: list[ShiftBillingResponse]
    unconfigured: list[UnconfiguredShift]
    totals_by_day_type: dict[str, int]


class BillingQuoteRequest(BaseModel):
    """가상 근무의 청구 미리보기 요청.

    Give either ``work_date`` with start and end times, or ``hours`` with a
    ``day_type``.
    """

    work_date: date | None = None
    start_time: str | None = Field(None, pattern=TIME_PATTERN)
    end_time: str | None = Field(None, pattern=TIME_PATTERN)
    hours: Decimal | None = None
    day_type: str | None = Field(None, pattern=DAY_TYPE_PATTERN)

    @model_validator(mode="after")
    def _check_inputs(self) -> "BillingQuoteRequest":
        by_times: bool = self.start_time is not None and self.end_time is not None and self.work_date is not None
        by_hours: bool = self.hours is not None and (self.day_type is not None or self.work_date is not None)
        if not by_times and not by_hours:
            raise ValueError("Provide work_date with start_time and end_time, or hours with day_type")
        return self


class CategoryEarningsResponse(BaseModel):
    category: str  # weekday | weeknight | saturday | sunday | public_holiday
    hours: Decimal
    rate: int
    earnings: int


class EarningsResponse(BaseModel):
    """직원 정액 요율 수입 집계."""

    period_start: date
    period_end: date
    currency: str
    rates_configured: bool
    total_hours: Decimal
    total_earnings: int
    breakdown: list[CategoryEarningsResponse]
