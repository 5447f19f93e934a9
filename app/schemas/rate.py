"""요율 설정 Pydantic 스키마.

Rate tier and employee flat rate request/response schemas.
All monetary values are integers in minor currency units (cents).
"""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from app.schemas.common import CURRENCY_PATTERN, DAY_TYPE_PATTERN

TIER_SHIFT_TYPE_PATTERN: str = r"^(day|night|weekend|holiday|custom)$"


class RateTierCreate(BaseModel):
    """요율 구간 생성 요청.

    Attributes:
        day_type: 요일 유형 (weekday | saturday | sunday | holiday)
        tier_order: 구간 순서 (1-based position)
        hours_in_tier: 구간 시간, None이면 나머지 전부 (None = unbounded last tier)
        rate_per_hour: 시간당 요율, 센트 (Hourly rate in cents)
        shift_type: 구간 분류 (Informational category)
        currency: 통화 (Defaults to the company currency)
        valid_from / valid_to: 적용 기간 (Inclusive, None = open)
    """

    day_type: str = Field(..., pattern=DAY_TYPE_PATTERN)
    tier_order: int = Field(..., ge=1)
    hours_in_tier: Decimal | None = Field(None, gt=0, max_digits=5, decimal_places=2)
    rate_per_hour: int = Field(..., ge=0)
    shift_type: str = Field("day", pattern=TIER_SHIFT_TYPE_PATTERN)
    currency: str | None = Field(None, pattern=CURRENCY_PATTERN)
    valid_from: date | None = None
    valid_to: date | None = None


class RateTierUpdate(BaseModel):
    """요율 구간 수정 요청 (부분 업데이트; day_type 변경 불가)."""

    tier_order: int | None = Field(None, ge=1)
    hours_in_tier: Decimal | None = Field(None, gt=0, max_digits=5, decimal_places=2)
    rate_per_hour: int | None = Field(None, ge=0)
    shift_type: str | None = Field(None, pattern=TIER_SHIFT_TYPE_PATTERN)
    currency: str | None = Field(None, pattern=CURRENCY_PATTERN)
    valid_from: date | None = None
    valid_to: date | None = None


class RateTierGroupItem(BaseModel):
    """그룹 교체 시 개별 구간 (tier_order는 목록 순서로 부여)."""

    hours_in_tier: Decimal | None = Field(None, gt=0, max_digits=5, decimal_places=2)
    rate_per_hour: int = Field(..., ge=0)
    shift_type: str = Field("day", pattern=TIER_SHIFT_TYPE_PATTERN)


class RateTierGroupReplace(BaseModel):
    """요일 유형 구간 그룹 전체 교체 요청.

    Tiers are numbered 1..N in list order. An empty list clears the group.
    """

    tiers: list[RateTierGroupItem] = Field(..., max_length=20)
    currency: str | None = Field(None, pattern=CURRENCY_PATTERN)
    valid_from: date | None = None
    valid_to: date | None = None


class RateTierResponse(BaseModel):
    id: str
    company_id: str
    day_type: str
    tier_order: int
    hours_in_tier: Decimal | None
    rate_per_hour: int
    shift_type: str
    currency: str
    valid_from: date | None
    valid_to: date | None
    created_at: datetime


class EmployeeRateUpsert(BaseModel):
    """직원 정액 요율 생성/수정 요청.

    Attributes:
        weekday_rate ... public_holiday_rate: 카테고리별 시급, 센트 (Cents per hour)
        currency: 통화 (Defaults to the company currency)
        valid_from / valid_to: 적용 기간 (Inclusive, None = open)
    """

    weekday_rate: int = Field(..., ge=0)
    weeknight_rate: int = Field(..., ge=0)
    saturday_rate: int = Field(..., ge=0)
    sunday_rate: int = Field(..., ge=0)
    public_holiday_rate: int = Field(..., ge=0)
    currency: str | None = Field(None, pattern=CURRENCY_PATTERN)
    valid_from: date | None = None
    valid_to: date | None = None


class EmployeeRateResponse(BaseModel):
    id: str
    user_id: str
    company_id: str
    weekday_rate: int
    weeknight_rate: int
    saturday_rate: int
    sunday_rate: int
    public_holiday_rate: int
    currency: str
    valid_from: date | None
    valid_to: date | None
    created_at: datetime


class MyRatesResponse(BaseModel):
    """직원 본인 요율 조회 응답 — 미설정이면 rates는 None."""

    rates_configured: bool
    rates: EmployeeRateResponse | None
    night_shift_start: str  # 평일 야간 기준 시각 (Weeknight cutoff HH:MM)
