"""직원 정액 요율 수입 집계.

Employee earnings aggregation using an employee's flat per-category rates.
Shifts are bucketed into ``weekday``, ``weeknight``, ``saturday``, ``sunday``
and ``public_holiday``; a weekday shift that starts at or after the night
cutoff is a weeknight shift.
"""

from collections.abc import Container, Iterable
from dataclasses import dataclass, field
from datetime import date, time
from decimal import ROUND_HALF_UP, Decimal
from typing import Protocol

from app.utils.pay_calculator import DayType, classify_day_type
from app.utils.time_utils import shift_duration_hours, starts_at_or_after

# 집계 카테고리 순서 — Category order used in the breakdown
CATEGORIES: tuple[str, ...] = ("weekday", "weeknight", "saturday", "sunday", "public_holiday")

# 수입에 포함되는 근무 상태 — Statuses that count as worked time
EARNING_STATUSES: frozenset[str] = frozenset({"completed", "pending", "approved"})


class ShiftLike(Protocol):
    work_date: date
    start_time: time
    end_time: time
    status: str


class RatesLike(Protocol):
    weekday_rate: int
    weeknight_rate: int
    saturday_rate: int
    sunday_rate: int
    public_holiday_rate: int
    currency: str


@dataclass
class CategoryEarnings:
    category: str
    hours: Decimal
    rate: int
    earnings: int


@dataclass
class EarningsSummary:
    """수입 집계 결과 (Aggregated earnings for a period).

    ``rates_configured`` is False when the employee has no rate record; in
    that case every amount is zero but hours are still reported.
    """

    period_start: date
    period_end: date
    currency: str
    rates_configured: bool
    total_hours: Decimal = Decimal("0.00")
    total_earnings: int = 0
    breakdown: list[CategoryEarnings] = field(default_factory=list)


def rate_for_category(rates: RatesLike, category: str) -> int:
    """카테고리에 해당하는 정액 요율 (Flat rate for a category)."""
    return int(getattr(rates, f"{category}_rate"))


def categorize_shift(shift: ShiftLike, holidays: Container[date], night_start: str | time) -> str:
    """근무를 수입 카테고리로 분류합니다.

    Holidays and weekends are decided by the date alone; only weekday shifts
    are split on the night cutoff.
    """
    day_type: DayType = classify_day_type(shift.work_date, holidays)
    if day_type is DayType.HOLIDAY:
        return "public_holiday"
    if day_type is DayType.SATURDAY:
        return "saturday"
    if day_type is DayType.SUNDAY:
        return "sunday"
    if starts_at_or_after(shift.start_time, night_start):
        return "weeknight"
    return "weekday"


def aggregate_earnings(
    shifts: Iterable[ShiftLike],
    rates: RatesLike | None,
    holidays: Container[date],
    night_start: str | time,
    period_start: date,
    period_end: date,
    default_currency: str,
) -> EarningsSummary:
    """기간 내 근무를 카테고리별로 합산하고 정액 요율을 곱합니다.

    Args:
        shifts: 기간 내 근무 목록 (Shifts already filtered to the period)
        rates: 직원 요율, 없으면 None (Employee flat rates or None)
        holidays: 공휴일 날짜 집합 (Registered holiday dates)
        night_start: 평일 야간 기준 시각 (Weeknight cutoff)
        period_start / period_end: 집계 기간 (Reported period)
        default_currency: 요율 미설정 시 통화 (Currency used without rates)

    Returns:
        EarningsSummary: 총 수입, 총 시간, 카테고리별 내역
    """
    hours_by_category: dict[str, Decimal] = {c: Decimal(0) for c in CATEGORIES}
    for shift in shifts:
        if shift.status not in EARNING_STATUSES:
            continue
        category: str = categorize_shift(shift, holidays, night_start)
        hours_by_category[category] += shift_duration_hours(shift.start_time, shift.end_time)

    summary: EarningsSummary = EarningsSummary(
        period_start=period_start,
        period_end=period_end,
        currency=rates.currency if rates is not None else default_currency,
        rates_configured=rates is not None,
    )

    for category in CATEGORIES:
        hours: Decimal = hours_by_category[category]
        if hours == 0:
            continue
        rate: int = rate_for_category(rates, category) if rates is not None else 0
        earnings: int = int((hours * rate).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
        summary.breakdown.append(CategoryEarnings(category=category, hours=hours, rate=rate, earnings=earnings))
        summary.total_hours += hours
        summary.total_earnings += earnings

    return summary
