"""요율 구간 급여 계산기 — 요일 유형 분류와 구간별 금액 산출.

Tiered pay calculator. Classifies a shift date into a day type and walks the
company's ordered rate tiers for that day type to produce an itemized
breakdown.

Money is always an integer count of minor currency units (cents). Hours are
``Decimal`` so that tier arithmetic is exact; the only rounding happens once,
on the total, using half-up.
"""

import enum
from collections.abc import Container, Sequence
from dataclasses import dataclass, field
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from app.utils.exceptions import ConfigurationMissingError, InvalidDurationError

_CENT: Decimal = Decimal("1")


class DayType(str, enum.Enum):
    """요일 유형 (Calendar day classification used to select rates)."""

    WEEKDAY = "weekday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"
    HOLIDAY = "holiday"


def classify_day_type(day: date, holidays: Container[date] = ()) -> DayType:
    """날짜를 요일 유형으로 분류합니다.

    Classify a calendar date. A registered public holiday wins over the
    day of week, so a Saturday holiday is ``holiday``.

    Args:
        day: 분류할 날짜 (Date to classify)
        holidays: 공휴일 날짜 집합 (Registered public holiday dates)
    """
    if day in holidays:
        return DayType.HOLIDAY
    iso_weekday: int = day.isoweekday()
    if iso_weekday == 6:
        return DayType.SATURDAY
    if iso_weekday == 7:
        return DayType.SUNDAY
    return DayType.WEEKDAY


@dataclass(frozen=True)
class TierSpec:
    """계산용 요율 구간 (A single rate tier as seen by the calculator).

    Attributes:
        tier_order: 구간 순서, 1부터 (1-based tier position)
        hours_in_tier: 구간 포함 시간, None이면 나머지 전부 (None = unbounded remainder)
        rate_per_hour: 시간당 요율, 최소 통화 단위 (Rate in minor units)
    """

    tier_order: int
    hours_in_tier: Decimal | None
    rate_per_hour: int


@dataclass
class TierLine:
    """구간별 계산 결과 (One itemized line of the breakdown)."""

    tier_order: int
    hours_in_tier: Decimal | None
    hours_worked: Decimal
    rate_per_hour: int
    amount: int
    currency: str
    exact_amount: Decimal = field(repr=False, default=Decimal(0))


@dataclass
class PayBreakdown:
    """급여 계산 결과 (Result of a tiered pay calculation).

    ``total_amount`` is the exact per-tier sum rounded once, so it can differ
    from ``sum(line.amount)`` by at most one minor unit per tier.
    """

    total_amount: int
    total_hours: Decimal
    currency: str
    tiers: list[TierLine]
    unbilled_hours: Decimal
    explanation: str


def _money(cents: int, currency: str) -> str:
    sign: str = "-" if cents < 0 else ""
    cents = abs(cents)
    symbol: str = "$" if currency in ("AUD", "USD", "NZD", "CAD") else f"{currency} "
    return f"{sign}{symbol}{cents // 100:,}.{cents % 100:02d}"


def _round_cents(value: Decimal) -> int:
    return int(value.quantize(_CENT, rounding=ROUND_HALF_UP))


def _coerce_hours(worked_hours: Decimal | float | int | str) -> Decimal:
    try:
        hours: Decimal = Decimal(str(worked_hours))
    except (InvalidOperation, ValueError):
        raise InvalidDurationError(f"Worked hours '{worked_hours}' is not a number")
    if not hours.is_finite() or hours < 0:
        raise InvalidDurationError()
    return hours


def calculate_tiered_pay(
    worked_hours: Decimal | float | int | str,
    tiers: Sequence[TierSpec],
    currency: str,
    *,
    company_id: object | None = None,
    day_type: DayType | str | None = None,
) -> PayBreakdown:
    """근무 시간을 요율 구간에 따라 금액으로 환산합니다.

    Walk the tiers in order. Each tier consumes
    ``min(remaining, hours_in_tier)`` hours (all remaining hours when the
    tier is unbounded) at its hourly rate. The walk stops when no hours
    remain or the tiers run out; hours a fully bounded ladder cannot absorb
    are reported as ``unbilled_hours``.

    Args:
        worked_hours: 근무 시간 (Non-negative finite hours)
        tiers: 한 요일 유형의 요율 구간 (Tiers for one day type)
        currency: 통화 코드 (Currency code)
        company_id / day_type: 오류 메시지용 컨텍스트 (Context for errors)

    Returns:
        PayBreakdown: 구간별 내역과 총액 (Itemized breakdown and total)

    Raises:
        InvalidDurationError: 시간이 음수이거나 유한하지 않음
        ConfigurationMissingError: 적용 가능한 구간이 없음 (No tiers)
    """
    hours: Decimal = _coerce_hours(worked_hours)
    if not tiers:
        label: str = day_type.value if isinstance(day_type, DayType) else str(day_type or "")
        raise ConfigurationMissingError(
            f"No rate tiers configured for {label or 'this'} day type",
            company_id=company_id,
            day_type=label or None,
        )

    remaining: Decimal = hours
    lines: list[TierLine] = []
    exact_total: Decimal = Decimal(0)

    for tier in sorted(tiers, key=lambda t: t.tier_order):
        if remaining <= 0:
            break
        capacity: Decimal = remaining if tier.hours_in_tier is None else Decimal(tier.hours_in_tier)
        consumed: Decimal = min(remaining, capacity)
        exact: Decimal = consumed * Decimal(tier.rate_per_hour)
        exact_total += exact
        lines.append(
            TierLine(
                tier_order=tier.tier_order,
                hours_in_tier=tier.hours_in_tier,
                hours_worked=consumed,
                rate_per_hour=tier.rate_per_hour,
                amount=_round_cents(exact),
                currency=currency,
                exact_amount=exact,
            )
        )
        remaining -= consumed
        if tier.hours_in_tier is None:
            break

    total: int = _round_cents(exact_total)
    billed: Decimal = hours - remaining

    parts: list[str] = [
        f"{line.hours_worked:.2f}h @ {_money(line.rate_per_hour, currency)}/h "
        f"(tier {line.tier_order}) = {_money(line.amount, currency)}"
        for line in lines
    ]
    explanation: str = "; ".join(parts) if parts else "0.00h worked"
    explanation += f". Total {_money(total, currency)} for {billed:.2f}h"
    if remaining > 0:
        explanation += f" ({remaining:.2f}h beyond the last tier not billed)"

    return PayBreakdown(
        total_amount=total,
        total_hours=hours,
        currency=currency,
        tiers=lines,
        unbilled_hours=remaining,
        explanation=explanation,
    )
