"""청구/수입 서비스 — 구간 요율 청구 계산과 직원 정액 요율 수입 집계.

Billing Service — Tiered billing for company shifts and flat-rate earnings.

Billing:
    근무 날짜 → 요일 유형 → 해당 날짜에 유효한 구간 → 구간 계산
    (Date → day type → tiers valid on that date → tier walk)
    구간이 없으면 0원이 아니라 ConfigurationMissingError (422)
    (Missing tiers are an error, never a silent zero)

Earnings:
    직원 요율이 없으면 rates_configured=False 와 0원 (No error for employees)
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.company import Company
from app.models.rate import EmployeeRate, RateTier
from app.models.shift import Shift
from app.models.user import User
from app.repositories.company_repository import company_repository
from app.repositories.holiday_repository import holiday_repository
from app.repositories.rate_repository import employee_rate_repository, rate_tier_repository
from app.repositories.shift_repository import shift_repository
from app.repositories.user_repository import user_repository
from app.schemas.billing import (
    BillingQuoteRequest,
    BillingReportResponse,
    CategoryEarningsResponse,
    EarningsResponse,
    PayBreakdownResponse,
    ShiftBillingResponse,
    TierLineResponse,
    UnconfiguredShift,
)
from app.services.analytics_service import default_week
from app.utils.earnings import EARNING_STATUSES, EarningsSummary, aggregate_earnings
from app.utils.exceptions import ConfigurationMissingError, NotFoundError
from app.utils.pay_calculator import DayType, PayBreakdown, TierSpec, calculate_tiered_pay, classify_day_type
from app.utils.time_utils import format_hhmm, shift_duration_hours

logger = logging.getLogger(__name__)


def to_tier_specs(tiers: Sequence[RateTier]) -> list[TierSpec]:
    return [
        TierSpec(tier_order=t.tier_order, hours_in_tier=t.hours_in_tier, rate_per_hour=t.rate_per_hour)
        for t in tiers
    ]


def _is_complete_ladder(tiers: Sequence[RateTier]) -> bool:
    """날짜로 걸러진 구간이 1부터 연속이고 무제한 구간이 마지막에만 있는지."""
    orders: list[int] = [t.tier_order for t in tiers]
    if orders != list(range(1, len(tiers) + 1)):
        return False
    return all(t.hours_in_tier is not None for t in tiers[:-1])


def breakdown_to_response(breakdown: PayBreakdown, day_type: DayType) -> PayBreakdownResponse:
    return PayBreakdownResponse(
        day_type=day_type.value,
        total_hours=breakdown.total_hours,
        total_amount=breakdown.total_amount,
        currency=breakdown.currency,
        tiers=[
            TierLineResponse(
                tier_order=line.tier_order,
                hours_in_tier=line.hours_in_tier,
                hours_worked=line.hours_worked,
                rate_per_hour=line.rate_per_hour,
                amount=line.amount,
                currency=line.currency,
            )
            for line in breakdown.tiers
        ],
        unbilled_hours=breakdown.unbilled_hours,
        explanation=breakdown.explanation,
    )


class BillingService:
    """구간 요율 청구 및 정액 요율 수입 계산 서비스."""

    async def _company(self, db: AsyncSession, company_id: UUID) -> Company:
        company: Company | None = await company_repository.get_by_id(db, company_id)
        if company is None:
            raise NotFoundError("Company not found")
        return company

    async def _price(
        self,
        db: AsyncSession,
        company: Company,
        hours: Decimal,
        day_type: DayType,
        on_date: date | None,
    ) -> PayBreakdown:
        tiers: Sequence[RateTier] = await rate_tier_repository.get_rate_tiers(
            db, company.id, day_type.value, on_date
        )
        if tiers and not _is_complete_ladder(tiers):
            raise ConfigurationMissingError(
                f"Rate tiers for {day_type.value} do not form a complete ladder on {on_date}",
                company_id=company.id,
                day_type=day_type.value,
            )
        currency: str = tiers[0].currency if tiers else company.currency
        return calculate_tiered_pay(
            hours,
            to_tier_specs(tiers),
            currency,
            company_id=company.id,
            day_type=day_type,
        )

    async def _bill(
        self,
        db: AsyncSession,
        company: Company,
        shift: Shift,
        holidays: set[date],
    ) -> ShiftBillingResponse:
        day_type: DayType = classify_day_type(shift.work_date, holidays)
        hours: Decimal = shift_duration_hours(shift.start_time, shift.end_time)
        breakdown: PayBreakdown = await self._price(db, company, hours, day_type, shift.work_date)
        description: str | None = (
            await holiday_repository.describe(db, shift.work_date) if day_type is DayType.HOLIDAY else None
        )
        return ShiftBillingResponse(
            shift_id=str(shift.id),
            user_id=str(shift.user_id),
            work_date=shift.work_date,
            start_time=format_hhmm(shift.start_time),
            end_time=format_hhmm(shift.end_time),
            holiday_description=description,
            breakdown=breakdown_to_response(breakdown, day_type),
        )

    async def bill_shift(
        self,
        db: AsyncSession,
        company_id: UUID,
        shift_id: UUID,
    ) -> ShiftBillingResponse:
        """근무 한 건의 청구 금액을 계산합니다.

        Raises:
            NotFoundError: 회사 근무가 아님 (Not a shift of this company)
            ConfigurationMissingError: 해당 요일 유형 구간 없음 (No tiers, 422)
        """
        company: Company = await self._company(db, company_id)
        shift: Shift | None = await shift_repository.get_by_id(db, shift_id, company_id)
        if shift is None:
            raise NotFoundError("Shift not found")
        holidays: set[date] = await holiday_repository.dates_between(db, shift.work_date, shift.work_date)
        return await self._bill(db, company, shift, holidays)

    async def report(
        self,
        db: AsyncSession,
        company_id: UUID,
        start: date | None = None,
        end: date | None = None,
        user_id: UUID | None = None,
    ) -> BillingReportResponse:
        """기간 청구 보고서.

        Worked shifts in the range are billed one by one. A shift whose day
        type has no tiers is listed under ``unconfigured`` and left out of
        the totals rather than failing the whole report.
        """
        start, end = default_week(start, end)
        company: Company = await self._company(db, company_id)
        holidays: set[date] = await holiday_repository.dates_between(db, start, end)
        shifts: Sequence[Shift] = await shift_repository.get_company_shifts(
            db, company_id, start, end, user_id=user_id
        )

        billed: list[ShiftBillingResponse] = []
        unconfigured: list[UnconfiguredShift] = []
        totals: dict[str, int] = {}
        total_hours: Decimal = Decimal("0.00")
        total_amount: int = 0

        for shift in shifts:
            if shift.status not in EARNING_STATUSES:
                continue
            try:
                line: ShiftBillingResponse = await self._bill(db, company, shift, holidays)
            except ConfigurationMissingError:
                day_type: DayType = classify_day_type(shift.work_date, holidays)
                unconfigured.append(
                    UnconfiguredShift(
                        shift_id=str(shift.id),
                        user_id=str(shift.user_id),
                        work_date=shift.work_date,
                        day_type=day_type.value,
                        hours=shift_duration_hours(shift.start_time, shift.end_time),
                    )
                )
                continue
            billed.append(line)
            total_hours += line.breakdown.total_hours
            total_amount += line.breakdown.total_amount
            key: str = line.breakdown.day_type
            totals[key] = totals.get(key, 0) + line.breakdown.total_amount

        if unconfigured:
            logger.warning(
                "Billing report for company %s skipped %d shifts without rate tiers",
                company_id,
                len(unconfigured),
            )

        return BillingReportResponse(
            start_date=start,
            end_date=end,
            currency=company.currency,
            total_hours=total_hours,
            total_amount=total_amount,
            shifts=billed,
            unconfigured=unconfigured,
            totals_by_day_type=totals,
        )

    async def quote(
        self,
        db: AsyncSession,
        company_id: UUID,
        data: BillingQuoteRequest,
    ) -> PayBreakdownResponse:
        """가상 근무의 청구 금액 미리보기.

        With a ``work_date`` the day type comes from the calendar and the
        holiday registry; otherwise the given ``day_type`` is used directly.
        """
        company: Company = await self._company(db, company_id)

        day_type: DayType
        if data.work_date is not None:
            holidays: set[date] = await holiday_repository.dates_between(db, data.work_date, data.work_date)
            day_type = classify_day_type(data.work_date, holidays)
        else:
            day_type = DayType(data.day_type)

        hours: Decimal
        if data.start_time is not None and data.end_time is not None:
            hours = shift_duration_hours(data.start_time, data.end_time)
        else:
            hours = data.hours
        breakdown: PayBreakdown = await self._price(db, company, hours, day_type, data.work_date)
        return breakdown_to_response(breakdown, day_type)

    # ── 정액 요율 수입 (Flat-rate earnings) ──────────────────

    async def earnings(
        self,
        db: AsyncSession,
        user_id: UUID,
        start: date | None = None,
        end: date | None = None,
    ) -> EarningsResponse:
        """직원의 기간 수입을 카테고리별로 집계합니다.

        The employee rate active on the last day of the period applies to
        the whole period.
        """
        start, end = default_week(start, end)
        shifts: Sequence[Shift] = await shift_repository.get_shifts(db, user_id, start, end)
        rates: EmployeeRate | None = await employee_rate_repository.get_employee_rate(db, user_id, end)
        holidays: set[date] = await holiday_repository.dates_between(db, start, end)

        summary: EarningsSummary = aggregate_earnings(
            shifts,
            rates,
            holidays,
            settings.NIGHT_SHIFT_START,
            start,
            end,
            settings.DEFAULT_CURRENCY,
        )
        if not summary.rates_configured and summary.total_hours > 0:
            logger.info("Earnings requested for user %s without configured rates", user_id)

        return EarningsResponse(
            period_start=summary.period_start,
            period_end=summary.period_end,
            currency=summary.currency,
            rates_configured=summary.rates_configured,
            total_hours=summary.total_hours,
            total_earnings=summary.total_earnings,
            breakdown=[
                CategoryEarningsResponse(
                    category=c.category, hours=c.hours, rate=c.rate, earnings=c.earnings
                )
                for c in summary.breakdown
            ],
        )

    async def my_earnings(
        self,
        db: AsyncSession,
        user: User,
        start: date | None = None,
        end: date | None = None,
    ) -> EarningsResponse:
        return await self.earnings(db, user.id, start, end)

    async def employee_earnings(
        self,
        db: AsyncSession,
        company_id: UUID,
        user_id: UUID,
        start: date | None = None,
        end: date | None = None,
    ) -> EarningsResponse:
        """관리자용 직원 수입 조회 (Company members only)."""
        if await user_repository.get_member(db, company_id, user_id) is None:
            raise NotFoundError("Employee not found")
        return await self.earnings(db, user_id, start, end)


# 싱글턴 인스턴스 — Singleton instance
billing_service: BillingService = BillingService()
