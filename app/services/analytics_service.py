"""근무 통계 서비스 — 주간 시간, 일 평균, 누락일, 요약 통계.

Analytics Service — Hours and coverage statistics derived from shifts.
Only worked shifts count (``completed``, ``pending``, ``approved``);
rostered ``scheduled`` shifts and ``rejected`` ones are left out.
"""

from collections import defaultdict
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.database import utcnow
from app.models.shift import Shift
from app.models.user import User
from app.repositories.shift_repository import shift_repository
from app.repositories.user_repository import user_repository
from app.schemas.analytics import (
    AnalyticsSummaryResponse,
    CompanyHoursResponse,
    DailyAverageResponse,
    EmployeeHours,
    MissingEntriesResponse,
    ShiftTypeCount,
    WeeklyHoursResponse,
)
from app.services.shift_service import check_date_range
from app.utils.earnings import EARNING_STATUSES
from app.utils.time_utils import HOUR_QUANTUM, is_overnight, iter_dates, shift_duration_hours, week_start

_ZERO: Decimal = Decimal("0.00")


def default_week(start: date | None, end: date | None) -> tuple[date, date]:
    """범위가 없으면 이번 주 월~일 (Defaults to the current Monday..Sunday)."""
    if start is None:
        start = week_start(utcnow().date())
    if end is None:
        end = start + timedelta(days=6)
    check_date_range(start, end)
    return start, end


def total_hours(shifts: Sequence[Shift]) -> Decimal:
    return sum((shift_duration_hours(s.start_time, s.end_time) for s in shifts), _ZERO)


class AnalyticsService:

    async def _worked_shifts(
        self, db: AsyncSession, user_id: UUID, start: date, end: date
    ) -> Sequence[Shift]:
        return await shift_repository.get_shifts(db, user_id, start, end, statuses=tuple(EARNING_STATUSES))

    async def weekly_hours(
        self,
        db: AsyncSession,
        user: User,
        start: date | None = None,
        end: date | None = None,
    ) -> WeeklyHoursResponse:
        start, end = default_week(start, end)
        shifts: Sequence[Shift] = await self._worked_shifts(db, user.id, start, end)
        return WeeklyHoursResponse(start_date=start, end_date=end, hours=total_hours(shifts))

    async def daily_average(
        self,
        db: AsyncSession,
        user: User,
        start: date | None = None,
        end: date | None = None,
    ) -> DailyAverageResponse:
        """기간 총 시간을 기간 일수(양끝 포함)로 나눈 평균."""
        start, end = default_week(start, end)
        shifts: Sequence[Shift] = await self._worked_shifts(db, user.id, start, end)
        days: int = (end - start).days + 1
        average: Decimal = (total_hours(shifts) / days).quantize(HOUR_QUANTUM, rounding=ROUND_HALF_UP)
        return DailyAverageResponse(start_date=start, end_date=end, days=days, average=average)

    async def missing_dates(
        self,
        db: AsyncSession,
        user_id: UUID,
        start: date,
        end: date,
    ) -> list[date]:
        """근무 기록이 하나도 없는 날짜 목록 (Dates without any shift)."""
        check_date_range(start, end)
        logged: set[date] = await shift_repository.get_logged_dates(db, user_id, start, end)
        return [d for d in iter_dates(start, end) if d not in logged]

    async def missing_entries(
        self,
        db: AsyncSession,
        user: User,
        start: date | None = None,
        end: date | None = None,
    ) -> MissingEntriesResponse:
        start, end = default_week(start, end)
        missing: list[date] = await self.missing_dates(db, user.id, start, end)
        return MissingEntriesResponse(start_date=start, end_date=end, missing_dates=missing)

    async def summary(
        self,
        db: AsyncSession,
        user: User,
        start: date | None = None,
        end: date | None = None,
    ) -> AnalyticsSummaryResponse:
        """기간 요약: 총 시간, 건수, 최장 근무, 야간 근무 수, 분류별 집계."""
        start, end = default_week(start, end)
        shifts: Sequence[Shift] = await self._worked_shifts(db, user.id, start, end)

        durations: list[Decimal] = [shift_duration_hours(s.start_time, s.end_time) for s in shifts]
        total: Decimal = sum(durations, _ZERO)
        days: int = (end - start).days + 1

        counts: dict[str, int] = defaultdict(int)
        hours_by_type: dict[str, Decimal] = defaultdict(lambda: _ZERO)
        for shift, hours in zip(shifts, durations):
            counts[shift.shift_type] += 1
            hours_by_type[shift.shift_type] += hours

        return AnalyticsSummaryResponse(
            start_date=start,
            end_date=end,
            total_hours=total,
            shift_count=len(shifts),
            daily_average=(total / days).quantize(HOUR_QUANTUM, rounding=ROUND_HALF_UP),
            longest_shift_hours=max(durations, default=_ZERO),
            overnight_shift_count=sum(1 for s in shifts if is_overnight(s.start_time, s.end_time)),
            by_shift_type=[
                ShiftTypeCount(shift_type=t, count=counts[t], hours=hours_by_type[t])
                for t in sorted(counts)
            ],
        )

    async def company_hours(
        self,
        db: AsyncSession,
        company_id: UUID,
        start: date | None = None,
        end: date | None = None,
    ) -> CompanyHoursResponse:
        """회사 직원별 근무 시간 집계 (Per-employee worked hours)."""
        start, end = default_week(start, end)
        shifts: Sequence[Shift] = await shift_repository.get_company_shifts(db, company_id, start, end)
        members: Sequence[User] = await user_repository.get_company_members(db, company_id)
        names: dict[UUID, str] = {m.id: m.name for m in members}

        hours: dict[UUID, Decimal] = defaultdict(lambda: _ZERO)
        counts: dict[UUID, int] = defaultdict(int)
        for shift in shifts:
            if shift.status not in EARNING_STATUSES:
                continue
            hours[shift.user_id] += shift_duration_hours(shift.start_time, shift.end_time)
            counts[shift.user_id] += 1

        employees: list[EmployeeHours] = [
            EmployeeHours(
                user_id=str(user_id),
                name=names.get(user_id, ""),
                hours=hours[user_id],
                shift_count=counts[user_id],
            )
            for user_id in sorted(hours, key=lambda u: names.get(u, ""))
        ]
        return CompanyHoursResponse(
            start_date=start,
            end_date=end,
            total_hours=sum(hours.values(), _ZERO),
            employees=employees,
        )


# 싱글턴 인스턴스 — Singleton instance
analytics_service: AnalyticsService = AnalyticsService()
