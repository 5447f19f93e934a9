"""근무 레포지토리 — 근무 기록 조회.

Shift Repository — Shift lookups by owner, company and date range.
"""

from datetime import date
from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.shift import Shift
from app.repositories.base import BaseRepository


class ShiftRepository(BaseRepository[Shift]):
    """근무 레포지토리.

    Extends:
        BaseRepository[Shift]
    """

    def __init__(self) -> None:
        super().__init__(Shift)

    def _range_query(self, start: date | None, end: date | None) -> Select:
        query: Select = select(Shift)
        if start is not None:
            query = query.where(Shift.work_date >= start)
        if end is not None:
            query = query.where(Shift.work_date <= end)
        return query.order_by(Shift.work_date, Shift.start_time)

    async def get_shifts(
        self,
        db: AsyncSession,
        user_id: UUID,
        start: date | None = None,
        end: date | None = None,
        statuses: Sequence[str] | None = None,
    ) -> Sequence[Shift]:
        """사용자의 근무를 날짜 범위로 조회합니다.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 근무자 UUID (Shift owner)
            start / end: 날짜 범위, 양끝 포함 (Inclusive range, None = open)
            statuses: 상태 필터 (Optional status filter)

        Returns:
            Sequence[Shift]: 날짜, 시작 시각 순 근무 목록 (Ordered shifts)
        """
        query: Select = self._range_query(start, end).where(Shift.user_id == user_id)
        if statuses:
            query = query.where(Shift.status.in_(statuses))
        result = await db.execute(query)
        return result.scalars().all()

    def company_query(
        self,
        company_id: UUID,
        start: date | None = None,
        end: date | None = None,
        user_id: UUID | None = None,
        status: str | None = None,
    ) -> Select:
        """회사 근무 조회 쿼리 (Query for company shifts, used for pagination)."""
        query: Select = self._range_query(start, end).where(Shift.company_id == company_id)
        if user_id is not None:
            query = query.where(Shift.user_id == user_id)
        if status is not None:
            query = query.where(Shift.status == status)
        return query

    async def get_company_shifts(
        self,
        db: AsyncSession,
        company_id: UUID,
        start: date | None = None,
        end: date | None = None,
        user_id: UUID | None = None,
        status: str | None = None,
    ) -> Sequence[Shift]:
        """회사 근무를 날짜 범위로 조회합니다 (Company shifts in a range)."""
        result = await db.execute(self.company_query(company_id, start, end, user_id, status))
        return result.scalars().all()

    async def get_pending(
        self,
        db: AsyncSession,
        company_id: UUID,
    ) -> Sequence[Shift]:
        """승인 대기 근무 목록 (Shifts awaiting manager approval)."""
        return await self.get_company_shifts(db, company_id, status="pending")

    async def get_logged_dates(
        self,
        db: AsyncSession,
        user_id: UUID,
        start: date,
        end: date,
    ) -> set[date]:
        """근무 기록이 있는 날짜 집합 (Dates on which the user has a shift)."""
        query: Select = (
            select(Shift.work_date)
            .where(Shift.user_id == user_id, Shift.work_date >= start, Shift.work_date <= end)
            .distinct()
        )
        result = await db.execute(query)
        return set(result.scalars().all())

    async def count_by_company(
        self,
        db: AsyncSession,
        company_id: UUID,
        status: str | None = None,
    ) -> int:
        """회사 근무 수 (Number of company shifts, optionally by status)."""
        query: Select = select(func.count()).select_from(Shift).where(Shift.company_id == company_id)
        if status is not None:
            query = query.where(Shift.status == status)
        return (await db.execute(query)).scalar() or 0


# 싱글턴 인스턴스 — Singleton instance
shift_repository: ShiftRepository = ShiftRepository()
