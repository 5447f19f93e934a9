"""요율 레포지토리 — 요율 구간 및 직원 정액 요율 조회.

Rate Repository — Rate tier ladders and employee flat rates.
Validity windows are inclusive and a NULL bound is open-ended.
"""

from datetime import date
from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.rate import EmployeeRate, RateTier
from app.repositories.base import BaseRepository


def _active_on(model: type[RateTier] | type[EmployeeRate], on_date: date) -> list:
    """적용 기간이 해당 날짜를 포함하는 조건 (Window contains ``on_date``)."""
    return [
        or_(model.valid_from.is_(None), model.valid_from <= on_date),
        or_(model.valid_to.is_(None), model.valid_to >= on_date),
    ]


class RateTierRepository(BaseRepository[RateTier]):
    """요율 구간 레포지토리.

    Extends:
        BaseRepository[RateTier]
    """

    def __init__(self) -> None:
        super().__init__(RateTier)

    async def get_rate_tiers(
        self,
        db: AsyncSession,
        company_id: UUID,
        day_type: str,
        on_date: date | None = None,
    ) -> Sequence[RateTier]:
        """회사와 요일 유형의 요율 구간을 순서대로 조회합니다.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            company_id: 회사 UUID (Company UUID)
            day_type: 요일 유형 (weekday | saturday | sunday | holiday)
            on_date: 적용 날짜, None이면 기간 필터 미적용 (Only tiers valid on this date)

        Returns:
            Sequence[RateTier]: tier_order 오름차순 구간 목록 (Tiers ascending by order)
        """
        query: Select = select(RateTier).where(
            RateTier.company_id == company_id,
            RateTier.day_type == day_type,
        )
        if on_date is not None:
            query = query.where(*_active_on(RateTier, on_date))
        result = await db.execute(query.order_by(RateTier.tier_order))
        return result.scalars().all()

    async def get_company_tiers(
        self,
        db: AsyncSession,
        company_id: UUID,
    ) -> Sequence[RateTier]:
        """회사의 모든 요율 구간 (Every tier of the company, grouped by day type)."""
        query: Select = (
            select(RateTier)
            .where(RateTier.company_id == company_id)
            .order_by(RateTier.day_type, RateTier.tier_order)
        )
        result = await db.execute(query)
        return result.scalars().all()

    async def delete_group(
        self,
        db: AsyncSession,
        company_id: UUID,
        day_type: str,
    ) -> None:
        """요일 유형 그룹 전체 삭제 (Remove every tier of one day type)."""
        await db.execute(
            delete(RateTier).where(RateTier.company_id == company_id, RateTier.day_type == day_type)
        )
        await db.flush()


class EmployeeRateRepository(BaseRepository[EmployeeRate]):
    """직원 요율 레포지토리.

    Extends:
        BaseRepository[EmployeeRate]
    """

    def __init__(self) -> None:
        super().__init__(EmployeeRate)

    async def get_employee_rate(
        self,
        db: AsyncSession,
        user_id: UUID,
        on_date: date,
    ) -> EmployeeRate | None:
        """해당 날짜에 적용되는 직원 요율을 조회합니다.

        Returns the record whose window contains ``on_date``; when several
        match (which validation prevents) the latest ``valid_from`` wins.
        """
        query: Select = (
            select(EmployeeRate)
            .where(EmployeeRate.user_id == user_id, *_active_on(EmployeeRate, on_date))
            .order_by(EmployeeRate.valid_from.desc().nulls_last())
            .limit(1)
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def get_user_rates(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> Sequence[EmployeeRate]:
        """직원의 전체 요율 이력 (Every rate record of an employee)."""
        query: Select = (
            select(EmployeeRate)
            .where(EmployeeRate.user_id == user_id)
            .order_by(EmployeeRate.valid_from.desc().nulls_last())
        )
        result = await db.execute(query)
        return result.scalars().all()

    async def get_company_rates(
        self,
        db: AsyncSession,
        company_id: UUID,
    ) -> Sequence[EmployeeRate]:
        """회사의 전체 직원 요율 (Every employee rate of a company)."""
        result = await db.execute(
            select(EmployeeRate).where(EmployeeRate.company_id == company_id).order_by(EmployeeRate.created_at)
        )
        return result.scalars().all()


# 싱글턴 인스턴스 — Singleton instances
rate_tier_repository: RateTierRepository = RateTierRepository()
employee_rate_repository: EmployeeRateRepository = EmployeeRateRepository()
