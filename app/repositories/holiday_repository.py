"""공휴일 레포지토리 — 공휴일 등록부 조회.

Public Holiday Repository — The holiday registry consulted by day-type
classification.
"""

from datetime import date
from typing import Sequence

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.holiday import PublicHoliday
from app.repositories.base import BaseRepository


class HolidayRepository(BaseRepository[PublicHoliday]):
    """공휴일 레포지토리.

    Extends:
        BaseRepository[PublicHoliday]
    """

    def __init__(self) -> None:
        super().__init__(PublicHoliday)

    async def get_by_date(self, db: AsyncSession, day: date) -> PublicHoliday | None:
        """날짜로 공휴일 조회 (Holiday registered on ``day``)."""
        result = await db.execute(select(PublicHoliday).where(PublicHoliday.holiday_date == day))
        return result.scalar_one_or_none()

    async def is_holiday(self, db: AsyncSession, day: date) -> bool:
        """공휴일 여부 (Whether ``day`` is a registered holiday)."""
        return await self.get_by_date(db, day) is not None

    async def describe(self, db: AsyncSession, day: date) -> str | None:
        """공휴일 설명, 공휴일이 아니면 None (Holiday description or None)."""
        holiday: PublicHoliday | None = await self.get_by_date(db, day)
        return holiday.description if holiday is not None else None

    async def get_between(
        self,
        db: AsyncSession,
        start: date | None = None,
        end: date | None = None,
    ) -> Sequence[PublicHoliday]:
        """기간 내 공휴일 목록, 날짜순 (Holidays in an inclusive range)."""
        query: Select = select(PublicHoliday)
        if start is not None:
            query = query.where(PublicHoliday.holiday_date >= start)
        if end is not None:
            query = query.where(PublicHoliday.holiday_date <= end)
        result = await db.execute(query.order_by(PublicHoliday.holiday_date))
        return result.scalars().all()

    async def dates_between(self, db: AsyncSession, start: date, end: date) -> set[date]:
        """기간 내 공휴일 날짜 집합 (Holiday dates in an inclusive range)."""
        return {h.holiday_date for h in await self.get_between(db, start, end)}


# 싱글턴 인스턴스 — Singleton instance
holiday_repository: HolidayRepository = HolidayRepository()
