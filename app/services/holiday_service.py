"""공휴일 서비스 — 공휴일 등록/삭제 및 날짜 분류.

Public holiday registry. Holidays are create-and-delete only.
"""

from datetime import date
from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.holiday import PublicHoliday
from app.repositories.holiday_repository import holiday_repository
from app.schemas.holiday import DayTypeResponse, HolidayCreate, HolidayResponse
from app.services.shift_service import check_date_range
from app.utils.exceptions import DuplicateError, NotFoundError
from app.utils.pay_calculator import DayType, classify_day_type


class HolidayService:

    def _to_response(self, holiday: PublicHoliday) -> HolidayResponse:
        return HolidayResponse(
            id=str(holiday.id),
            holiday_date=holiday.holiday_date,
            description=holiday.description,
            created_at=holiday.created_at,
        )

    async def list_holidays(
        self,
        db: AsyncSession,
        start: date | None = None,
        end: date | None = None,
    ) -> list[HolidayResponse]:
        check_date_range(start, end)
        holidays: Sequence[PublicHoliday] = await holiday_repository.get_between(db, start, end)
        return [self._to_response(h) for h in holidays]

    async def create_holiday(self, db: AsyncSession, data: HolidayCreate) -> HolidayResponse:
        """공휴일 등록 — 같은 날짜가 이미 있으면 409."""
        if await holiday_repository.get_by_date(db, data.holiday_date) is not None:
            raise DuplicateError(f"A holiday is already registered on {data.holiday_date}")
        holiday: PublicHoliday = await holiday_repository.create(
            db, {"holiday_date": data.holiday_date, "description": data.description.strip()}
        )
        return self._to_response(holiday)

    async def delete_holiday(self, db: AsyncSession, holiday_id: UUID) -> None:
        if not await holiday_repository.delete(db, holiday_id):
            raise NotFoundError("Holiday not found")

    async def classify(self, db: AsyncSession, day: date) -> DayTypeResponse:
        """날짜의 요일 유형 (공휴일 우선)."""
        description: str | None = await holiday_repository.describe(db, day)
        day_type: DayType = classify_day_type(day, {day} if description is not None else ())
        return DayTypeResponse(day=day, day_type=day_type.value, holiday_description=description)


# 싱글턴 인스턴스 — Singleton instance
holiday_service: HolidayService = HolidayService()
