"""관리자 공휴일 라우터 — 공휴일 등록부 관리 및 날짜 분류.

Admin Holiday Router. The registry is shared by every company; a date in it
is billed as ``holiday`` regardless of its weekday.
"""

from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import require_company_manager
from app.database import get_db
from app.models.user import User
from app.schemas.holiday import DayTypeResponse, HolidayCreate, HolidayResponse
from app.services.holiday_service import holiday_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[HolidayResponse])
async def list_holidays(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_company_manager)],
    start_date: date | None = None,
    end_date: date | None = None,
) -> list[HolidayResponse]:
    return await holiday_service.list_holidays(db, start_date, end_date)


@router.get("/classify", response_model=DayTypeResponse)
async def classify_date(
    day: date,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_company_manager)],
) -> DayTypeResponse:
    """날짜의 요일 유형 조회 (weekday/saturday/sunday/holiday)."""
    return await holiday_service.classify(db, day)


@router.post("", response_model=HolidayResponse, status_code=201)
async def create_holiday(
    data: HolidayCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_company_manager)],
) -> HolidayResponse:
    result: HolidayResponse = await holiday_service.create_holiday(db, data)
    await db.commit()
    return result


@router.delete("/{holiday_id}", status_code=204)
async def delete_holiday(
    holiday_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_company_manager)],
) -> None:
    await holiday_service.delete_holiday(db, holiday_id)
    await db.commit()
