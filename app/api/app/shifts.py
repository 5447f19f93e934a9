"""앱 근무 라우터 — 내 근무 기록 CRUD.

App Shift Router — The caller's own shifts.
Roster-assigned shifts are listed here too. They cannot be edited or
deleted, only reported as worked once their date arrives.
"""

from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.database import get_db
from app.models.user import User
from app.schemas.shift import ShiftCreate, ShiftResponse, ShiftUpdate
from app.services.shift_service import shift_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[ShiftResponse])
async def list_my_shifts(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    start_date: Annotated[date | None, Query(description="시작일 (inclusive)")] = None,
    end_date: Annotated[date | None, Query(description="종료일 (inclusive)")] = None,
) -> list[ShiftResponse]:
    """내 근무 목록 — 날짜, 시작 시각 순."""
    return await shift_service.list_shifts(db, current_user, start_date, end_date)


@router.post("", response_model=ShiftResponse, status_code=201)
async def create_shift(
    data: ShiftCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ShiftResponse:
    result: ShiftResponse = await shift_service.create_shift(db, current_user, data)
    await db.commit()
    return result


@router.get("/{shift_id}", response_model=ShiftResponse)
async def get_shift(
    shift_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ShiftResponse:
    return await shift_service.get_shift(db, current_user, shift_id)


@router.put("/{shift_id}", response_model=ShiftResponse)
async def update_shift(
    shift_id: UUID,
    data: ShiftUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ShiftResponse:
    """내 근무 수정 — 근무표 배정 근무는 403."""
    result: ShiftResponse = await shift_service.update_shift(db, current_user, shift_id, data)
    await db.commit()
    return result


@router.post("/{shift_id}/complete", response_model=ShiftResponse)
async def complete_rostered_shift(
    shift_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ShiftResponse:
    """배정 근무 완료 보고 — 관리자 승인 대기(pending)로 전환."""
    result: ShiftResponse = await shift_service.complete_rostered_shift(db, current_user, shift_id)
    await db.commit()
    return result


@router.delete("/{shift_id}", status_code=204)
async def delete_shift(
    shift_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> None:
    await shift_service.delete_shift(db, current_user, shift_id)
    await db.commit()
