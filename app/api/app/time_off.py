"""앱 휴가 라우터 — 휴가 신청, 내 신청 목록, 대기 신청 취소.

App Time-Off Router.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.database import get_db
from app.models.user import User
from app.schemas.time_off import TimeOffCreate, TimeOffCreateResponse, TimeOffResponse
from app.services.time_off_service import time_off_service

router: APIRouter = APIRouter()


@router.post("", response_model=TimeOffCreateResponse, status_code=201)
async def request_time_off(
    data: TimeOffCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> TimeOffCreateResponse:
    """휴가 신청 — 기간 내 기존 근무를 conflicting_shifts로 함께 반환."""
    result: TimeOffCreateResponse = await time_off_service.create_request(db, current_user, data)
    await db.commit()
    return result


@router.get("", response_model=list[TimeOffResponse])
async def list_my_time_off(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> list[TimeOffResponse]:
    return await time_off_service.list_my_requests(db, current_user)


@router.delete("/{request_id}", status_code=204)
async def cancel_time_off(
    request_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> None:
    await time_off_service.cancel_request(db, current_user, request_id)
    await db.commit()
