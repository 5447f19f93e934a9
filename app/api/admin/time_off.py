"""관리자 휴가 라우터 — 회사 휴가 신청 조회 및 승인/반려.

Admin Time-Off Router.
"""

from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import company_id_of, require_company_manager
from app.database import get_db
from app.models.user import User
from app.schemas.time_off import TimeOffRejectRequest, TimeOffResponse
from app.services.time_off_service import time_off_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[TimeOffResponse])
async def list_company_time_off(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_company_manager)],
    start_date: date | None = None,
    end_date: date | None = None,
    status: str | None = Query(None, pattern=r"^(pending|approved|rejected)$"),
) -> list[TimeOffResponse]:
    return await time_off_service.list_company_requests(
        db, company_id_of(current_user), start_date, end_date, status
    )


@router.post("/{request_id}/approve", response_model=TimeOffResponse)
async def approve_time_off(
    request_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_company_manager)],
) -> TimeOffResponse:
    result: TimeOffResponse = await time_off_service.review_request(
        db, company_id_of(current_user), request_id, current_user, approve=True
    )
    await db.commit()
    return result


@router.post("/{request_id}/reject", response_model=TimeOffResponse)
async def reject_time_off(
    request_id: UUID,
    data: TimeOffRejectRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_company_manager)],
) -> TimeOffResponse:
    result: TimeOffResponse = await time_off_service.review_request(
        db, company_id_of(current_user), request_id, current_user, approve=False, reason=data.reason
    )
    await db.commit()
    return result
