"""관리자 근무 라우터 — 회사 근무 조회 및 승인/반려.

Admin Shift Router — Company-wide shift listing and the approval queue.
"""

from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import company_id_of, require_company_manager
from app.database import get_db
from app.models.user import User
from app.schemas.common import PaginatedResponse
from app.schemas.shift import ShiftResponse, ShiftReviewRequest
from app.services.shift_service import shift_service

router: APIRouter = APIRouter()


@router.get("", response_model=PaginatedResponse)
async def list_company_shifts(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_company_manager)],
    start_date: date | None = None,
    end_date: date | None = None,
    user_id: UUID | None = None,
    status: str | None = Query(None, pattern=r"^(scheduled|completed|pending|approved|rejected)$"),
    page: int = Query(1, ge=1),
    per_page: int = Query(50, ge=1, le=200),
) -> PaginatedResponse:
    """회사 근무 목록 — 기간, 직원, 상태 필터."""
    return await shift_service.list_company_shifts(
        db, company_id_of(current_user), start_date, end_date, user_id, status, page, per_page
    )


@router.get("/pending", response_model=list[ShiftResponse])
async def list_pending_shifts(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_company_manager)],
) -> list[ShiftResponse]:
    return await shift_service.list_pending(db, company_id_of(current_user))


@router.post("/{shift_id}/approve", response_model=ShiftResponse)
async def approve_shift(
    shift_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_company_manager)],
) -> ShiftResponse:
    result: ShiftResponse = await shift_service.review_shift(
        db, company_id_of(current_user), shift_id, current_user, approve=True
    )
    await db.commit()
    return result


@router.post("/{shift_id}/reject", response_model=ShiftResponse)
async def reject_shift(
    shift_id: UUID,
    data: ShiftReviewRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_company_manager)],
) -> ShiftResponse:
    """근무 반려 — 사유는 직원 알림에 포함."""
    result: ShiftResponse = await shift_service.review_shift(
        db, company_id_of(current_user), shift_id, current_user, approve=False, reason=data.reason
    )
    await db.commit()
    return result
