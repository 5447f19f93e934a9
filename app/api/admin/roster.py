"""관리자 근무표 라우터 — 근무 배정, 주간 근무표, 근무표 메일 발송.

Admin Roster Router.
"""

from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import company_id_of, require_company_manager
from app.database import get_db, utcnow
from app.models.user import User
from app.schemas.shift import (
    RosterAssignRequest,
    RosterAssignResponse,
    RosterEmailRequest,
    RosterEmailResponse,
    ShiftResponse,
)
from app.services.roster_service import roster_service

router: APIRouter = APIRouter()


@router.post("", response_model=RosterAssignResponse, status_code=201)
async def assign_roster(
    data: RosterAssignRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_company_manager)],
) -> RosterAssignResponse:
    """근무 일괄 배정 — 승인된 휴가와 겹치면 conflicts에 포함."""
    result: RosterAssignResponse = await roster_service.assign(
        db, company_id_of(current_user), current_user, data
    )
    await db.commit()
    return result


@router.get("/week", response_model=list[ShiftResponse])
async def get_roster_week(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_company_manager)],
    week_of: date | None = None,
) -> list[ShiftResponse]:
    return await roster_service.list_week(db, company_id_of(current_user), week_of or utcnow().date())


@router.post("/email", response_model=RosterEmailResponse)
async def email_roster_week(
    data: RosterEmailRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_company_manager)],
) -> RosterEmailResponse:
    return await roster_service.email_week(db, company_id_of(current_user), data)


@router.delete("/{shift_id}", status_code=204)
async def delete_roster_shift(
    shift_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_company_manager)],
) -> None:
    await roster_service.delete_roster_shift(db, company_id_of(current_user), shift_id)
    await db.commit()
