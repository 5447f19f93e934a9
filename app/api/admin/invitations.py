"""관리자 초대 라우터 — 직원 초대 발송, 목록, 취소.

Admin Invitation Router.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import company_id_of, require_company_manager
from app.database import get_db
from app.models.user import User
from app.schemas.invitation import InvitationCreate, InvitationResponse
from app.services.invitation_service import invitation_service

router: APIRouter = APIRouter()


@router.post("", response_model=InvitationResponse, status_code=201)
async def create_invitation(
    data: InvitationCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_company_manager)],
) -> InvitationResponse:
    """초대 생성 및 메일 발송 — 발송 실패 시 email_sent=false."""
    result: InvitationResponse = await invitation_service.create_invitation(
        db, company_id_of(current_user), current_user, data
    )
    await db.commit()
    return result


@router.get("", response_model=list[InvitationResponse])
async def list_invitations(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_company_manager)],
    pending_only: bool = True,
) -> list[InvitationResponse]:
    return await invitation_service.list_invitations(db, company_id_of(current_user), pending_only)


@router.delete("/{invitation_id}", status_code=204)
async def delete_invitation(
    invitation_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_company_manager)],
) -> None:
    await invitation_service.delete_invitation(db, company_id_of(current_user), invitation_id)
    await db.commit()
