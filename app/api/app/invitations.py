"""앱 초대 라우터 — 초대 링크 조회 및 수락 (인증 불필요).

App Invitation Router. Both endpoints are public; the token in the path is
the credential.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.auth import TokenResponse
from app.schemas.invitation import AcceptInvitationRequest, InvitationPublicResponse
from app.services.invitation_service import invitation_service

router: APIRouter = APIRouter()


@router.get("/{token}", response_model=InvitationPublicResponse)
async def view_invitation(
    token: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> InvitationPublicResponse:
    return await invitation_service.view_invitation(db, token)


@router.post("/{token}/accept", response_model=TokenResponse)
async def accept_invitation(
    token: str,
    data: AcceptInvitationRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TokenResponse:
    """초대 수락 — 계정 생성 또는 연결 후 로그인 토큰 발급."""
    result: TokenResponse = await invitation_service.accept_invitation(db, token, data)
    await db.commit()
    return result
