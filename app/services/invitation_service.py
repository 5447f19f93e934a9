"""직원 초대 서비스 — 초대 생성/메일 발송, 조회, 수락.

Invitation Service — Invite employees by email and let them join.

Flow:
    1. 관리자가 초대 생성 → 토큰 발급 + 초대 메일 발송
       (Manager creates an invitation; a link with a random token is emailed)
    2. 초대받은 사람이 링크로 초대 정보 조회 (Invitee views it without login)
    3. 수락 → 신규 계정 생성 또는 기존 개인 계정 연결 후 로그인
       (Accepting creates an account or attaches an existing individual one)
"""

import logging
import secrets
from datetime import datetime, timedelta
from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import as_utc, utcnow
from app.models.company import Company
from app.models.invitation import EmployeeInvitation
from app.models.user import User
from app.repositories.auth_repository import auth_repository
from app.repositories.company_repository import company_repository
from app.repositories.invitation_repository import invitation_repository
from app.schemas.auth import TokenResponse
from app.schemas.invitation import (
    AcceptInvitationRequest,
    InvitationCreate,
    InvitationPublicResponse,
    InvitationResponse,
)
from app.services.auth_service import auth_service
from app.utils.email import render_invitation_email, send_email
from app.utils.exceptions import BadRequestError, DuplicateError, NotFoundError, UnauthorizedError
from app.utils.password import hash_password, verify_password

logger = logging.getLogger(__name__)


class InvitationService:

    def _to_response(self, invitation: EmployeeInvitation, email_sent: bool | None = None) -> InvitationResponse:
        return InvitationResponse(
            id=str(invitation.id),
            company_id=str(invitation.company_id),
            email=invitation.email,
            name=invitation.name,
            role=invitation.role,
            expires_at=invitation.expires_at,
            accepted_at=invitation.accepted_at,
            created_at=invitation.created_at,
            email_sent=email_sent,
        )

    async def create_invitation(
        self,
        db: AsyncSession,
        company_id: UUID,
        inviter: User,
        data: InvitationCreate,
    ) -> InvitationResponse:
        """직원 초대를 생성하고 초대 메일을 보냅니다.

        Email delivery failure does not fail the request; it is reported as
        ``email_sent=False``.

        Raises:
            DuplicateError: 이미 소속된 직원 또는 미수락 초대 존재
                            (Already a member, or an open invitation exists)
        """
        email: str = data.email.strip().lower()
        existing_user: User | None = await auth_repository.get_user_by_email(db, email)
        if existing_user is not None and existing_user.company_id == company_id:
            raise DuplicateError("This person is already a member of the company")
        pending: EmployeeInvitation | None = await invitation_repository.get_pending_for_email(
            db, company_id, email
        )
        # 만료된 초대는 재초대를 막지 않음 (An expired invitation can be reissued)
        if pending is not None and as_utc(pending.expires_at) > utcnow():
            raise DuplicateError("An invitation is already pending for this email")

        company: Company | None = await company_repository.get_by_id(db, company_id)
        if company is None:
            raise NotFoundError("Company not found")

        invitation: EmployeeInvitation = await invitation_repository.create(
            db,
            {
                "company_id": company_id,
                "email": email,
                "name": data.name,
                "role": data.role,
                "token": secrets.token_urlsafe(32),
                "invited_by": inviter.id,
                "expires_at": utcnow() + timedelta(days=settings.INVITATION_EXPIRE_DAYS),
            },
        )

        subject, html, text = render_invitation_email(company.name, inviter.name, data.role, invitation.token)
        email_sent: bool = await send_email(email, subject, html, text)
        if not email_sent:
            logger.warning("Invitation %s created but the email could not be sent", invitation.id)
        return self._to_response(invitation, email_sent)

    async def list_invitations(
        self,
        db: AsyncSession,
        company_id: UUID,
        pending_only: bool = True,
    ) -> list[InvitationResponse]:
        invitations: Sequence[EmployeeInvitation] = await invitation_repository.get_company_invitations(
            db, company_id, pending_only
        )
        return [self._to_response(i) for i in invitations]

    async def delete_invitation(self, db: AsyncSession, company_id: UUID, invitation_id: UUID) -> None:
        if not await invitation_repository.delete(db, invitation_id, company_id):
            raise NotFoundError("Invitation not found")

    async def _get_by_token(self, db: AsyncSession, token: str) -> EmployeeInvitation:
        invitation: EmployeeInvitation | None = await invitation_repository.get_by_token(db, token)
        if invitation is None:
            raise NotFoundError("Invitation not found")
        return invitation

    async def view_invitation(self, db: AsyncSession, token: str) -> InvitationPublicResponse:
        """토큰으로 초대 정보를 조회합니다 (로그인 불필요)."""
        invitation: EmployeeInvitation = await self._get_by_token(db, token)
        company: Company | None = await company_repository.get_by_id(db, invitation.company_id)
        return InvitationPublicResponse(
            email=invitation.email,
            name=invitation.name,
            role=invitation.role,
            company_name=company.name if company is not None else "",
            expires_at=invitation.expires_at,
            is_expired=as_utc(invitation.expires_at) <= utcnow(),
            is_accepted=invitation.accepted_at is not None,
        )

    async def accept_invitation(
        self,
        db: AsyncSession,
        token: str,
        data: AcceptInvitationRequest,
    ) -> TokenResponse:
        """초대를 수락하고 로그인 토큰을 발급합니다.

        An existing account must prove ownership with its password and must
        not belong to another company. Otherwise a new employee account is
        created.

        Raises:
            NotFoundError: 초대 없음 (Unknown token)
            BadRequestError: 만료, 이미 수락, 다른 회사 소속
            UnauthorizedError: 기존 계정 비밀번호 불일치 (Wrong password)
        """
        invitation: EmployeeInvitation = await self._get_by_token(db, token)
        now: datetime = utcnow()
        if invitation.accepted_at is not None:
            raise BadRequestError("Invitation has already been accepted")
        if as_utc(invitation.expires_at) <= now:
            raise BadRequestError("Invitation has expired")

        user: User | None = await auth_repository.get_user_by_email(db, invitation.email)
        if user is not None:
            if user.company_id is not None and user.company_id != invitation.company_id:
                raise BadRequestError("This account already belongs to another company")
            if not verify_password(data.password, user.password_hash):
                raise UnauthorizedError("Invalid email or password")
            if user.user_type != "business_owner":
                user.user_type = "employee"
            user.company_id = invitation.company_id
            user.role = invitation.role
            user.is_active = True
        else:
            user = User(
                email=invitation.email,
                name=(data.name or invitation.name or invitation.email.split("@")[0]).strip(),
                password_hash=hash_password(data.password),
                user_type="employee",
                company_id=invitation.company_id,
                role=invitation.role,
            )
            db.add(user)

        invitation.accepted_at = now
        await db.flush()
        logger.info("Invitation %s accepted by user %s", invitation.id, user.id)
        return await auth_service.issue_tokens(db, user, remember_me=False)


# 싱글턴 인스턴스 — Singleton instance
invitation_service: InvitationService = InvitationService()
