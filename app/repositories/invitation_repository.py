"""초대 레포지토리 — 직원 초대 조회.

Invitation Repository — Employee invitation lookups.
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.invitation import EmployeeInvitation
from app.repositories.base import BaseRepository


class InvitationRepository(BaseRepository[EmployeeInvitation]):
    """초대 레포지토리.

    Extends:
        BaseRepository[EmployeeInvitation]
    """

    def __init__(self) -> None:
        super().__init__(EmployeeInvitation)

    async def get_by_token(self, db: AsyncSession, token: str) -> EmployeeInvitation | None:
        """초대 토큰으로 조회 (Find an invitation by its token)."""
        result = await db.execute(select(EmployeeInvitation).where(EmployeeInvitation.token == token))
        return result.scalar_one_or_none()

    async def get_pending_for_email(
        self,
        db: AsyncSession,
        company_id: UUID,
        email: str,
    ) -> EmployeeInvitation | None:
        """같은 이메일의 미수락 초대 (Unaccepted invitation for the same email)."""
        query: Select = select(EmployeeInvitation).where(
            EmployeeInvitation.company_id == company_id,
            EmployeeInvitation.email == email,
            EmployeeInvitation.accepted_at.is_(None),
        )
        result = await db.execute(query)
        return result.scalars().first()

    async def get_company_invitations(
        self,
        db: AsyncSession,
        company_id: UUID,
        pending_only: bool = True,
    ) -> Sequence[EmployeeInvitation]:
        """회사의 초대 목록, 최신순 (Company invitations, newest first)."""
        query: Select = select(EmployeeInvitation).where(EmployeeInvitation.company_id == company_id)
        if pending_only:
            query = query.where(EmployeeInvitation.accepted_at.is_(None))
        result = await db.execute(query.order_by(EmployeeInvitation.created_at.desc()))
        return result.scalars().all()


# 싱글턴 인스턴스 — Singleton instance
invitation_repository: InvitationRepository = InvitationRepository()
