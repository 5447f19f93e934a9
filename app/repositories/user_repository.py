"""사용자 레포지토리 — 회사 직원 조회 및 통계.

User Repository — Company employee lookups and simple counts.
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """사용자 레포지토리.

    Extends:
        BaseRepository[User]
    """

    def __init__(self) -> None:
        super().__init__(User)

    async def get_company_members(
        self,
        db: AsyncSession,
        company_id: UUID,
        include_inactive: bool = True,
    ) -> Sequence[User]:
        """회사 소속 사용자 목록을 이름순으로 조회합니다.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            company_id: 회사 UUID (Company UUID)
            include_inactive: 비활성 사용자 포함 여부 (Include deactivated users)

        Returns:
            Sequence[User]: 소속 사용자 목록 (Company members, owner included)
        """
        query: Select = select(User).where(User.company_id == company_id)
        if not include_inactive:
            query = query.where(User.is_active.is_(True))
        result = await db.execute(query.order_by(User.name))
        return result.scalars().all()

    async def get_member(
        self,
        db: AsyncSession,
        company_id: UUID,
        user_id: UUID,
    ) -> User | None:
        """회사 소속 사용자 단건 조회 (A single member of the company)."""
        return await self.get_by_id(db, user_id, company_id)

    async def count_by_company(
        self,
        db: AsyncSession,
        company_id: UUID,
        active_only: bool = False,
    ) -> int:
        """회사 소속 사용자 수 (Number of company members)."""
        query: Select = select(func.count()).select_from(User).where(User.company_id == company_id)
        if active_only:
            query = query.where(User.is_active.is_(True))
        return (await db.execute(query)).scalar() or 0


# 싱글턴 인스턴스 — Singleton instance
user_repository: UserRepository = UserRepository()
