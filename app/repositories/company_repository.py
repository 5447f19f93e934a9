"""회사 레포지토리 — 회사 CRUD.

Company Repository — Company lookups.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.company import Company
from app.repositories.base import BaseRepository


class CompanyRepository(BaseRepository[Company]):
    """회사 레포지토리.

    Extends:
        BaseRepository[Company]
    """

    def __init__(self) -> None:
        super().__init__(Company)

    async def get_by_email(self, db: AsyncSession, email: str) -> Company | None:
        """대표 이메일로 회사를 조회합니다 (Find a company by contact email)."""
        result = await db.execute(select(Company).where(Company.email == email.strip().lower()))
        return result.scalar_one_or_none()


# 싱글턴 인스턴스 — Singleton instance
company_repository: CompanyRepository = CompanyRepository()
