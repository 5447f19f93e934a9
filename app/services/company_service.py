"""회사 서비스 — 사업자 등록, 회사 정보, 직원 관리 비즈니스 로직.

Company Service — Business account registration, company profile and
employee management.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.database import utcnow
from app.models.company import Company
from app.models.shift import Shift
from app.models.user import User
from app.repositories.auth_repository import auth_repository
from app.repositories.company_repository import company_repository
from app.repositories.invitation_repository import invitation_repository
from app.repositories.shift_repository import shift_repository
from app.repositories.time_off_repository import time_off_repository
from app.repositories.user_repository import user_repository
from app.schemas.company import (
    CompanyCreate,
    CompanyRegisterResponse,
    CompanyResponse,
    CompanyUpdate,
    DashboardStatsResponse,
    EmployeeResponse,
    EmployeeUpdate,
)
from app.services.auth_service import auth_service
from app.utils.earnings import EARNING_STATUSES
from app.utils.exceptions import BadRequestError, DuplicateError, ForbiddenError, NotFoundError
from app.utils.password import hash_password
from app.utils.time_utils import HOUR_QUANTUM, shift_duration_hours, week_start

logger = logging.getLogger(__name__)


class CompanyService:
    """회사 및 직원 관리 서비스.

    Company registration, profile and employee lifecycle.
    """

    def _to_response(self, company: Company) -> CompanyResponse:
        return CompanyResponse(
            id=str(company.id),
            name=company.name,
            email=company.email,
            owner_name=company.owner_name,
            industry=company.industry,
            size=company.size,
            timezone=company.timezone,
            currency=company.currency,
            created_at=company.created_at,
        )

    def _to_employee(self, user: User) -> EmployeeResponse:
        return EmployeeResponse(
            id=str(user.id),
            email=user.email,
            name=user.name,
            user_type=user.user_type,
            role=user.role,
            hourly_rate=user.hourly_rate,
            is_active=user.is_active,
            created_at=user.created_at,
        )

    async def register(
        self,
        db: AsyncSession,
        data: CompanyCreate,
    ) -> CompanyRegisterResponse:
        """회사와 대표 사용자를 함께 생성하고 대표 사용자로 로그인합니다.

        Create the company and its business-owner account, then issue tokens
        for the owner.

        Raises:
            DuplicateError: 이메일이 이미 회사 또는 사용자로 등록됨
                            (Email already used by a company or a user)
        """
        email: str = data.email.strip().lower()
        if await company_repository.get_by_email(db, email) is not None:
            raise DuplicateError("A company with this email already exists")
        if await auth_repository.get_user_by_email(db, email) is not None:
            raise DuplicateError("Email is already registered")

        company: Company = await company_repository.create(
            db,
            {
                "name": data.name.strip(),
                "email": email,
                "owner_name": data.owner_name.strip(),
                "industry": data.industry,
                "size": data.size,
                "timezone": data.timezone,
                "currency": data.currency,
            },
        )
        owner: User = await user_repository.create(
            db,
            {
                "email": email,
                "name": data.owner_name.strip(),
                "password_hash": hash_password(data.password),
                "user_type": "business_owner",
                "company_id": company.id,
                "role": "manager",
            },
        )
        logger.info("Registered company %s with owner %s", company.id, owner.id)

        tokens = await auth_service.issue_tokens(db, owner, remember_me=False)
        return CompanyRegisterResponse(company=self._to_response(company), tokens=tokens)

    async def get_company(self, db: AsyncSession, company_id: UUID) -> CompanyResponse:
        company: Company | None = await company_repository.get_by_id(db, company_id)
        if company is None:
            raise NotFoundError("Company not found")
        return self._to_response(company)

    async def update_company(
        self,
        db: AsyncSession,
        company_id: UUID,
        data: CompanyUpdate,
    ) -> CompanyResponse:
        company: Company | None = await company_repository.update(
            db, company_id, data.model_dump(exclude_unset=True, exclude_none=True)
        )
        if company is None:
            raise NotFoundError("Company not found")
        return self._to_response(company)

    async def get_dashboard_stats(
        self,
        db: AsyncSession,
        company_id: UUID,
        today: date | None = None,
    ) -> DashboardStatsResponse:
        """관리자 대시보드 통계를 집계합니다.

        ``week_hours`` sums worked (not merely scheduled) shifts from Monday
        of the current week through Sunday.
        """
        today = today or utcnow().date()
        monday: date = week_start(today)
        sunday: date = date.fromordinal(monday.toordinal() + 6)

        week_shifts: Sequence[Shift] = await shift_repository.get_company_shifts(
            db, company_id, monday, sunday
        )
        week_hours: Decimal = sum(
            (
                shift_duration_hours(s.start_time, s.end_time)
                for s in week_shifts
                if s.status in EARNING_STATUSES
            ),
            Decimal(0),
        )

        return DashboardStatsResponse(
            employee_count=await user_repository.count_by_company(db, company_id),
            active_employee_count=await user_repository.count_by_company(db, company_id, active_only=True),
            shift_count=await shift_repository.count_by_company(db, company_id),
            pending_shift_count=await shift_repository.count_by_company(db, company_id, "pending"),
            pending_time_off_count=len(
                await time_off_repository.get_company_requests(db, company_id, status="pending")
            ),
            pending_invitation_count=len(
                await invitation_repository.get_company_invitations(db, company_id, pending_only=True)
            ),
            week_hours=week_hours.quantize(HOUR_QUANTUM),
        )

    # ── 직원 관리 (Employees) ────────────────────────────────

    async def list_employees(
        self,
        db: AsyncSession,
        company_id: UUID,
        include_inactive: bool = True,
    ) -> list[EmployeeResponse]:
        members: Sequence[User] = await user_repository.get_company_members(
            db, company_id, include_inactive
        )
        return [self._to_employee(u) for u in members]

    async def _get_member(self, db: AsyncSession, company_id: UUID, user_id: UUID) -> User:
        member: User | None = await user_repository.get_member(db, company_id, user_id)
        if member is None:
            raise NotFoundError("Employee not found")
        return member

    async def update_employee(
        self,
        db: AsyncSession,
        company_id: UUID,
        user_id: UUID,
        data: EmployeeUpdate,
    ) -> EmployeeResponse:
        """직원 이름, 역할, 기본 시급을 수정합니다.

        The business owner's role cannot be changed.
        """
        member: User = await self._get_member(db, company_id, user_id)
        update_data: dict = data.model_dump(exclude_unset=True)
        if "role" in update_data and member.user_type == "business_owner":
            raise ForbiddenError("Cannot change the business owner's role")
        if update_data.get("name") is None:
            update_data.pop("name", None)

        updated: User | None = await user_repository.update(db, member.id, update_data, company_id)
        if updated is None:
            raise NotFoundError("Employee not found")
        return self._to_employee(updated)

    async def set_employee_active(
        self,
        db: AsyncSession,
        company_id: UUID,
        user_id: UUID,
        is_active: bool,
        acting_user: User,
    ) -> EmployeeResponse:
        """직원 활성/비활성 전환. 비활성화 시 모든 리프레시 토큰을 폐기합니다.

        Raises:
            BadRequestError: 본인 계정 변경 시도 (Changing one's own status)
            ForbiddenError: 대표 계정 비활성화 시도 (Deactivating the owner)
        """
        member: User = await self._get_member(db, company_id, user_id)
        if member.id == acting_user.id:
            raise BadRequestError("You cannot change your own status")
        if member.user_type == "business_owner" and not is_active:
            raise ForbiddenError("Cannot deactivate the business owner")

        member.is_active = is_active
        if not is_active:
            await auth_repository.revoke_user_tokens(db, member.id, utcnow())
        await db.flush()
        await db.refresh(member)
        logger.info("Employee %s active=%s in company %s", member.id, is_active, company_id)
        return self._to_employee(member)

    async def remove_employee(
        self,
        db: AsyncSession,
        company_id: UUID,
        user_id: UUID,
        acting_user: User,
    ) -> None:
        """직원을 회사에서 제외합니다.

        The account survives as an individual account; its company shifts
        stay with the company for billing history.
        """
        member: User = await self._get_member(db, company_id, user_id)
        if member.id == acting_user.id:
            raise BadRequestError("You cannot remove yourself")
        if member.user_type == "business_owner":
            raise ForbiddenError("Cannot remove the business owner")

        member.company_id = None
        member.role = None
        member.user_type = "individual"
        await auth_repository.revoke_user_tokens(db, member.id, utcnow())
        await db.flush()
        logger.info("Removed user %s from company %s", member.id, company_id)


# 싱글턴 인스턴스 — Singleton instance
company_service: CompanyService = CompanyService()
