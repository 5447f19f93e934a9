"""관리자 회사 라우터 — 회사 등록, 회사 정보, 대시보드, 직원별 근무 시간.

Admin Company Router. Registration is public and signs the new business
owner in; every other endpoint requires company manager privileges.
"""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import company_id_of, require_company_manager
from app.database import get_db
from app.models.user import User
from app.schemas.analytics import CompanyHoursResponse
from app.schemas.company import (
    CompanyCreate,
    CompanyRegisterResponse,
    CompanyResponse,
    CompanyUpdate,
    DashboardStatsResponse,
)
from app.services.analytics_service import analytics_service
from app.services.company_service import company_service

router: APIRouter = APIRouter()


@router.post("/register", response_model=CompanyRegisterResponse, status_code=201)
async def register_company(
    data: CompanyCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> CompanyRegisterResponse:
    """회사 등록 — 회사와 대표 계정을 생성하고 토큰을 발급합니다.

    Register a company together with its business-owner account.
    """
    result: CompanyRegisterResponse = await company_service.register(db, data)
    await db.commit()
    return result


@router.get("/me", response_model=CompanyResponse)
async def get_my_company(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_company_manager)],
) -> CompanyResponse:
    return await company_service.get_company(db, company_id_of(current_user))


@router.put("/me", response_model=CompanyResponse)
async def update_my_company(
    data: CompanyUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_company_manager)],
) -> CompanyResponse:
    result: CompanyResponse = await company_service.update_company(db, company_id_of(current_user), data)
    await db.commit()
    return result


@router.get("/dashboard", response_model=DashboardStatsResponse)
async def get_dashboard(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_company_manager)],
) -> DashboardStatsResponse:
    """대시보드 통계 — 직원 수, 대기 건수, 이번 주 근무 시간."""
    return await company_service.get_dashboard_stats(db, company_id_of(current_user))


@router.get("/hours", response_model=CompanyHoursResponse)
async def get_company_hours(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_company_manager)],
    start_date: date | None = None,
    end_date: date | None = None,
) -> CompanyHoursResponse:
    return await analytics_service.company_hours(db, company_id_of(current_user), start_date, end_date)
