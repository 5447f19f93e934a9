"""관리자 직원 라우터 — 직원 목록, 수정, 활성 전환, 제외, 수입 조회.

Admin Employee Router.
"""

from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import company_id_of, require_company_manager
from app.database import get_db
from app.models.user import User
from app.schemas.billing import EarningsResponse
from app.schemas.company import EmployeeResponse, EmployeeStatusUpdate, EmployeeUpdate
from app.services.billing_service import billing_service
from app.services.company_service import company_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[EmployeeResponse])
async def list_employees(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_company_manager)],
    include_inactive: bool = True,
) -> list[EmployeeResponse]:
    return await company_service.list_employees(db, company_id_of(current_user), include_inactive)


@router.put("/{user_id}", response_model=EmployeeResponse)
async def update_employee(
    user_id: UUID,
    data: EmployeeUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_company_manager)],
) -> EmployeeResponse:
    result: EmployeeResponse = await company_service.update_employee(
        db, company_id_of(current_user), user_id, data
    )
    await db.commit()
    return result


@router.patch("/{user_id}/status", response_model=EmployeeResponse)
async def set_employee_status(
    user_id: UUID,
    data: EmployeeStatusUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_company_manager)],
) -> EmployeeResponse:
    """직원 활성/비활성 전환 — 비활성화 시 로그인 세션 모두 종료."""
    result: EmployeeResponse = await company_service.set_employee_active(
        db, company_id_of(current_user), user_id, data.is_active, current_user
    )
    await db.commit()
    return result


@router.delete("/{user_id}", status_code=204)
async def remove_employee(
    user_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_company_manager)],
) -> None:
    await company_service.remove_employee(db, company_id_of(current_user), user_id, current_user)
    await db.commit()


@router.get("/{user_id}/earnings", response_model=EarningsResponse)
async def get_employee_earnings(
    user_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_company_manager)],
    start_date: date | None = None,
    end_date: date | None = None,
) -> EarningsResponse:
    return await billing_service.employee_earnings(
        db, company_id_of(current_user), user_id, start_date, end_date
    )
