"""관리자 청구 라우터 — 근무별 청구 내역, 기간 보고서, 견적.

Admin Billing Router. Amounts are integer minor units (cents).
"""

from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import company_id_of, require_company_manager
from app.database import get_db
from app.models.user import User
from app.schemas.billing import (
    BillingQuoteRequest,
    BillingReportResponse,
    PayBreakdownResponse,
    ShiftBillingResponse,
)
from app.services.billing_service import billing_service

router: APIRouter = APIRouter()


@router.get("/shifts/{shift_id}", response_model=ShiftBillingResponse)
async def bill_shift(
    shift_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_company_manager)],
) -> ShiftBillingResponse:
    """근무 한 건의 구간별 청구 내역 — 요율 미설정이면 422."""
    return await billing_service.bill_shift(db, company_id_of(current_user), shift_id)


@router.get("/report", response_model=BillingReportResponse)
async def billing_report(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_company_manager)],
    start_date: date | None = None,
    end_date: date | None = None,
    user_id: UUID | None = None,
) -> BillingReportResponse:
    return await billing_service.report(db, company_id_of(current_user), start_date, end_date, user_id)


@router.post("/quote", response_model=PayBreakdownResponse)
async def quote(
    data: BillingQuoteRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_company_manager)],
) -> PayBreakdownResponse:
    """저장하지 않는 가상 근무 견적 (Price a hypothetical shift)."""
    return await billing_service.quote(db, company_id_of(current_user), data)
