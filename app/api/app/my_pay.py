"""앱 급여 라우터 — 내 요율, 내 수입, 내 근무표.

App pay and roster views for employees: the flat rates that apply to the
caller, earnings over a range, and the roster shifts of a week.
"""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.database import get_db, utcnow
from app.models.user import User
from app.schemas.billing import EarningsResponse
from app.schemas.rate import MyRatesResponse
from app.schemas.shift import ShiftResponse
from app.services.billing_service import billing_service
from app.services.rate_service import rate_service
from app.services.roster_service import roster_service

router: APIRouter = APIRouter()


@router.get("/my-rates", response_model=MyRatesResponse)
async def my_rates(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    on_date: date | None = None,
) -> MyRatesResponse:
    """현재 적용 요율 — 미설정이면 rates_configured=false."""
    return await rate_service.get_my_rates(db, current_user, on_date)


@router.get("/my-earnings", response_model=EarningsResponse)
async def my_earnings(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    start_date: date | None = None,
    end_date: date | None = None,
) -> EarningsResponse:
    """기간 수입 — 카테고리별 시간과 금액(센트)."""
    return await billing_service.my_earnings(db, current_user, start_date, end_date)


@router.get("/my-roster", response_model=list[ShiftResponse])
async def my_roster(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    week_of: date | None = None,
) -> list[ShiftResponse]:
    """주간 배정 근무 — week_of가 속한 주 (기본: 이번 주)."""
    return await roster_service.my_roster(db, current_user, week_of or utcnow().date())
