"""관리자 요율 라우터 — 청구 요율 구간(tier)과 직원별 급여 요율.

Admin Rate Router.

Rate tiers price company billing per (day type, tier order). Tier groups
must stay well formed: orders 1..N, and only the last tier may have an
open-ended ``hours_in_tier``. Employee rates are flat per-category hourly
rates used for earnings.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import company_id_of, require_company_manager
from app.database import get_db
from app.models.user import User
from app.schemas.common import DAY_TYPE_PATTERN
from app.schemas.rate import (
    EmployeeRateResponse,
    EmployeeRateUpsert,
    RateTierCreate,
    RateTierGroupReplace,
    RateTierResponse,
    RateTierUpdate,
)
from app.services.rate_service import rate_service

router: APIRouter = APIRouter()


# ── 요율 구간 (Rate tiers) ─────────────────────────────────


@router.get("/rate-tiers", response_model=list[RateTierResponse])
async def list_rate_tiers(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_company_manager)],
    day_type: str | None = Query(None, pattern=DAY_TYPE_PATTERN),
) -> list[RateTierResponse]:
    return await rate_service.list_tiers(db, company_id_of(current_user), day_type)


@router.post("/rate-tiers", response_model=RateTierResponse, status_code=201)
async def create_rate_tier(
    data: RateTierCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_company_manager)],
) -> RateTierResponse:
    """요율 구간 추가 — 그룹의 마지막 순서(N+1)로만 추가 가능."""
    result: RateTierResponse = await rate_service.create_tier(db, company_id_of(current_user), data)
    await db.commit()
    return result


@router.put("/rate-tiers/groups/{day_type}", response_model=list[RateTierResponse])
async def replace_rate_tier_group(
    data: RateTierGroupReplace,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_company_manager)],
    day_type: str = Path(..., pattern=DAY_TYPE_PATTERN),
) -> list[RateTierResponse]:
    """요일 유형의 구간 전체를 한 번에 교체 (목록 순서대로 1..N)."""
    result: list[RateTierResponse] = await rate_service.replace_group(
        db, company_id_of(current_user), day_type, data
    )
    await db.commit()
    return result


@router.put("/rate-tiers/{tier_id}", response_model=RateTierResponse)
async def update_rate_tier(
    tier_id: UUID,
    data: RateTierUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_company_manager)],
) -> RateTierResponse:
    result: RateTierResponse = await rate_service.update_tier(db, company_id_of(current_user), tier_id, data)
    await db.commit()
    return result


@router.delete("/rate-tiers/{tier_id}", status_code=204)
async def delete_rate_tier(
    tier_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_company_manager)],
) -> None:
    await rate_service.delete_tier(db, company_id_of(current_user), tier_id)
    await db.commit()


# ── 직원 요율 (Employee rates) ─────────────────────────────


@router.get("/employee-rates", response_model=list[EmployeeRateResponse])
async def list_employee_rates(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_company_manager)],
    user_id: UUID | None = None,
) -> list[EmployeeRateResponse]:
    return await rate_service.list_employee_rates(db, company_id_of(current_user), user_id)


@router.put("/employee-rates/{user_id}", response_model=EmployeeRateResponse)
async def upsert_employee_rate(
    user_id: UUID,
    data: EmployeeRateUpsert,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_company_manager)],
) -> EmployeeRateResponse:
    """직원 요율 설정 — 같은 valid_from 기록이 있으면 갱신."""
    result: EmployeeRateResponse = await rate_service.upsert_employee_rate(
        db, company_id_of(current_user), user_id, data
    )
    await db.commit()
    return result


@router.delete("/employee-rates/{rate_id}", status_code=204)
async def delete_employee_rate(
    rate_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_company_manager)],
) -> None:
    await rate_service.delete_employee_rate(db, company_id_of(current_user), rate_id)
    await db.commit()
