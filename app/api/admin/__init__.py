"""관리자 API 라우터 패키지 — 모든 회사 관리자 엔드포인트 통합.

Admin API Router package — Aggregates every endpoint used by business
owners and managers into a single router for the FastAPI application.

Included routers (Phase 1 — Foundation):
    - companies: 회사 등록/조회/대시보드 (Company registration and dashboard)
    - employees: 직원 관리 (Employee management)
    - invitations: 직원 초대 (Employee invitations)

Included routers (Phase 2 — Scheduling):
    - shifts: 회사 근무 조회 및 승인 (Company shifts and approvals)
    - roster: 근무표 배정 (Roster assignment)
    - time_off: 휴가 승인 (Time-off review)

Included routers (Phase 3 — Billing):
    - rates: 요율 구간, 직원 요율 (Rate tiers and employee rates)
    - holidays: 공휴일 등록부 (Public holiday registry)
    - billing: 청구 내역/보고서/견적 (Shift billing, reports and quotes)
"""

from fastapi import APIRouter

# Phase 1 — Foundation 라우터 임포트
from app.api.admin.companies import router as companies_router
from app.api.admin.employees import router as employees_router
from app.api.admin.invitations import router as invitations_router

# Phase 2 — Scheduling 라우터 임포트
from app.api.admin.shifts import router as shifts_router
from app.api.admin.roster import router as roster_router
from app.api.admin.time_off import router as time_off_router

# Phase 3 — Billing 라우터 임포트
from app.api.admin.rates import router as rates_router
from app.api.admin.holidays import router as holidays_router
from app.api.admin.billing import router as billing_router

admin_router: APIRouter = APIRouter()

# ---------------------------------------------------------------------------
# Phase 1 라우터 등록 — Register Phase 1 (Foundation) routers
# ---------------------------------------------------------------------------
admin_router.include_router(companies_router, prefix="/companies", tags=["Companies"])
admin_router.include_router(employees_router, prefix="/employees", tags=["Employees"])
admin_router.include_router(invitations_router, prefix="/invitations", tags=["Invitations"])

# ---------------------------------------------------------------------------
# Phase 2 라우터 등록 — Register Phase 2 (Scheduling) routers
# ---------------------------------------------------------------------------
admin_router.include_router(shifts_router, prefix="/shifts", tags=["Company Shifts"])
admin_router.include_router(roster_router, prefix="/roster", tags=["Roster"])
admin_router.include_router(time_off_router, prefix="/time-off", tags=["Time Off"])

# ---------------------------------------------------------------------------
# Phase 3 라우터 등록 — Register Phase 3 (Billing) routers
# ---------------------------------------------------------------------------
# 요율: /rate-tiers, /employee-rates
admin_router.include_router(rates_router, tags=["Rates"])
admin_router.include_router(holidays_router, prefix="/holidays", tags=["Holidays"])
admin_router.include_router(billing_router, prefix="/billing", tags=["Billing"])
