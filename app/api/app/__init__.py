"""앱 API 라우터 패키지 — 모든 앱(직원/개인 사용자용) 엔드포인트 통합.

App API Router package — Aggregates every endpoint used by employees and
individual workers into a single router for the FastAPI application.

Included routers (Phase 1 — Foundation):
    - auth: 회원가입, 로그인, 토큰 갱신 (Signup, login, refresh, logout)
    - invitations: 초대 조회/수락 (Public invitation view and accept)

Included routers (Phase 2 — Shift Tracking):
    - shifts: 내 근무 기록 (My shifts)
    - analytics: 근무 통계 (Hours, averages, missing entries)
    - notifications: 내 알림 (My notifications)

Included routers (Phase 3 — Company Workflow):
    - my_pay: 내 요율, 수입, 근무표 (My rates, earnings and roster)
    - time_off: 휴가 신청 (Time-off requests)
"""

from fastapi import APIRouter

# Phase 1 — Foundation 라우터 임포트
from app.api.app.auth import router as auth_router
from app.api.app.invitations import router as invitations_router

# Phase 2 — Shift Tracking 라우터 임포트
from app.api.app.shifts import router as shifts_router
from app.api.app.analytics import router as analytics_router
from app.api.app.notifications import router as notifications_router

# Phase 3 — Company Workflow 라우터 임포트
from app.api.app.my_pay import router as my_pay_router
from app.api.app.time_off import router as time_off_router

app_router: APIRouter = APIRouter()

# ---------------------------------------------------------------------------
# Phase 1 라우터 등록 — Register Phase 1 (Foundation) routers
# ---------------------------------------------------------------------------
app_router.include_router(auth_router, prefix="/auth", tags=["App Auth"])
app_router.include_router(invitations_router, prefix="/invitations", tags=["Invitations"])

# ---------------------------------------------------------------------------
# Phase 2 라우터 등록 — Register Phase 2 (Shift Tracking) routers
# ---------------------------------------------------------------------------
app_router.include_router(shifts_router, prefix="/shifts", tags=["My Shifts"])
app_router.include_router(analytics_router, prefix="/analytics", tags=["My Analytics"])
app_router.include_router(notifications_router, prefix="/notifications", tags=["My Notifications"])

# ---------------------------------------------------------------------------
# Phase 3 라우터 등록 — Register Phase 3 (Company Workflow) routers
# ---------------------------------------------------------------------------
# 내 요율/수입/근무표: /my-rates, /my-earnings, /my-roster
app_router.include_router(my_pay_router, tags=["My Pay"])
app_router.include_router(time_off_router, prefix="/time-off", tags=["My Time Off"])
