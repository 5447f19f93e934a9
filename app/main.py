"""FastAPI 애플리케이션 엔트리포인트 — 로깅, 미들웨어, 라우터 등록.

FastAPI application entry point. Configures root logging, request logging,
CORS, the health check and both router packages.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.middleware.axiom_logging import AxiomLoggingMiddleware

# 루트 로거 설정 — Configure the root logger once for the whole process
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

app: FastAPI = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# 요청 로깅 미들웨어 — CORS보다 먼저 등록하여 모든 요청을 캡처
app.add_middleware(AxiomLoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """서버 상태 확인 엔드포인트.

    Health check endpoint for load balancers and monitoring.
    """
    return {"status": "ok"}


# ---------------------------------------------------------------------------
# 라우터 등록 — Router registration
# ---------------------------------------------------------------------------
# admin_router: 회사, 직원, 초대, 근무표, 승인, 요율, 공휴일, 청구, 휴가 승인
# app_router: 인증, 초대 수락, 내 근무, 통계, 알림, 내 요율/수입/근무표, 휴가 신청
from app.api.admin import admin_router  # noqa: E402
from app.api.app import app_router  # noqa: E402

app.include_router(admin_router, prefix="/api/v1/admin")
app.include_router(app_router, prefix="/api/v1/app")
