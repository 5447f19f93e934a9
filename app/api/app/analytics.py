"""앱 통계 라우터 — 주간 근무 시간, 일 평균, 누락일, 요약.

App Analytics Router. Every endpoint takes an optional inclusive
``start_date``/``end_date`` range and defaults to the current week.
"""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.database import get_db
from app.models.user import User
from app.schemas.analytics import (
    AnalyticsSummaryResponse,
    DailyAverageResponse,
    MissingEntriesResponse,
    WeeklyHoursResponse,
)
from app.services.analytics_service import analytics_service

router: APIRouter = APIRouter()


@router.get("/weekly-hours", response_model=WeeklyHoursResponse)
async def weekly_hours(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    start_date: date | None = None,
    end_date: date | None = None,
) -> WeeklyHoursResponse:
    return await analytics_service.weekly_hours(db, current_user, start_date, end_date)


@router.get("/daily-average", response_model=DailyAverageResponse)
async def daily_average(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    start_date: date | None = None,
    end_date: date | None = None,
) -> DailyAverageResponse:
    return await analytics_service.daily_average(db, current_user, start_date, end_date)


@router.get("/missing-entries", response_model=MissingEntriesResponse)
async def missing_entries(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    start_date: date | None = None,
    end_date: date | None = None,
) -> MissingEntriesResponse:
    """근무 기록이 없는 날짜 목록."""
    return await analytics_service.missing_entries(db, current_user, start_date, end_date)


@router.get("/summary", response_model=AnalyticsSummaryResponse)
async def summary(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    start_date: date | None = None,
    end_date: date | None = None,
) -> AnalyticsSummaryResponse:
    return await analytics_service.summary(db, current_user, start_date, end_date)
