"""근무 통계 Pydantic 스키마.

Personal and company shift analytics responses.
"""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel


class WeeklyHoursResponse(BaseModel):
    start_date: date
    end_date: date
    hours: Decimal


class DailyAverageResponse(BaseModel):
    """일 평균 근무 시간 — 기간 일수(양끝 포함)로 나눈 값."""

    start_date: date
    end_date: date
    days: int
    average: Decimal


class MissingEntriesResponse(BaseModel):
    start_date: date
    end_date: date
    missing_dates: list[date]


class ShiftTypeCount(BaseModel):
    shift_type: str
    count: int
    hours: Decimal


class AnalyticsSummaryResponse(BaseModel):
    """기간 요약 통계 (Range summary used by the dashboard)."""

    start_date: date
    end_date: date
    total_hours: Decimal
    shift_count: int
    daily_average: Decimal
    longest_shift_hours: Decimal
    overnight_shift_count: int
    by_shift_type: list[ShiftTypeCount]


class EmployeeHours(BaseModel):
    user_id: str
    name: str
    hours: Decimal
    shift_count: int


class CompanyHoursResponse(BaseModel):
    """회사 직원별 근무 시간 (Per-employee hours for a company)."""

    start_date: date
    end_date: date
    total_hours: Decimal
    employees: list[EmployeeHours]
