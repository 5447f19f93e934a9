"""공휴일 Pydantic 스키마."""

from datetime import date, datetime

from pydantic import BaseModel, Field


class HolidayCreate(BaseModel):
    holiday_date: date
    description: str = Field(..., min_length=1, max_length=255)


class HolidayResponse(BaseModel):
    id: str
    holiday_date: date
    description: str
    created_at: datetime


class DayTypeResponse(BaseModel):
    """날짜 분류 결과 (Classification of a single date)."""

    day: date
    day_type: str
    holiday_description: str | None
