"""휴가 신청 Pydantic 스키마."""

from datetime import date, datetime

from pydantic import BaseModel, Field, model_validator

from app.schemas.common import TIME_PATTERN


class TimeOffCreate(BaseModel):
    """휴가 신청 요청.

    Partial-day requests set ``is_full_day`` to False and give both times.
    """

    start_date: date
    end_date: date
    is_full_day: bool = True
    start_time: str | None = Field(None, pattern=TIME_PATTERN)
    end_time: str | None = Field(None, pattern=TIME_PATTERN)
    reason: str | None = Field(None, max_length=1000)

    @model_validator(mode="after")
    def _check_times(self) -> "TimeOffCreate":
        if not self.is_full_day and (self.start_time is None or self.end_time is None):
            raise ValueError("Partial-day requests need start_time and end_time")
        return self


class TimeOffRejectRequest(BaseModel):
    reason: str = Field(..., min_length=1, max_length=1000)


class TimeOffResponse(BaseModel):
    id: str
    user_id: str
    user_name: str | None = None
    company_id: str
    start_date: date
    end_date: date
    is_full_day: bool
    start_time: str | None
    end_time: str | None
    reason: str | None
    status: str
    reviewed_by: str | None
    reviewed_at: datetime | None
    rejection_reason: str | None
    created_at: datetime


class ConflictingShift(BaseModel):
    shift_id: str
    work_date: date
    start_time: str
    end_time: str
    status: str


class TimeOffCreateResponse(BaseModel):
    """휴가 신청 결과 — 겹치는 기존 근무 목록 포함."""

    request: TimeOffResponse
    conflicting_shifts: list[ConflictingShift]
