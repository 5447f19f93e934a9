"""근무 및 근무표 Pydantic 스키마.

Shift and roster request/response schemas. Times travel as ``HH:MM``
strings; durations are derived and returned as decimal hours.
"""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from app.schemas.common import TIME_PATTERN

SHIFT_TYPE_PATTERN: str = r"^(morning|evening|night|double|custom)$"


class ShiftCreate(BaseModel):
    """근무 기록 요청 스키마.

    Attributes:
        work_date: 근무 날짜 (Work date)
        start_time / end_time: 시작/종료 시각 HH:MM (End before start = next day)
        shift_type: 근무 분류 (morning | evening | night | double | custom)
        notes / location: 메모, 근무지 (Optional)
    """

    work_date: date
    start_time: str = Field(..., pattern=TIME_PATTERN)
    end_time: str = Field(..., pattern=TIME_PATTERN)
    shift_type: str = Field("custom", pattern=SHIFT_TYPE_PATTERN)
    notes: str | None = None
    location: str | None = Field(None, max_length=255)


class ShiftUpdate(BaseModel):
    """근무 수정 요청 (부분 업데이트)."""

    work_date: date | None = None
    start_time: str | None = Field(None, pattern=TIME_PATTERN)
    end_time: str | None = Field(None, pattern=TIME_PATTERN)
    shift_type: str | None = Field(None, pattern=SHIFT_TYPE_PATTERN)
    notes: str | None = None
    location: str | None = Field(None, max_length=255)


class ShiftResponse(BaseModel):
    """근무 응답 스키마."""

    id: str
    user_id: str
    user_name: str | None = None
    company_id: str | None
    work_date: date
    start_time: str
    end_time: str
    duration_hours: Decimal  # 파생 값 (Derived, overnight aware)
    is_overnight: bool
    shift_type: str
    status: str
    notes: str | None
    location: str | None
    created_by: str | None
    approved_by: str | None
    approved_at: datetime | None
    is_roster_assigned: bool
    created_at: datetime


class ShiftReviewRequest(BaseModel):
    """근무 반려 요청 (Optional note sent to the employee)."""

    reason: str | None = Field(None, max_length=500)


class RosterShiftItem(BaseModel):
    """근무표 배정 항목 (One rostered shift)."""

    user_id: str
    work_date: date
    start_time: str = Field(..., pattern=TIME_PATTERN)
    end_time: str = Field(..., pattern=TIME_PATTERN)
    shift_type: str = Field("custom", pattern=SHIFT_TYPE_PATTERN)
    location: str | None = Field(None, max_length=255)
    notes: str | None = None


class RosterAssignRequest(BaseModel):
    """근무표 일괄 배정 요청."""

    shifts: list[RosterShiftItem] = Field(..., min_length=1, max_length=200)
    notify: bool = True  # 배정 알림 생성 여부 (Create roster_assigned notifications)


class RosterConflict(BaseModel):
    """배정 항목과 겹치는 휴가 (Time-off overlapping a rostered item)."""

    user_id: str
    work_date: date
    time_off_id: str
    time_off_status: str


class RosterAssignResponse(BaseModel):
    """근무표 일괄 배정 결과."""

    created: list[ShiftResponse]
    conflicts: list[RosterConflict]


class RosterEmailRequest(BaseModel):
    """주간 근무표 메일 발송 요청.

    Attributes:
        week_start: 주 시작일, 월요일로 정규화 (Any date of the week; normalized to Monday)
        user_ids: 대상 직원, 없으면 해당 주 근무가 있는 전원 (Defaults to everyone rostered)
    """

    week_start: date
    user_ids: list[str] | None = None


class RosterEmailResult(BaseModel):
    user_id: str
    email: str
    shift_count: int
    email_sent: bool


class RosterEmailResponse(BaseModel):
    week_start: date
    week_end: date
    results: list[RosterEmailResult]
