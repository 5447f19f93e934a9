"""회사 및 직원 관리 Pydantic 스키마.

Company registration and employee management schemas.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from app.schemas.auth import TokenResponse
from app.schemas.common import CURRENCY_PATTERN, ROLE_PATTERN


class CompanyCreate(BaseModel):
    """사업자 계정 등록 요청 — 회사와 대표 사용자를 함께 생성.

    Registers a company and its business-owner login in one step.

    Attributes:
        name: 회사명 (Company name)
        email: 회사 대표 이메일, 대표 사용자 로그인 이메일 (Contact and owner login email)
        owner_name: 대표자 이름 (Owner display name)
        password: 대표 사용자 비밀번호 (Owner password)
        industry / size: 업종, 규모 (Optional profile fields)
        timezone: IANA 시간대 (IANA timezone)
        currency: 기본 통화 (Default currency)
    """

    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    owner_name: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=8, max_length=128)
    industry: str | None = None
    size: str | None = None
    timezone: str = "Australia/Sydney"
    currency: str = Field("AUD", pattern=CURRENCY_PATTERN)


class CompanyUpdate(BaseModel):
    """회사 정보 수정 요청 (부분 업데이트)."""

    name: str | None = Field(None, min_length=1, max_length=255)
    owner_name: str | None = None
    industry: str | None = None
    size: str | None = None
    timezone: str | None = None
    currency: str | None = Field(None, pattern=CURRENCY_PATTERN)


class CompanyResponse(BaseModel):
    """회사 응답 스키마."""

    id: str
    name: str
    email: str
    owner_name: str
    industry: str | None
    size: str | None
    timezone: str
    currency: str
    created_at: datetime


class CompanyRegisterResponse(BaseModel):
    """사업자 등록 응답 — 회사 정보와 대표 사용자 토큰."""

    company: CompanyResponse
    tokens: TokenResponse


class EmployeeResponse(BaseModel):
    """직원 응답 스키마."""

    id: str
    email: str
    name: str
    user_type: str
    role: str | None
    hourly_rate: int | None
    is_active: bool
    created_at: datetime


class EmployeeUpdate(BaseModel):
    """직원 정보 수정 요청 (부분 업데이트)."""

    name: str | None = Field(None, min_length=1, max_length=255)
    role: str | None = Field(None, pattern=ROLE_PATTERN)
    hourly_rate: int | None = Field(None, ge=0)


class EmployeeStatusUpdate(BaseModel):
    """직원 활성/비활성 전환 요청."""

    is_active: bool


class DashboardStatsResponse(BaseModel):
    """관리자 대시보드 통계.

    Attributes:
        employee_count / active_employee_count: 직원 수 (Members, all and active)
        shift_count: 전체 근무 수 (Total company shifts)
        pending_shift_count: 승인 대기 근무 수 (Shifts awaiting approval)
        pending_time_off_count: 처리 대기 휴가 수 (Pending time-off requests)
        pending_invitation_count: 미수락 초대 수 (Open invitations)
        week_hours: 이번 주 총 근무 시간 (Hours worked this week)
    """

    employee_count: int
    active_employee_count: int
    shift_count: int
    pending_shift_count: int
    pending_time_off_count: int
    pending_invitation_count: int
    week_hours: Decimal
