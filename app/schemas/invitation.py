"""직원 초대 Pydantic 스키마."""

from datetime import datetime

from pydantic import BaseModel, Field

from app.schemas.common import ROLE_PATTERN


class InvitationCreate(BaseModel):
    """직원 초대 요청.

    Attributes:
        email: 초대 대상 이메일 (Invitee email)
        name: 초대 대상 이름 (Optional display name)
        role: 부여할 역할 (manager | supervisor | employee)
    """

    email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    name: str | None = Field(None, max_length=255)
    role: str = Field("employee", pattern=ROLE_PATTERN)


class InvitationResponse(BaseModel):
    id: str
    company_id: str
    email: str
    name: str | None
    role: str
    expires_at: datetime
    accepted_at: datetime | None
    created_at: datetime
    email_sent: bool | None = None  # 생성 직후에만 채워짐 (Only set on creation)


class InvitationPublicResponse(BaseModel):
    """초대 링크 조회 응답 (No authentication required)."""

    email: str
    name: str | None
    role: str
    company_name: str
    expires_at: datetime
    is_expired: bool
    is_accepted: bool


class AcceptInvitationRequest(BaseModel):
    """초대 수락 요청 — 신규 계정 생성 또는 기존 계정 연결.

    For an existing account the password must match it; otherwise a new
    employee account is created with this password.
    """

    name: str | None = Field(None, min_length=1, max_length=255)
    password: str = Field(..., min_length=8, max_length=128)
