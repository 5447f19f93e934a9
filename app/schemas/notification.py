"""알림 Pydantic 스키마.

Notification request/response schemas.
"""

from datetime import datetime

from pydantic import BaseModel, Field

NOTIFICATION_TYPE_PATTERN: str = (
    r"^(missing_entries|long_shift|roster_assigned|shift_reviewed|time_off_reviewed)$"
)


class NotificationCreate(BaseModel):
    """본인 알림 생성 요청 (Client-side reminders such as missing entries)."""

    type: str = Field(..., pattern=NOTIFICATION_TYPE_PATTERN)
    message: str = Field(..., min_length=1, max_length=1000)


class NotificationResponse(BaseModel):
    """알림 응답 스키마."""

    id: str  # 알림 UUID 문자열 (Notification UUID as string)
    type: str  # 알림 유형 (See NOTIFICATION_TYPES)
    message: str  # 알림 메시지 (Display message)
    is_read: bool  # 읽음 여부 (Read flag)
    created_at: datetime  # 생성 일시 UTC (Creation timestamp)


class NotificationListResponse(BaseModel):
    items: list[NotificationResponse]
    total: int
    page: int
    per_page: int
    unread_count: int


class UnreadCountResponse(BaseModel):
    unread_count: int
