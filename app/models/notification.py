"""알림 관련 SQLAlchemy ORM 모델 정의.

Notification SQLAlchemy ORM model definitions.

Tables:
    - notifications: 사용자 알림 (User notifications)
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import String, Boolean, DateTime, ForeignKey, Index, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base

# 알림 유형 — Notification types
NOTIFICATION_TYPES: tuple[str, ...] = (
    "missing_entries",
    "long_shift",
    "roster_assigned",
    "shift_reviewed",
    "time_off_reviewed",
)


class Notification(Base):
    """알림 모델 — 사용자에게 전달되는 시스템 알림.

    Notification Types (type 필드 값):
        - "missing_entries": 근무 기록 누락 (Days without a logged shift)
        - "long_shift": 장시간 근무 (Shift longer than LONG_SHIFT_HOURS)
        - "roster_assigned": 근무표 배정 (Manager rostered a shift)
        - "shift_reviewed": 근무 승인/반려 (Shift approved or rejected)
        - "time_off_reviewed": 휴가 신청 처리 (Time-off approved or rejected)

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        user_id: 수신자 FK (Recipient user foreign key)
        type: 알림 유형 (Notification type, see above)
        message: 알림 메시지 (Human-readable notification message)
        is_read: 읽음 여부 (Whether the user has read this notification)
        created_at: 생성 일시 UTC (Creation timestamp)
    """

    __tablename__ = "notifications"

    # 알림 고유 식별자 — Notification unique identifier (UUID v4, auto-generated)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 수신자 FK — Target user who receives this notification
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    # 알림 유형 — See NOTIFICATION_TYPES
    type: Mapped[str] = mapped_column(String(50), nullable=False)
    # 알림 메시지 — Human-readable message displayed to the user
    message: Mapped[str] = mapped_column(String(1000), nullable=False)
    # 읽음 여부 — False=미읽음, True=읽음 (Unread by default)
    is_read: Mapped[bool] = mapped_column(Boolean, default=False)
    # 생성 일시 — Notification creation timestamp (UTC, immutable)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        Index("ix_notifications_user_id", "user_id"),
    )
