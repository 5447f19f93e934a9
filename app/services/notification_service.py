"""알림 서비스 — 알림 조회, 생성, 읽음 처리, 누락 기록 점검.

Notification Service — List, create, mark read, and the missing-entry scan
that reminds users about days without a logged shift.
"""

from datetime import date, timedelta
from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.database import utcnow
from app.models.notification import Notification
from app.models.user import User
from app.repositories.notification_repository import notification_repository
from app.schemas.notification import (
    NotificationCreate,
    NotificationListResponse,
    NotificationResponse,
)
from app.services.analytics_service import analytics_service
from app.utils.exceptions import NotFoundError

# 누락 점검 기간(일) — Days looked back by the missing-entry scan
MISSING_SCAN_DAYS: int = 7


class NotificationService:
    """알림 관련 비즈니스 로직."""

    def _to_response(self, notification: Notification) -> NotificationResponse:
        return NotificationResponse(
            id=str(notification.id),
            type=notification.type,
            message=notification.message,
            is_read=notification.is_read,
            created_at=notification.created_at,
        )

    async def list_notifications(
        self,
        db: AsyncSession,
        user: User,
        page: int = 1,
        per_page: int = 20,
    ) -> NotificationListResponse:
        """본인 알림 목록 (최신순) 과 안 읽은 수."""
        items: Sequence[Notification]
        items, total = await notification_repository.get_user_notifications(db, user.id, page, per_page)
        unread: int = await notification_repository.get_unread_count(db, user.id)
        return NotificationListResponse(
            items=[self._to_response(n) for n in items],
            total=total,
            page=page,
            per_page=per_page,
            unread_count=unread,
        )

    async def get_unread_count(self, db: AsyncSession, user: User) -> int:
        return await notification_repository.get_unread_count(db, user.id)

    async def create_notification(
        self,
        db: AsyncSession,
        user: User,
        data: NotificationCreate,
    ) -> NotificationResponse:
        notification: Notification = await notification_repository.create_notification(
            db, user.id, data.type, data.message
        )
        return self._to_response(notification)

    async def mark_read(self, db: AsyncSession, user: User, notification_id: UUID) -> None:
        """알림 읽음 처리 — 다른 사용자의 알림은 404."""
        if not await notification_repository.mark_read(db, notification_id, user.id):
            raise NotFoundError("Notification not found")

    async def mark_all_read(self, db: AsyncSession, user: User) -> int:
        return await notification_repository.mark_all_read(db, user.id)

    async def scan_missing_entries(
        self,
        db: AsyncSession,
        user: User,
        today: date | None = None,
    ) -> NotificationResponse | None:
        """지난 7일(오늘 제외) 중 기록 없는 날이 있으면 알림을 생성합니다.

        Look back over the previous ``MISSING_SCAN_DAYS`` days. Nothing is
        created when every day has a shift or an unread reminder already
        exists.

        Returns:
            NotificationResponse | None: 생성된 알림 (The new reminder, if any)
        """
        today = today or utcnow().date()
        end: date = today - timedelta(days=1)
        start: date = today - timedelta(days=MISSING_SCAN_DAYS)

        missing: list[date] = await analytics_service.missing_dates(db, user.id, start, end)
        if not missing:
            return None
        if await notification_repository.has_unread_of_type(db, user.id, "missing_entries"):
            return None

        days: str = ", ".join(f"{d:%a %d %b}" for d in missing)
        noun: str = "day" if len(missing) == 1 else "days"
        notification: Notification = await notification_repository.create_notification(
            db,
            user.id,
            "missing_entries",
            f"You have {len(missing)} {noun} without a logged shift: {days}.",
        )
        return self._to_response(notification)


# 싱글턴 인스턴스 — Singleton instance
notification_service: NotificationService = NotificationService()
