"""알림 레포지토리 — 알림 관련 DB 쿼리 담당.

Notification Repository — Per-user notification queries.
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.notification import Notification
from app.repositories.base import BaseRepository


class NotificationRepository(BaseRepository[Notification]):
    """알림 레포지토리.

    Extends:
        BaseRepository[Notification]
    """

    def __init__(self) -> None:
        super().__init__(Notification)

    async def get_user_notifications(
        self,
        db: AsyncSession,
        user_id: UUID,
        page: int = 1,
        per_page: int = 20,
    ) -> tuple[Sequence[Notification], int]:
        """사용자의 알림 목록을 최신순으로 페이지네이션하여 조회합니다.

        Returns:
            tuple[Sequence[Notification], int]: (알림 목록, 전체 개수)
        """
        query: Select = (
            select(Notification)
            .where(Notification.user_id == user_id)
            .order_by(Notification.created_at.desc())
        )
        return await self.get_paginated(db, query, page, per_page)

    async def get_unread_count(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> int:
        """사용자의 읽지 않은 알림 수를 조회합니다."""
        query: Select = (
            select(func.count())
            .select_from(Notification)
            .where(
                Notification.user_id == user_id,
                Notification.is_read.is_(False),
            )
        )
        return (await db.execute(query)).scalar() or 0

    async def has_unread_of_type(
        self,
        db: AsyncSession,
        user_id: UUID,
        notification_type: str,
    ) -> bool:
        """같은 유형의 읽지 않은 알림 존재 여부 (Avoids stacking duplicate reminders)."""
        return await self.exists(
            db, {"user_id": user_id, "type": notification_type, "is_read": False}
        )

    async def mark_read(
        self,
        db: AsyncSession,
        notification_id: UUID,
        user_id: UUID,
    ) -> bool:
        """단일 알림을 읽음 처리합니다. 본인 알림이 아니면 False."""
        result = await db.execute(
            update(Notification)
            .where(
                Notification.id == notification_id,
                Notification.user_id == user_id,
            )
            .values(is_read=True)
        )
        await db.flush()
        return result.rowcount > 0

    async def mark_all_read(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> int:
        """사용자의 모든 읽지 않은 알림을 읽음 처리합니다.

        Returns:
            int: 업데이트된 알림 수 (Count of updated notifications)
        """
        result = await db.execute(
            update(Notification)
            .where(
                Notification.user_id == user_id,
                Notification.is_read.is_(False),
            )
            .values(is_read=True)
        )
        await db.flush()
        return result.rowcount

    async def create_notification(
        self,
        db: AsyncSession,
        user_id: UUID,
        notification_type: str,
        message: str,
    ) -> Notification:
        """새 알림을 생성합니다."""
        notification: Notification = Notification(
            user_id=user_id,
            type=notification_type,
            message=message,
        )
        db.add(notification)
        await db.flush()
        await db.refresh(notification)
        return notification


# 싱글턴 인스턴스 — Singleton instance
notification_repository: NotificationRepository = NotificationRepository()
