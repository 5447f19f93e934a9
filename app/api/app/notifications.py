"""앱 알림 라우터 — 내 알림 조회, 생성, 읽음 처리, 누락 기록 점검.

App Notification Router.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.database import get_db
from app.models.user import User
from app.schemas.common import MessageResponse
from app.schemas.notification import (
    NotificationCreate,
    NotificationListResponse,
    NotificationResponse,
    UnreadCountResponse,
)
from app.services.notification_service import notification_service

router: APIRouter = APIRouter()


@router.get("", response_model=NotificationListResponse)
async def list_notifications(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    page: int = Query(1, ge=1),
    per_page: int = Query(20, ge=1, le=100),
) -> NotificationListResponse:
    """내 알림 목록 (최신순) 과 안 읽은 수."""
    return await notification_service.list_notifications(db, current_user, page, per_page)


@router.get("/unread-count", response_model=UnreadCountResponse)
async def unread_count(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> UnreadCountResponse:
    return UnreadCountResponse(unread_count=await notification_service.get_unread_count(db, current_user))


@router.post("", response_model=NotificationResponse, status_code=201)
async def create_notification(
    data: NotificationCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> NotificationResponse:
    result: NotificationResponse = await notification_service.create_notification(db, current_user, data)
    await db.commit()
    return result


@router.post("/scan", response_model=NotificationResponse | None)
async def scan_missing_entries(
    response: Response,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> NotificationResponse | None:
    """지난 7일의 누락 기록 점검 — 새 알림이 생기면 201, 없으면 200 + null."""
    result: NotificationResponse | None = await notification_service.scan_missing_entries(db, current_user)
    await db.commit()
    if result is not None:
        response.status_code = 201
    return result


@router.patch("/read-all", response_model=MessageResponse)
async def mark_all_read(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> MessageResponse:
    count: int = await notification_service.mark_all_read(db, current_user)
    await db.commit()
    return MessageResponse(message=f"{count} notifications marked as read")


@router.patch("/{notification_id}/read", response_model=MessageResponse)
async def mark_read(
    notification_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> MessageResponse:
    await notification_service.mark_read(db, current_user, notification_id)
    await db.commit()
    return MessageResponse(message="Notification marked as read")
