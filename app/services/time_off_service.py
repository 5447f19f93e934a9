"""휴가 신청 서비스 — 신청, 조회, 취소, 관리자 승인/반려.

Time-Off Service — Employees request leave; managers review it.
Creating a request reports the requester's existing shifts that fall inside
the requested period so the employee can sort them out with their manager.
"""

import logging
from datetime import date, time
from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.database import utcnow
from app.models.shift import Shift
from app.models.time_off import TimeOffRequest
from app.models.user import User
from app.repositories.notification_repository import notification_repository
from app.repositories.shift_repository import shift_repository
from app.repositories.time_off_repository import time_off_repository
from app.repositories.user_repository import user_repository
from app.schemas.time_off import (
    ConflictingShift,
    TimeOffCreate,
    TimeOffCreateResponse,
    TimeOffResponse,
)
from app.services.shift_service import check_date_range
from app.utils.exceptions import BadRequestError, DuplicateError, NotFoundError
from app.utils.time_utils import format_hhmm, parse_hhmm

logger = logging.getLogger(__name__)


def _hhmm(value: time | None) -> str | None:
    return format_hhmm(value) if value is not None else None


class TimeOffService:
    """휴가 신청 비즈니스 로직."""

    def _to_response(self, request: TimeOffRequest, user_name: str | None = None) -> TimeOffResponse:
        return TimeOffResponse(
            id=str(request.id),
            user_id=str(request.user_id),
            user_name=user_name,
            company_id=str(request.company_id),
            start_date=request.start_date,
            end_date=request.end_date,
            is_full_day=request.is_full_day,
            start_time=_hhmm(request.start_time),
            end_time=_hhmm(request.end_time),
            reason=request.reason,
            status=request.status,
            reviewed_by=str(request.reviewed_by) if request.reviewed_by else None,
            reviewed_at=request.reviewed_at,
            rejection_reason=request.rejection_reason,
            created_at=request.created_at,
        )

    async def create_request(
        self,
        db: AsyncSession,
        user: User,
        data: TimeOffCreate,
    ) -> TimeOffCreateResponse:
        """휴가를 신청합니다.

        Raises:
            BadRequestError: 회사 소속 아님, 잘못된 부분 휴가 시간
            InvalidDateRangeError: 종료일 < 시작일
            DuplicateError: 기존 대기/승인 휴가와 기간 겹침
        """
        if user.company_id is None:
            raise BadRequestError("Time-off requests require a company account")
        check_date_range(data.start_date, data.end_date)

        start_time: time | None = None
        end_time: time | None = None
        if not data.is_full_day:
            start_time = parse_hhmm(data.start_time)
            end_time = parse_hhmm(data.end_time)
            if end_time <= start_time:
                raise BadRequestError("Partial-day time off must end after it starts")

        overlapping: Sequence[TimeOffRequest] = await time_off_repository.get_user_overlapping(
            db, user.id, data.start_date, data.end_date
        )
        if overlapping:
            raise DuplicateError("You already have time off requested for part of this period")

        request: TimeOffRequest = await time_off_repository.create(
            db,
            {
                "user_id": user.id,
                "company_id": user.company_id,
                "start_date": data.start_date,
                "end_date": data.end_date,
                "is_full_day": data.is_full_day,
                "start_time": start_time,
                "end_time": end_time,
                "reason": data.reason,
            },
        )

        shifts: Sequence[Shift] = await shift_repository.get_shifts(
            db, user.id, data.start_date, data.end_date
        )
        conflicts: list[ConflictingShift] = [
            ConflictingShift(
                shift_id=str(s.id),
                work_date=s.work_date,
                start_time=format_hhmm(s.start_time),
                end_time=format_hhmm(s.end_time),
                status=s.status,
            )
            for s in shifts
            if s.status != "rejected"
        ]
        return TimeOffCreateResponse(request=self._to_response(request, user.name), conflicting_shifts=conflicts)

    async def list_my_requests(self, db: AsyncSession, user: User) -> list[TimeOffResponse]:
        requests: Sequence[TimeOffRequest] = await time_off_repository.get_user_requests(db, user.id)
        return [self._to_response(r, user.name) for r in requests]

    async def cancel_request(self, db: AsyncSession, user: User, request_id: UUID) -> None:
        """대기 중인 본인 휴가 신청만 취소할 수 있습니다."""
        request: TimeOffRequest | None = await time_off_repository.get_by_id(db, request_id)
        if request is None or request.user_id != user.id:
            raise NotFoundError("Time-off request not found")
        if request.status != "pending":
            raise BadRequestError("Only pending requests can be cancelled")
        await time_off_repository.delete(db, request.id)

    async def list_company_requests(
        self,
        db: AsyncSession,
        company_id: UUID,
        start: date | None = None,
        end: date | None = None,
        status: str | None = None,
    ) -> list[TimeOffResponse]:
        check_date_range(start, end)
        requests: Sequence[TimeOffRequest] = await time_off_repository.get_company_requests(
            db, company_id, start, end, status
        )
        members: Sequence[User] = await user_repository.get_company_members(db, company_id)
        names: dict[UUID, str] = {m.id: m.name for m in members}
        return [self._to_response(r, names.get(r.user_id)) for r in requests]

    async def review_request(
        self,
        db: AsyncSession,
        company_id: UUID,
        request_id: UUID,
        reviewer: User,
        approve: bool,
        reason: str | None = None,
    ) -> TimeOffResponse:
        """휴가 신청을 승인 또는 반려하고 신청자에게 알립니다.

        Raises:
            NotFoundError: 회사 신청이 아님
            BadRequestError: 대기 상태가 아님 (Already reviewed)
        """
        request: TimeOffRequest | None = await time_off_repository.get_by_id(db, request_id, company_id)
        if request is None:
            raise NotFoundError("Time-off request not found")
        if request.status != "pending":
            raise BadRequestError(f"Request has already been {request.status}")

        request.status = "approved" if approve else "rejected"
        request.reviewed_by = reviewer.id
        request.reviewed_at = utcnow()
        request.rejection_reason = None if approve else reason
        await db.flush()
        await db.refresh(request)

        period: str = f"{request.start_date:%d %b %Y}"
        if request.end_date != request.start_date:
            period = f"{period} to {request.end_date:%d %b %Y}"
        message: str = f"Your time off for {period} was {request.status}."
        if reason and not approve:
            message = f"{message} Reason: {reason}"
        await notification_repository.create_notification(db, request.user_id, "time_off_reviewed", message)
        logger.info("Time-off %s %s by %s", request.id, request.status, reviewer.id)

        owner: User | None = await user_repository.get_by_id(db, request.user_id)
        return self._to_response(request, owner.name if owner is not None else None)


# 싱글턴 인스턴스 — Singleton instance
time_off_service: TimeOffService = TimeOffService()
