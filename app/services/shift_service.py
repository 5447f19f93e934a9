"""근무 서비스 — 근무 기록 CRUD 및 관리자 승인 비즈니스 로직.

Shift Service — Personal shift CRUD plus manager review of company shifts.

Ownership rules:
    - 근무는 본인만 조회/수정/삭제 가능 (Only the owner edits a logged shift)
    - 근무표로 배정된 근무는 직원이 수정/삭제 불가 (Roster shifts are read-only
      for the employee, 403)
    - 0시간 근무는 거부 (A shift whose end equals its start is rejected)
"""

import logging
from datetime import date, time
from decimal import Decimal
from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import utcnow
from app.models.shift import Shift
from app.models.user import User
from app.repositories.notification_repository import notification_repository
from app.repositories.shift_repository import shift_repository
from app.repositories.user_repository import user_repository
from app.schemas.common import PaginatedResponse
from app.schemas.shift import ShiftCreate, ShiftResponse, ShiftUpdate
from app.utils.exceptions import (
    BadRequestError,
    ForbiddenError,
    InvalidDateRangeError,
    InvalidDurationError,
    NotFoundError,
)
from app.utils.time_utils import format_hhmm, is_overnight, parse_hhmm, shift_duration_hours, shift_duration_minutes

logger = logging.getLogger(__name__)

_REVIEWABLE_STATUSES: frozenset[str] = frozenset({"pending", "scheduled"})


def check_date_range(start: date | None, end: date | None) -> None:
    """종료일이 시작일보다 앞서면 InvalidDateRangeError."""
    if start is not None and end is not None and end < start:
        raise InvalidDateRangeError(f"end date {end} is before start date {start}")


def check_shift_times(start: time, end: time) -> None:
    """시작과 종료가 같은 0시간 근무를 거부합니다."""
    if shift_duration_minutes(start, end) == 0:
        raise InvalidDurationError("Shift start and end time cannot be equal")


class ShiftService:
    """근무 관련 비즈니스 로직을 처리하는 서비스.

    Service for shift logging and company shift review.
    """

    def to_response(self, shift: Shift, user_name: str | None = None) -> ShiftResponse:
        """근무 모델을 응답 스키마로 변환합니다 (duration은 파생 값)."""
        return ShiftResponse(
            id=str(shift.id),
            user_id=str(shift.user_id),
            user_name=user_name,
            company_id=str(shift.company_id) if shift.company_id else None,
            work_date=shift.work_date,
            start_time=format_hhmm(shift.start_time),
            end_time=format_hhmm(shift.end_time),
            duration_hours=shift_duration_hours(shift.start_time, shift.end_time),
            is_overnight=is_overnight(shift.start_time, shift.end_time),
            shift_type=shift.shift_type,
            status=shift.status,
            notes=shift.notes,
            location=shift.location,
            created_by=str(shift.created_by) if shift.created_by else None,
            approved_by=str(shift.approved_by) if shift.approved_by else None,
            approved_at=shift.approved_at,
            is_roster_assigned=shift.is_roster_assigned,
            created_at=shift.created_at,
        )

    def _initial_status(self, user: User) -> str:
        # 개인 기록은 완료, 회사 직원 기록은 승인 대기
        if user.company_id is None:
            return "completed"
        return "approved" if user.is_privileged else "pending"

    async def _warn_long_shift(self, db: AsyncSession, shift: Shift) -> None:
        hours: Decimal = shift_duration_hours(shift.start_time, shift.end_time)
        if hours > settings.LONG_SHIFT_HOURS:
            await notification_repository.create_notification(
                db,
                shift.user_id,
                "long_shift",
                f"Your shift on {shift.work_date:%d %b %Y} lasted {hours}h, "
                f"which is longer than {settings.LONG_SHIFT_HOURS} hours.",
            )

    async def _get_own_shift(self, db: AsyncSession, user: User, shift_id: UUID) -> Shift:
        shift: Shift | None = await shift_repository.get_by_id(db, shift_id)
        if shift is None or shift.user_id != user.id:
            raise NotFoundError("Shift not found")
        return shift

    # ── 본인 근무 (Own shifts) ───────────────────────────────

    async def list_shifts(
        self,
        db: AsyncSession,
        user: User,
        start: date | None = None,
        end: date | None = None,
    ) -> list[ShiftResponse]:
        """본인 근무를 날짜 범위로 조회합니다.

        Raises:
            InvalidDateRangeError: end < start
        """
        check_date_range(start, end)
        shifts: Sequence[Shift] = await shift_repository.get_shifts(db, user.id, start, end)
        return [self.to_response(s, user.name) for s in shifts]

    async def get_shift(self, db: AsyncSession, user: User, shift_id: UUID) -> ShiftResponse:
        shift: Shift = await self._get_own_shift(db, user, shift_id)
        return self.to_response(shift, user.name)

    async def create_shift(
        self,
        db: AsyncSession,
        user: User,
        data: ShiftCreate,
    ) -> ShiftResponse:
        """근무를 기록합니다.

        Individuals log ``completed`` shifts, company employees log
        ``pending`` shifts for approval and privileged users log ``approved``
        ones. A shift longer than ``LONG_SHIFT_HOURS`` raises a notification.

        Raises:
            InvalidDurationError: 시작과 종료가 같음 (Zero-length shift)
        """
        start: time = parse_hhmm(data.start_time)
        end: time = parse_hhmm(data.end_time)
        check_shift_times(start, end)

        shift: Shift = await shift_repository.create(
            db,
            {
                "user_id": user.id,
                "company_id": user.company_id,
                "work_date": data.work_date,
                "start_time": start,
                "end_time": end,
                "shift_type": data.shift_type,
                "status": self._initial_status(user),
                "notes": data.notes,
                "location": data.location,
            },
        )
        await self._warn_long_shift(db, shift)
        return self.to_response(shift, user.name)

    async def update_shift(
        self,
        db: AsyncSession,
        user: User,
        shift_id: UUID,
        data: ShiftUpdate,
    ) -> ShiftResponse:
        """본인 근무를 수정합니다.

        Editing a reviewed company shift sends it back to ``pending``.

        Raises:
            NotFoundError: 본인 근무가 아님 (Not the caller's shift)
            ForbiddenError: 근무표 배정 근무 (Roster-assigned shift)
            InvalidDurationError: 수정 결과가 0시간 (Zero-length result)
        """
        shift: Shift = await self._get_own_shift(db, user, shift_id)
        if shift.is_roster_assigned:
            raise ForbiddenError("Rostered shifts can only be changed by a manager")

        update_data: dict = data.model_dump(exclude_unset=True)
        for key in ("start_time", "end_time"):
            if update_data.get(key) is not None:
                update_data[key] = parse_hhmm(update_data[key])
            else:
                update_data.pop(key, None)
        if update_data.get("work_date") is None:
            update_data.pop("work_date", None)
        if update_data.get("shift_type") is None:
            update_data.pop("shift_type", None)

        check_shift_times(
            update_data.get("start_time", shift.start_time),
            update_data.get("end_time", shift.end_time),
        )

        if shift.company_id is not None and shift.status in ("approved", "rejected") and not user.is_privileged:
            update_data.update(status="pending", approved_by=None, approved_at=None)

        updated: Shift | None = await shift_repository.update(db, shift.id, update_data)
        if updated is None:
            raise NotFoundError("Shift not found")
        return self.to_response(updated, user.name)

    async def complete_rostered_shift(self, db: AsyncSession, user: User, shift_id: UUID) -> ShiftResponse:
        """배정 근무를 근무 완료로 보고합니다 (scheduled → pending).

        Raises:
            NotFoundError: 본인 근무가 아님
            BadRequestError: 배정 근무가 아니거나, 이미 보고되었거나, 아직 미래 날짜
        """
        shift: Shift = await self._get_own_shift(db, user, shift_id)
        if not shift.is_roster_assigned or shift.status != "scheduled":
            raise BadRequestError("Only scheduled roster shifts can be marked as worked")
        if shift.work_date > utcnow().date():
            raise BadRequestError("A shift cannot be marked as worked before its date")

        shift.status = "pending"
        await db.flush()
        await db.refresh(shift)
        logger.info("Rostered shift %s reported as worked by %s", shift.id, user.id)
        return self.to_response(shift, user.name)

    async def delete_shift(self, db: AsyncSession, user: User, shift_id: UUID) -> None:
        """본인 근무를 삭제합니다 (근무표 배정 근무는 403)."""
        shift: Shift = await self._get_own_shift(db, user, shift_id)
        if shift.is_roster_assigned:
            raise ForbiddenError("Rostered shifts can only be removed by a manager")
        await shift_repository.delete(db, shift.id)

    # ── 회사 근무 (Company shifts) ───────────────────────────

    async def _member_names(self, db: AsyncSession, company_id: UUID) -> dict[UUID, str]:
        members: Sequence[User] = await user_repository.get_company_members(db, company_id)
        return {m.id: m.name for m in members}

    async def list_company_shifts(
        self,
        db: AsyncSession,
        company_id: UUID,
        start: date | None = None,
        end: date | None = None,
        user_id: UUID | None = None,
        status: str | None = None,
        page: int = 1,
        per_page: int = 50,
    ) -> PaginatedResponse:
        """회사 근무 목록을 페이지 단위로 조회합니다."""
        check_date_range(start, end)
        query = shift_repository.company_query(company_id, start, end, user_id, status)
        shifts, total = await shift_repository.get_paginated(db, query, page, per_page)
        names: dict[UUID, str] = await self._member_names(db, company_id)
        return PaginatedResponse(
            items=[self.to_response(s, names.get(s.user_id)) for s in shifts],
            total=total,
            page=page,
            per_page=per_page,
        )

    async def list_pending(self, db: AsyncSession, company_id: UUID) -> list[ShiftResponse]:
        shifts: Sequence[Shift] = await shift_repository.get_pending(db, company_id)
        names: dict[UUID, str] = await self._member_names(db, company_id)
        return [self.to_response(s, names.get(s.user_id)) for s in shifts]

    async def review_shift(
        self,
        db: AsyncSession,
        company_id: UUID,
        shift_id: UUID,
        reviewer: User,
        approve: bool,
        reason: str | None = None,
    ) -> ShiftResponse:
        """승인 대기 근무를 승인하거나 반려합니다.

        A rostered shift still ``scheduled`` can be reviewed directly, which
        is how a manager confirms that rostered work happened (or did not).
        The employee receives a ``shift_reviewed`` notification.

        Raises:
            NotFoundError: 회사 근무가 아님 (Not a shift of this company)
            BadRequestError: 검토 가능한 상태가 아님 (Not pending or scheduled)
        """
        shift: Shift | None = await shift_repository.get_by_id(db, shift_id, company_id)
        if shift is None:
            raise NotFoundError("Shift not found")
        if shift.status not in _REVIEWABLE_STATUSES:
            raise BadRequestError(
                f"Only pending or scheduled shifts can be reviewed (status is {shift.status})"
            )

        shift.status = "approved" if approve else "rejected"
        shift.approved_by = reviewer.id
        shift.approved_at = utcnow()
        await db.flush()
        await db.refresh(shift)

        message: str = f"Your shift on {shift.work_date:%d %b %Y} was {shift.status}."
        if not approve and reason:
            message = f"{message} Reason: {reason}"
        await notification_repository.create_notification(db, shift.user_id, "shift_reviewed", message)
        logger.info("Shift %s %s by %s", shift.id, shift.status, reviewer.id)

        names: dict[UUID, str] = await self._member_names(db, company_id)
        return self.to_response(shift, names.get(shift.user_id))


# 싱글턴 인스턴스 — Singleton instance
shift_service: ShiftService = ShiftService()
