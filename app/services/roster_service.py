"""근무표 서비스 — 주간 근무 일괄 배정, 조회, 근무표 메일 발송.

Roster Service — Managers assign shifts to employees for a week.

Roster shifts are created with status ``scheduled`` and ``created_by`` set
to the assigning manager, which makes them read-only for the employee.
Assignments that overlap pending or approved time off are still created
but reported back as conflicts.
"""

import logging
from collections import defaultdict
from datetime import date, time, timedelta
from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.company import Company
from app.models.shift import Shift
from app.models.time_off import TimeOffRequest
from app.models.user import User
from app.repositories.company_repository import company_repository
from app.repositories.notification_repository import notification_repository
from app.repositories.shift_repository import shift_repository
from app.repositories.time_off_repository import time_off_repository
from app.repositories.user_repository import user_repository
from app.schemas.shift import (
    RosterAssignRequest,
    RosterAssignResponse,
    RosterConflict,
    RosterEmailRequest,
    RosterEmailResponse,
    RosterEmailResult,
    ShiftResponse,
)
from app.services.shift_service import check_shift_times, shift_service
from app.utils.email import render_roster_email, send_email
from app.utils.exceptions import BadRequestError, ForbiddenError, NotFoundError
from app.utils.time_utils import parse_hhmm, week_start

logger = logging.getLogger(__name__)


def week_bounds(day: date) -> tuple[date, date]:
    """날짜가 속한 주의 월요일과 일요일."""
    monday: date = week_start(day)
    return monday, monday + timedelta(days=6)


class RosterService:
    """근무표 배정 서비스."""

    async def assign(
        self,
        db: AsyncSession,
        company_id: UUID,
        manager: User,
        data: RosterAssignRequest,
    ) -> RosterAssignResponse:
        """근무를 일괄 배정합니다.

        Every item is validated before anything is written, so a bad item
        rejects the whole batch.

        Raises:
            NotFoundError: 회사 직원이 아님 (Unknown or foreign employee)
            BadRequestError: 비활성 직원, 잘못된 user_id
            InvalidDurationError: 0시간 근무 (Zero-length shift)
        """
        members: dict[UUID, User] = {}
        parsed: list[tuple[UUID, time, time]] = []
        for item in data.shifts:
            try:
                user_id: UUID = UUID(item.user_id)
            except ValueError:
                raise BadRequestError(f"Invalid user id {item.user_id}")
            if user_id not in members:
                member: User | None = await user_repository.get_member(db, company_id, user_id)
                if member is None:
                    raise NotFoundError(f"Employee {item.user_id} not found")
                if not member.is_active:
                    raise BadRequestError(f"Employee {member.name} is deactivated")
                members[user_id] = member
            start: time = parse_hhmm(item.start_time)
            end: time = parse_hhmm(item.end_time)
            check_shift_times(start, end)
            parsed.append((user_id, start, end))

        created: list[ShiftResponse] = []
        conflicts: list[RosterConflict] = []
        per_user: dict[UUID, int] = defaultdict(int)

        for item, (user_id, start, end) in zip(data.shifts, parsed):
            shift: Shift = await shift_repository.create(
                db,
                {
                    "user_id": user_id,
                    "company_id": company_id,
                    "work_date": item.work_date,
                    "start_time": start,
                    "end_time": end,
                    "shift_type": item.shift_type,
                    "status": "scheduled",
                    "location": item.location,
                    "notes": item.notes,
                    "created_by": manager.id,
                },
            )
            created.append(shift_service.to_response(shift, members[user_id].name))
            per_user[user_id] += 1

            overlapping: Sequence[TimeOffRequest] = await time_off_repository.get_user_overlapping(
                db, user_id, item.work_date, item.work_date
            )
            conflicts.extend(
                RosterConflict(
                    user_id=str(user_id),
                    work_date=item.work_date,
                    time_off_id=str(r.id),
                    time_off_status=r.status,
                )
                for r in overlapping
            )

        if data.notify:
            for user_id, count in per_user.items():
                noun: str = "shift" if count == 1 else "shifts"
                await notification_repository.create_notification(
                    db,
                    user_id,
                    "roster_assigned",
                    f"{manager.name} assigned you {count} new {noun}.",
                )

        logger.info(
            "Rostered %d shifts for %d employees in company %s (%d conflicts)",
            len(created),
            len(per_user),
            company_id,
            len(conflicts),
        )
        return RosterAssignResponse(created=created, conflicts=conflicts)

    async def list_week(
        self,
        db: AsyncSession,
        company_id: UUID,
        day: date,
    ) -> list[ShiftResponse]:
        """회사의 한 주 근무 전체 (Every company shift in the week of ``day``)."""
        monday, sunday = week_bounds(day)
        shifts: Sequence[Shift] = await shift_repository.get_company_shifts(db, company_id, monday, sunday)
        members: Sequence[User] = await user_repository.get_company_members(db, company_id)
        names: dict[UUID, str] = {m.id: m.name for m in members}
        return [shift_service.to_response(s, names.get(s.user_id)) for s in shifts]

    async def my_roster(self, db: AsyncSession, user: User, day: date) -> list[ShiftResponse]:
        """직원 본인의 주간 배정 근무 (Roster shifts of the caller for a week)."""
        monday, sunday = week_bounds(day)
        shifts: Sequence[Shift] = await shift_repository.get_shifts(db, user.id, monday, sunday)
        return [shift_service.to_response(s, user.name) for s in shifts if s.is_roster_assigned]

    async def delete_roster_shift(self, db: AsyncSession, company_id: UUID, shift_id: UUID) -> None:
        """배정 근무 삭제 — 아직 근무 전(scheduled)인 배정만 삭제 가능."""
        shift: Shift | None = await shift_repository.get_by_id(db, shift_id, company_id)
        if shift is None or not shift.is_roster_assigned:
            raise NotFoundError("Roster shift not found")
        if shift.status != "scheduled":
            raise ForbiddenError("Only scheduled roster shifts can be removed")
        await shift_repository.delete(db, shift.id, company_id)

    async def email_week(
        self,
        db: AsyncSession,
        company_id: UUID,
        data: RosterEmailRequest,
    ) -> RosterEmailResponse:
        """주간 근무표를 직원별로 메일 발송합니다.

        Without ``user_ids`` every employee with a shift that week gets an
        email. Delivery failures are reported per employee.
        """
        company: Company | None = await company_repository.get_by_id(db, company_id)
        if company is None:
            raise NotFoundError("Company not found")
        monday, sunday = week_bounds(data.week_start)

        shifts: Sequence[Shift] = await shift_repository.get_company_shifts(db, company_id, monday, sunday)
        by_user: dict[UUID, list[Shift]] = defaultdict(list)
        for shift in shifts:
            if shift.status != "rejected":
                by_user[shift.user_id].append(shift)

        targets: list[UUID]
        if data.user_ids:
            try:
                targets = [UUID(u) for u in data.user_ids]
            except ValueError:
                raise BadRequestError("Invalid user id in user_ids")
        else:
            targets = list(by_user)

        results: list[RosterEmailResult] = []
        for user_id in targets:
            member: User | None = await user_repository.get_member(db, company_id, user_id)
            if member is None:
                raise NotFoundError(f"Employee {user_id} not found")
            user_shifts: list[Shift] = by_user.get(user_id, [])
            subject, html, text = render_roster_email(member.name, company.name, monday, sunday, user_shifts)
            sent: bool = await send_email(member.email, subject, html, text)
            results.append(
                RosterEmailResult(
                    user_id=str(user_id),
                    email=member.email,
                    shift_count=len(user_shifts),
                    email_sent=sent,
                )
            )
        return RosterEmailResponse(week_start=monday, week_end=sunday, results=results)


# 싱글턴 인스턴스 — Singleton instance
roster_service: RosterService = RosterService()
