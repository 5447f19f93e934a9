"""근무(시프트) SQLAlchemy ORM 모델 정의.

Shift SQLAlchemy ORM model definition.
A shift is a block of work on one date with local wall-clock start and end
times. Duration is never stored; it is derived from the times with
``app.utils.time_utils`` (an end before the start ends the next day).

Tables:
    - shifts: 근무 기록 및 근무표 배정 (Logged shifts and roster assignments)
"""

import uuid
from datetime import date, datetime, time, timezone
from sqlalchemy import String, DateTime, Date, Time, Text, ForeignKey, Index, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base

# 근무 분류 — Shift classification
SHIFT_TYPES: tuple[str, ...] = ("morning", "evening", "night", "double", "custom")
# 근무 상태 — Shift status
SHIFT_STATUSES: tuple[str, ...] = ("scheduled", "completed", "pending", "approved", "rejected")


class Shift(Base):
    """근무 모델 — 직원이 직접 기록하거나 관리자가 배정한 근무.

    Shift model — Logged by its owner, or assigned by a manager through the
    roster. Roster shifts carry ``created_by`` pointing at the manager and
    cannot be edited or deleted by the employee.

    Status Flow:
        scheduled → completed | pending → approved | rejected
        - scheduled: 근무표 배정, 아직 근무 전 (Rostered, not yet worked)
        - completed: 개인 사용자 기록 완료 (Logged by an individual)
        - pending: 직원 기록, 승인 대기 (Logged by an employee, awaiting approval)
        - approved / rejected: 관리자 검토 결과 (Manager decision)

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        user_id: 근무자 FK (Employee who works the shift)
        company_id: 소속 회사 FK (Company, null for individuals)
        work_date: 근무 날짜 (Work date)
        start_time: 시작 시각 (Local start time)
        end_time: 종료 시각 (Local end time, earlier than start = next day)
        shift_type: 근무 분류 (morning | evening | night | double | custom)
        status: 상태 (See flow above)
        notes: 메모 (Free text notes)
        location: 근무지 (Work location)
        created_by: 배정한 관리자 FK (Manager who rostered the shift)
        approved_by: 검토 관리자 FK (Manager who reviewed it)
        approved_at: 검토 일시 (Review timestamp)
    """

    __tablename__ = "shifts"

    # 근무 고유 식별자 — Shift unique identifier (UUID v4, auto-generated)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 근무자 FK — Employee (CASCADE: 사용자 삭제 시 근무도 삭제)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    # 회사 FK — Company scope (개인 사용자는 NULL)
    company_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("companies.id", ondelete="CASCADE"), nullable=True)
    # 근무 날짜 — Work date (date only)
    work_date: Mapped[date] = mapped_column(Date, nullable=False)
    # 시작 시각 — Local wall-clock start time
    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    # 종료 시각 — Local wall-clock end time
    end_time: Mapped[time] = mapped_column(Time, nullable=False)
    # 근무 분류 — morning | evening | night | double | custom
    shift_type: Mapped[str] = mapped_column(String(20), nullable=False, default="custom")
    # 상태 — scheduled | completed | pending | approved | rejected
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="completed")
    # 메모 — Free text notes
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    # 근무지 — Work location
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    # 배정자 FK — Manager who rostered this shift (본인 기록이면 NULL)
    created_by: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    # 검토자 FK — Manager who approved/rejected
    approved_by: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    # 검토 일시 — Review timestamp
    approved_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    # 생성 일시 — Record creation timestamp (UTC)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    # 수정 일시 — Last modification timestamp (UTC, auto-updated)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        Index("ix_shifts_user_date", "user_id", "work_date"),
        Index("ix_shifts_company_date", "company_id", "work_date"),
    )

    @property
    def is_roster_assigned(self) -> bool:
        """관리자가 배정한 근무인지 여부 (Rostered by someone other than the owner)."""
        return self.created_by is not None and self.created_by != self.user_id
