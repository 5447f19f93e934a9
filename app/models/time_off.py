"""휴가 신청 SQLAlchemy ORM 모델 정의.

Time-off request SQLAlchemy ORM model definition.

Tables:
    - time_off_requests: 직원 휴가 신청 (Employee time-off requests)
"""

import uuid
from datetime import date, datetime, time, timezone
from sqlalchemy import String, Boolean, DateTime, Date, Time, Text, ForeignKey, Index, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class TimeOffRequest(Base):
    """휴가 신청 모델.

    Status Flow:
        pending → approved | rejected

    Partial-day requests (``is_full_day`` False) carry start and end times
    that apply to every date in the range.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        user_id: 신청자 FK (Requesting employee)
        company_id: 회사 FK (Company)
        start_date / end_date: 기간, 양끝 포함 (Inclusive date range)
        start_time / end_time: 부분 휴가 시각 (Times for partial days)
        is_full_day: 종일 여부 (Whole-day request)
        reason: 사유 (Free text)
        status: 상태 (pending | approved | rejected)
        reviewed_by / reviewed_at: 처리 관리자와 일시 (Reviewer and timestamp)
        rejection_reason: 반려 사유 (Reason given on rejection)
    """

    __tablename__ = "time_off_requests"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    company_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False)
    # 휴가 기간 — Inclusive date range
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    # 부분 휴가 시각 — Only set for partial days
    start_time: Mapped[time | None] = mapped_column(Time, nullable=True)
    end_time: Mapped[time | None] = mapped_column(Time, nullable=True)
    is_full_day: Mapped[bool] = mapped_column(Boolean, default=True)
    reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    # 상태 — pending | approved | rejected
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    reviewed_by: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    reviewed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    rejection_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    # 생성 일시 — Record creation timestamp (UTC)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    # 수정 일시 — Last modification timestamp (UTC, auto-updated)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        Index("ix_time_off_company_dates", "company_id", "start_date", "end_date"),
        Index("ix_time_off_user_id", "user_id"),
    )
