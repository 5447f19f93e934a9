"""요율 설정 SQLAlchemy ORM 모델 정의.

Rate configuration SQLAlchemy ORM model definitions.

Tables:
    - rate_tiers: 회사별 요일 유형 요율 구간 (Per-company tiered rates by day type)
    - employee_rates: 직원별 정액 요율 (Per-employee flat rates by category)
"""

import uuid
from datetime import date, datetime, timezone
from decimal import Decimal
from sqlalchemy import String, DateTime, Date, Integer, Numeric, ForeignKey, Index, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base

# 구간 분류 — Tier shift category
TIER_SHIFT_TYPES: tuple[str, ...] = ("day", "night", "weekend", "holiday", "custom")
# 요일 유형 — Day types
DAY_TYPES: tuple[str, ...] = ("weekday", "saturday", "sunday", "holiday")


class RateTier(Base):
    """요율 구간 모델 — 근무 시간의 한 구간에 적용되는 시급.

    Rate tier model — One bracket of a company's tiered pay ladder.

    Ladder Invariant (per company + day_type):
        - tier_order 는 1부터 연속 (Orders are contiguous starting at 1)
        - hours_in_tier 가 NULL 인 구간은 최대 1개, 마지막 구간이어야 함
          (At most one unbounded tier, and only as the last tier)

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        company_id: 소속 회사 FK (Owning company)
        shift_type: 구간 분류 (day | night | weekend | holiday | custom)
        tier_order: 구간 순서 (1..N)
        hours_in_tier: 구간 포함 시간, NULL = 나머지 전부 (NULL = unbounded remainder)
        rate_per_hour: 시간당 요율, 최소 통화 단위 (Hourly rate in cents)
        day_type: 요일 유형 (weekday | saturday | sunday | holiday)
        currency: 통화 코드 (ISO currency code)
        valid_from: 적용 시작일, NULL = 제한 없음 (Open start when NULL)
        valid_to: 적용 종료일, NULL = 제한 없음 (Open end when NULL)
    """

    __tablename__ = "rate_tiers"

    # 구간 고유 식별자 — Tier unique identifier (UUID v4, auto-generated)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 회사 FK — Owning company (CASCADE)
    company_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False)
    # 구간 분류 — day | night | weekend | holiday | custom
    shift_type: Mapped[str] = mapped_column(String(20), nullable=False, default="day")
    # 구간 순서 — 1-based position in the ladder
    tier_order: Mapped[int] = mapped_column(Integer, nullable=False)
    # 구간 포함 시간 — Hours covered by this tier (NULL = remaining hours)
    hours_in_tier: Mapped[Decimal | None] = mapped_column(Numeric(5, 2), nullable=True)
    # 시간당 요율 — Rate in minor currency units
    rate_per_hour: Mapped[int] = mapped_column(Integer, nullable=False)
    # 요일 유형 — weekday | saturday | sunday | holiday
    day_type: Mapped[str] = mapped_column(String(20), nullable=False)
    # 통화 — ISO currency code
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="AUD")
    # 적용 기간 — Validity window (inclusive, NULL = open)
    valid_from: Mapped[date | None] = mapped_column(Date, nullable=True)
    valid_to: Mapped[date | None] = mapped_column(Date, nullable=True)
    # 생성 일시 — Record creation timestamp (UTC)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    # 수정 일시 — Last modification timestamp (UTC, auto-updated)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        Index("ix_rate_tiers_company_day_type", "company_id", "day_type", "tier_order"),
    )


class EmployeeRate(Base):
    """직원 정액 요율 모델 — 카테고리별 시급.

    Employee rate model — Flat hourly rates for one employee at one company.
    Only one record may be active for an employee on any given date.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        user_id: 직원 FK (Employee)
        company_id: 회사 FK (Company)
        weekday_rate / weeknight_rate / saturday_rate / sunday_rate / public_holiday_rate:
            카테고리별 시급, 최소 통화 단위 (Per-category hourly rates in cents)
        currency: 통화 코드 (ISO currency code)
        valid_from / valid_to: 적용 기간, NULL = 제한 없음 (Validity window)
    """

    __tablename__ = "employee_rates"

    # 요율 고유 식별자 — Rate record unique identifier
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 직원 FK — Employee (CASCADE)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    # 회사 FK — Company (CASCADE)
    company_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False)
    # 카테고리별 시급 — Flat rates in minor units
    weekday_rate: Mapped[int] = mapped_column(Integer, nullable=False)
    weeknight_rate: Mapped[int] = mapped_column(Integer, nullable=False)
    saturday_rate: Mapped[int] = mapped_column(Integer, nullable=False)
    sunday_rate: Mapped[int] = mapped_column(Integer, nullable=False)
    public_holiday_rate: Mapped[int] = mapped_column(Integer, nullable=False)
    # 통화 — ISO currency code
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="AUD")
    # 적용 기간 — Validity window (inclusive, NULL = open)
    valid_from: Mapped[date | None] = mapped_column(Date, nullable=True)
    valid_to: Mapped[date | None] = mapped_column(Date, nullable=True)
    # 생성 일시 — Record creation timestamp (UTC)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    # 수정 일시 — Last modification timestamp (UTC, auto-updated)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        UniqueConstraint("user_id", "company_id", "valid_from", name="uq_employee_rate_user_company_from"),
        Index("ix_employee_rates_user_id", "user_id"),
    )
