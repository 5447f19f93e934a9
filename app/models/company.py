"""회사 SQLAlchemy ORM 모델 정의.

Company SQLAlchemy ORM model definition.
A company is the tenant boundary: employees, rosters, rate tiers and
employee rates all hang off a company.

Tables:
    - companies: 사업자 계정 (Business accounts)
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import String, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class Company(Base):
    """회사 모델 — 사업자 계정 정보.

    Company model — A business account that employs users.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        name: 회사명 (Company display name)
        email: 대표 연락 이메일 (Contact email, unique)
        owner_name: 대표자 이름 (Owner display name)
        industry: 업종 (Industry, optional)
        size: 규모 구간 (Headcount bucket, e.g. "1-10")
        timezone: IANA 시간대 (IANA timezone of the workplace)
        currency: 기본 통화 (Default currency for rates)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)
    """

    __tablename__ = "companies"

    # 회사 고유 식별자 — Company unique identifier (UUID v4, auto-generated)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 회사명 — Company display name
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    # 대표 이메일 — Contact email (전역 고유, globally unique)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    # 대표자 이름 — Owner display name
    owner_name: Mapped[str] = mapped_column(String(255), nullable=False)
    # 업종 — Industry (optional)
    industry: Mapped[str | None] = mapped_column(String(100), nullable=True)
    # 규모 — Headcount bucket (optional)
    size: Mapped[str | None] = mapped_column(String(50), nullable=True)
    # 시간대 — IANA timezone name
    timezone: Mapped[str] = mapped_column(String(64), default="Australia/Sydney")
    # 기본 통화 — Default ISO currency code
    currency: Mapped[str] = mapped_column(String(3), default="AUD")
    # 생성 일시 — Record creation timestamp (UTC)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    # 수정 일시 — Last modification timestamp (UTC, auto-updated)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    # 관계 — Relationships
    users = relationship("User", back_populates="company")
