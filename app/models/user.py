"""사용자 SQLAlchemy ORM 모델 정의.

User SQLAlchemy ORM model definition.
A user is either an individual tracking their own shifts, the owner of a
business account, or an employee of a company with a company role.

Tables:
    - users: 사용자 계정 (User accounts)
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import String, Boolean, DateTime, Integer, ForeignKey, Index, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base

# 사용자 유형 — Account kinds
USER_TYPES: tuple[str, ...] = ("individual", "business_owner", "employee")
# 회사 내 역할 — Roles within a company
COMPANY_ROLES: tuple[str, ...] = ("manager", "supervisor", "employee")


class User(Base):
    """사용자 모델 — 시스템 사용자 계정 정보.

    User model — System user account information.
    Email is globally unique and is the login identifier.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        email: 로그인 이메일 (Login email, unique)
        name: 표시 이름 (Display name)
        password_hash: bcrypt 해시 (bcrypt hash; null for not-yet-accepted invitees)
        user_type: 사용자 유형 (individual | business_owner | employee)
        company_id: 소속 회사 FK (Company, null for individuals)
        role: 회사 내 역할 (manager | supervisor | employee, null for individuals)
        hourly_rate: 기본 시급, 최소 통화 단위 (Default hourly rate in cents)
        is_active: 활성 상태 (Active status, deactivated users cannot log in)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)
    """

    __tablename__ = "users"

    # 사용자 고유 식별자 — User unique identifier (UUID v4, auto-generated)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 로그인 이메일 — Login email (전역 고유, globally unique)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    # 표시 이름 — Display name
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    # 비밀번호 해시 — bcrypt hashed password (평문 저장 금지, never store plaintext)
    password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)
    # 사용자 유형 — individual | business_owner | employee
    user_type: Mapped[str] = mapped_column(String(20), nullable=False, default="individual")
    # 소속 회사 FK — Company (회사 삭제 시 NULL, set null on company delete)
    company_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("companies.id", ondelete="SET NULL"), nullable=True)
    # 회사 내 역할 — manager | supervisor | employee
    role: Mapped[str | None] = mapped_column(String(20), nullable=True)
    # 기본 시급 — Default hourly rate in minor units (optional)
    hourly_rate: Mapped[int | None] = mapped_column(Integer, nullable=True)
    # 활성 상태 — Whether the user account is active
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    # 생성 일시 — Record creation timestamp (UTC)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    # 수정 일시 — Last modification timestamp (UTC, auto-updated)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        Index("ix_users_company_id", "company_id"),
    )

    # 관계 — Relationships
    company = relationship("Company", back_populates="users")
    refresh_tokens = relationship("RefreshToken", back_populates="user", cascade="all, delete-orphan")

    @property
    def is_privileged(self) -> bool:
        """회사 관리 권한 여부 (Owner of the business or a manager)."""
        return self.company_id is not None and (
            self.user_type == "business_owner" or self.role == "manager"
        )
