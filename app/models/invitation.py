"""직원 초대 SQLAlchemy ORM 모델 정의.

Employee invitation SQLAlchemy ORM model definition.

Tables:
    - employee_invitations: 이메일 초대 (Email invitations to join a company)
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import String, DateTime, ForeignKey, Index, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class EmployeeInvitation(Base):
    """직원 초대 모델.

    An invitation is pending until ``accepted_at`` is set; it cannot be
    accepted after ``expires_at``.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        company_id: 초대한 회사 FK (Inviting company)
        email: 초대 대상 이메일 (Invitee email)
        name: 초대 대상 이름 (Invitee display name, optional)
        role: 부여할 역할 (manager | supervisor | employee)
        token: 초대 토큰 (Unique URL-safe token)
        invited_by: 초대한 사용자 FK (Inviting user)
        expires_at: 만료 일시 (Expiry timestamp)
        accepted_at: 수락 일시 (Acceptance timestamp, null while pending)
    """

    __tablename__ = "employee_invitations"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 회사 FK — Inviting company (CASCADE)
    company_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default="employee")
    # 초대 토큰 — Unique token embedded in the accept link
    token: Mapped[str] = mapped_column(String(128), unique=True, nullable=False)
    invited_by: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    accepted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        Index("ix_employee_invitations_company_email", "company_id", "email"),
    )
