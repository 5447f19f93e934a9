"""리프레시 토큰 모델 — 불투명 리프레시 자격 증명 저장.

Refresh Token model — Stores opaque refresh credentials as salted hashes.
The raw credential is never persisted; see ``app.utils.refresh_token``.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class RefreshToken(Base):
    """리프레시 토큰 테이블.

    Refresh credential table. A row is usable while ``revoked_at`` is null
    and ``expires_at`` is in the future.

    Attributes:
        id: 고유 식별자 (Primary key UUID)
        user_id: 소유 사용자 ID (Owner user UUID)
        selector: 공개 조회 키 (Public lookup key, unique)
        salt: 토큰별 솔트 (Per-token salt)
        verifier_hash: sha256(salt + verifier) (Salted verifier hash)
        remember_me: 로그인 유지 여부 (Long-lived policy, kept across rotation)
        expires_at: 만료 일시 (Expiration timestamp)
        revoked_at: 폐기 일시 (Revocation timestamp, null while usable)
        created_at: 생성 일시 (Creation timestamp)
    """

    __tablename__ = "refresh_tokens"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    selector: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    salt: Mapped[str] = mapped_column(String(64), nullable=False)
    verifier_hash: Mapped[str] = mapped_column(String(64), nullable=False)
    remember_me: Mapped[bool] = mapped_column(Boolean, default=False)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    revoked_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    __table_args__ = (
        Index("ix_refresh_tokens_user_id", "user_id"),
    )

    # Relationships
    user = relationship("User", back_populates="refresh_tokens")
