"""공휴일 SQLAlchemy ORM 모델 정의.

Public holiday SQLAlchemy ORM model definition.
Holidays are reference data: created and deleted, never edited.

Tables:
    - public_holidays: 공휴일 날짜와 설명 (Holiday dates with descriptions)
"""

import uuid
from datetime import date, datetime, timezone
from sqlalchemy import String, DateTime, Date, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class PublicHoliday(Base):
    """공휴일 모델.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        holiday_date: 공휴일 날짜 (Holiday date, unique)
        description: 설명 (e.g. "Australia Day")
        created_at: 생성 일시 UTC (Creation timestamp)
    """

    __tablename__ = "public_holidays"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 공휴일 날짜 — Holiday date (전역 고유, globally unique)
    holiday_date: Mapped[date] = mapped_column(Date, unique=True, nullable=False)
    description: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
