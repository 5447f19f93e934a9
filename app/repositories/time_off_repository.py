"""휴가 신청 레포지토리.

Time-off Repository — Requests by user, by company and by overlapping range.
"""

from datetime import date
from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.time_off import TimeOffRequest
from app.repositories.base import BaseRepository


class TimeOffRepository(BaseRepository[TimeOffRequest]):
    """휴가 신청 레포지토리.

    Extends:
        BaseRepository[TimeOffRequest]
    """

    def __init__(self) -> None:
        super().__init__(TimeOffRequest)

    async def get_user_requests(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> Sequence[TimeOffRequest]:
        """사용자의 휴가 신청 목록, 시작일 역순."""
        query: Select = (
            select(TimeOffRequest)
            .where(TimeOffRequest.user_id == user_id)
            .order_by(TimeOffRequest.start_date.desc())
        )
        result = await db.execute(query)
        return result.scalars().all()

    async def get_company_requests(
        self,
        db: AsyncSession,
        company_id: UUID,
        start: date | None = None,
        end: date | None = None,
        status: str | None = None,
    ) -> Sequence[TimeOffRequest]:
        """회사 휴가 신청 중 기간과 겹치는 것 (Requests overlapping the range).

        A request overlaps when it starts on or before ``end`` and ends on or
        after ``start``.
        """
        query: Select = select(TimeOffRequest).where(TimeOffRequest.company_id == company_id)
        if start is not None:
            query = query.where(TimeOffRequest.end_date >= start)
        if end is not None:
            query = query.where(TimeOffRequest.start_date <= end)
        if status is not None:
            query = query.where(TimeOffRequest.status == status)
        result = await db.execute(query.order_by(TimeOffRequest.start_date))
        return result.scalars().all()

    async def get_user_overlapping(
        self,
        db: AsyncSession,
        user_id: UUID,
        start: date,
        end: date,
        statuses: Sequence[str] = ("pending", "approved"),
    ) -> Sequence[TimeOffRequest]:
        """사용자의 기간 겹침 휴가 (A user's requests overlapping a range)."""
        query: Select = select(TimeOffRequest).where(
            TimeOffRequest.user_id == user_id,
            TimeOffRequest.end_date >= start,
            TimeOffRequest.start_date <= end,
            TimeOffRequest.status.in_(statuses),
        )
        result = await db.execute(query)
        return result.scalars().all()


# 싱글턴 인스턴스 — Singleton instance
time_off_repository: TimeOffRepository = TimeOffRepository()
