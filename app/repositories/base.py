"""기본 CRUD 레포지토리 — 모든 레포지토리의 부모 클래스.

Base CRUD Repository — Parent class for all domain repositories.
Provides generic Create, Read, Update, Delete operations with optional
company scoping for tenant-owned tables.

Usage:
    class HolidayRepository(BaseRepository[PublicHoliday]):
        def __init__(self) -> None:
            super().__init__(PublicHoliday)
"""

from typing import Any, Generic, Sequence, TypeVar
from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import Base

# 제네릭 타입 변수 — SQLAlchemy 모델을 나타냄
# Generic type variable representing a SQLAlchemy model
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """제네릭 CRUD 레포지토리.

    Generic CRUD repository. Queries are scoped by ``company_id`` when the
    caller passes one and the model has that column.

    Attributes:
        model: SQLAlchemy 모델 클래스 (The SQLAlchemy model class)
    """

    def __init__(self, model: type[ModelType]) -> None:
        self.model: type[ModelType] = model

    def _scoped(self, query: Select, company_id: UUID | None) -> Select:
        if company_id is not None and hasattr(self.model, "company_id"):
            query = query.where(self.model.company_id == company_id)
        return query

    async def get_by_id(
        self,
        db: AsyncSession,
        record_id: UUID,
        company_id: UUID | None = None,
    ) -> ModelType | None:
        """ID로 단일 레코드를 조회합니다.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            record_id: 조회할 레코드의 UUID (UUID of the record)
            company_id: 회사 범위 필터, None이면 미적용 (Company scope; None skips it)

        Returns:
            ModelType | None: 조회된 레코드 또는 None (Found record or None)
        """
        query: Select = self._scoped(select(self.model).where(self.model.id == record_id), company_id)
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def get_paginated(
        self,
        db: AsyncSession,
        query: Select,
        page: int = 1,
        per_page: int = 20,
    ) -> tuple[Sequence[ModelType], int]:
        """페이지네이션이 적용된 레코드 목록을 조회합니다.

        Returns:
            tuple[Sequence[ModelType], int]: (레코드 목록, 전체 개수)
        """
        count_query: Select = select(func.count()).select_from(query.subquery())
        total: int = (await db.execute(count_query)).scalar() or 0

        offset: int = (page - 1) * per_page
        result = await db.execute(query.offset(offset).limit(per_page))
        return result.scalars().all(), total

    async def create(
        self,
        db: AsyncSession,
        obj_data: dict[str, Any],
    ) -> ModelType:
        """새 레코드를 생성합니다 (flush 후 refresh)."""
        db_obj: ModelType = self.model(**obj_data)
        db.add(db_obj)
        await db.flush()
        await db.refresh(db_obj)
        return db_obj

    async def update(
        self,
        db: AsyncSession,
        record_id: UUID,
        update_data: dict[str, Any],
        company_id: UUID | None = None,
    ) -> ModelType | None:
        """기존 레코드를 업데이트합니다.

        Only keys present in ``update_data`` are written, so explicit None
        values clear a column.

        Returns:
            ModelType | None: 업데이트된 레코드 또는 None (Updated record or None)
        """
        db_obj: ModelType | None = await self.get_by_id(db, record_id, company_id)
        if db_obj is None:
            return None

        for field, value in update_data.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)

        await db.flush()
        await db.refresh(db_obj)
        return db_obj

    async def delete(
        self,
        db: AsyncSession,
        record_id: UUID,
        company_id: UUID | None = None,
    ) -> bool:
        """레코드를 삭제합니다. 존재하지 않으면 False."""
        db_obj: ModelType | None = await self.get_by_id(db, record_id, company_id)
        if db_obj is None:
            return False

        await db.delete(db_obj)
        await db.flush()
        return True

    async def exists(
        self,
        db: AsyncSession,
        filters: dict[str, Any],
    ) -> bool:
        """주어진 조건에 일치하는 레코드가 존재하는지 확인합니다."""
        query: Select = select(func.count()).select_from(self.model)
        for column_name, value in filters.items():
            if hasattr(self.model, column_name):
                query = query.where(getattr(self.model, column_name) == value)

        count: int = (await db.execute(query)).scalar() or 0
        return count > 0
