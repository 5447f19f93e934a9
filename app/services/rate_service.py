"""요율 서비스 — 요율 구간 및 직원 정액 요율 관리.

Rate Service — Company rate tier ladders and employee flat rates.

Tier group rules (per company and day type):
    - tier_order는 1부터 연속 (Orders run 1..N without gaps or repeats)
    - 시간 제한 없는 구간은 최대 하나이며 반드시 마지막 (At most one
      unbounded tier, and only as the last tier)
    - 구간 시간은 양수, 요율은 0 이상 (Positive hours, non-negative rates)
    - 그룹 내 모든 구간은 같은 적용 기간 (Every tier in a group shares one
      validity window, so a date sees the whole ladder or none of it)
"""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import utcnow
from app.models.company import Company
from app.models.rate import EmployeeRate, RateTier
from app.models.user import User
from app.repositories.company_repository import company_repository
from app.repositories.rate_repository import employee_rate_repository, rate_tier_repository
from app.repositories.user_repository import user_repository
from app.schemas.rate import (
    EmployeeRateResponse,
    EmployeeRateUpsert,
    MyRatesResponse,
    RateTierCreate,
    RateTierGroupReplace,
    RateTierResponse,
    RateTierUpdate,
)
from app.services.shift_service import check_date_range
from app.utils.exceptions import BadRequestError, DuplicateError, NotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _TierShape:
    tier_order: int
    hours_in_tier: Decimal | None
    rate_per_hour: int
    valid_from: date | None = None
    valid_to: date | None = None


def validate_tier_group(tiers: Iterable[_TierShape], day_type: str) -> None:
    """구간 그룹 불변식을 검사합니다.

    Raises:
        BadRequestError: 순서 불연속, 무제한 구간 위치 오류, 잘못된 값, 기간 불일치
    """
    ordered: list[_TierShape] = sorted(tiers, key=lambda t: t.tier_order)
    if not ordered:
        return

    windows: set[tuple[date | None, date | None]] = {(t.valid_from, t.valid_to) for t in ordered}
    if len(windows) > 1:
        raise BadRequestError(
            f"All tiers for {day_type} must share one validity window; "
            "replace the whole group to change it"
        )

    orders: list[int] = [t.tier_order for t in ordered]
    if orders != list(range(1, len(ordered) + 1)):
        raise BadRequestError(
            f"Tier orders for {day_type} must be contiguous from 1 (got {orders})"
        )

    for tier in ordered:
        if tier.rate_per_hour < 0:
            raise BadRequestError(f"Tier {tier.tier_order} rate cannot be negative")
        if tier.hours_in_tier is not None and tier.hours_in_tier <= 0:
            raise BadRequestError(f"Tier {tier.tier_order} hours must be positive")

    unbounded: list[int] = [t.tier_order for t in ordered if t.hours_in_tier is None]
    if len(unbounded) > 1:
        raise BadRequestError(f"Only one unbounded tier is allowed for {day_type}")
    if unbounded and unbounded[0] != ordered[-1].tier_order:
        raise BadRequestError(f"The unbounded tier for {day_type} must be the last tier")


def _shape(tier: RateTier) -> _TierShape:
    return _TierShape(tier.tier_order, tier.hours_in_tier, tier.rate_per_hour, tier.valid_from, tier.valid_to)


def _windows_overlap(
    a_from: date | None, a_to: date | None, b_from: date | None, b_to: date | None
) -> bool:
    # None은 열린 경계 — None is an open bound
    starts_before_b_ends: bool = a_from is None or b_to is None or a_from <= b_to
    b_starts_before_a_ends: bool = b_from is None or a_to is None or b_from <= a_to
    return starts_before_b_ends and b_starts_before_a_ends


class RateService:
    """요율 구간과 직원 요율 관리 서비스."""

    def tier_to_response(self, tier: RateTier) -> RateTierResponse:
        return RateTierResponse(
            id=str(tier.id),
            company_id=str(tier.company_id),
            day_type=tier.day_type,
            tier_order=tier.tier_order,
            hours_in_tier=tier.hours_in_tier,
            rate_per_hour=tier.rate_per_hour,
            shift_type=tier.shift_type,
            currency=tier.currency,
            valid_from=tier.valid_from,
            valid_to=tier.valid_to,
            created_at=tier.created_at,
        )

    def rate_to_response(self, rate: EmployeeRate) -> EmployeeRateResponse:
        return EmployeeRateResponse(
            id=str(rate.id),
            user_id=str(rate.user_id),
            company_id=str(rate.company_id),
            weekday_rate=rate.weekday_rate,
            weeknight_rate=rate.weeknight_rate,
            saturday_rate=rate.saturday_rate,
            sunday_rate=rate.sunday_rate,
            public_holiday_rate=rate.public_holiday_rate,
            currency=rate.currency,
            valid_from=rate.valid_from,
            valid_to=rate.valid_to,
            created_at=rate.created_at,
        )

    async def _company_currency(self, db: AsyncSession, company_id: UUID) -> str:
        company: Company | None = await company_repository.get_by_id(db, company_id)
        return company.currency if company is not None else settings.DEFAULT_CURRENCY

    # ── 요율 구간 (Rate tiers) ───────────────────────────────

    async def list_tiers(
        self,
        db: AsyncSession,
        company_id: UUID,
        day_type: str | None = None,
    ) -> list[RateTierResponse]:
        tiers: Sequence[RateTier]
        if day_type is not None:
            tiers = await rate_tier_repository.get_rate_tiers(db, company_id, day_type)
        else:
            tiers = await rate_tier_repository.get_company_tiers(db, company_id)
        return [self.tier_to_response(t) for t in tiers]

    async def create_tier(
        self,
        db: AsyncSession,
        company_id: UUID,
        data: RateTierCreate,
    ) -> RateTierResponse:
        """요율 구간 하나를 추가합니다.

        The group including the new tier must still satisfy the tier rules,
        so new tiers are appended as order N+1.
        """
        check_date_range(data.valid_from, data.valid_to)
        group: Sequence[RateTier] = await rate_tier_repository.get_rate_tiers(db, company_id, data.day_type)
        validate_tier_group(
            [
                *map(_shape, group),
                _TierShape(
                    data.tier_order, data.hours_in_tier, data.rate_per_hour, data.valid_from, data.valid_to
                ),
            ],
            data.day_type,
        )

        tier: RateTier = await rate_tier_repository.create(
            db,
            {
                **data.model_dump(exclude={"currency"}),
                "company_id": company_id,
                "currency": data.currency or await self._company_currency(db, company_id),
            },
        )
        return self.tier_to_response(tier)

    async def update_tier(
        self,
        db: AsyncSession,
        company_id: UUID,
        tier_id: UUID,
        data: RateTierUpdate,
    ) -> RateTierResponse:
        """요율 구간 수정 — 수정 후 그룹이 규칙을 만족해야 합니다.

        ``hours_in_tier`` may be set to null explicitly to make the tier
        unbounded.
        """
        tier: RateTier | None = await rate_tier_repository.get_by_id(db, tier_id, company_id)
        if tier is None:
            raise NotFoundError("Rate tier not found")

        update_data: dict = data.model_dump(exclude_unset=True)
        for key in ("tier_order", "rate_per_hour", "shift_type", "currency"):
            if key in update_data and update_data[key] is None:
                del update_data[key]
        valid_from: date | None = update_data.get("valid_from", tier.valid_from)
        valid_to: date | None = update_data.get("valid_to", tier.valid_to)
        check_date_range(valid_from, valid_to)

        candidate: _TierShape = _TierShape(
            update_data.get("tier_order", tier.tier_order),
            update_data["hours_in_tier"] if "hours_in_tier" in update_data else tier.hours_in_tier,
            update_data.get("rate_per_hour", tier.rate_per_hour),
            valid_from,
            valid_to,
        )
        group: Sequence[RateTier] = await rate_tier_repository.get_rate_tiers(db, company_id, tier.day_type)
        validate_tier_group(
            [_shape(t) for t in group if t.id != tier.id] + [candidate],
            tier.day_type,
        )

        updated: RateTier | None = await rate_tier_repository.update(db, tier.id, update_data, company_id)
        if updated is None:
            raise NotFoundError("Rate tier not found")
        return self.tier_to_response(updated)

    async def delete_tier(self, db: AsyncSession, company_id: UUID, tier_id: UUID) -> None:
        """요율 구간 삭제 — 남은 그룹이 규칙을 만족해야 하므로 마지막 구간만 삭제 가능."""
        tier: RateTier | None = await rate_tier_repository.get_by_id(db, tier_id, company_id)
        if tier is None:
            raise NotFoundError("Rate tier not found")
        group: Sequence[RateTier] = await rate_tier_repository.get_rate_tiers(db, company_id, tier.day_type)
        validate_tier_group([_shape(t) for t in group if t.id != tier.id], tier.day_type)
        await rate_tier_repository.delete(db, tier.id, company_id)

    async def replace_group(
        self,
        db: AsyncSession,
        company_id: UUID,
        day_type: str,
        data: RateTierGroupReplace,
    ) -> list[RateTierResponse]:
        """요일 유형의 구간 그룹 전체를 한 번에 교체합니다.

        The old group is deleted and the new tiers are inserted in the same
        transaction, numbered 1..N in list order. Validation runs before
        anything is written.
        """
        check_date_range(data.valid_from, data.valid_to)
        shapes: list[_TierShape] = [
            _TierShape(index, item.hours_in_tier, item.rate_per_hour, data.valid_from, data.valid_to)
            for index, item in enumerate(data.tiers, start=1)
        ]
        validate_tier_group(shapes, day_type)

        currency: str = data.currency or await self._company_currency(db, company_id)
        await rate_tier_repository.delete_group(db, company_id, day_type)

        created: list[RateTier] = []
        for index, item in enumerate(data.tiers, start=1):
            created.append(
                await rate_tier_repository.create(
                    db,
                    {
                        "company_id": company_id,
                        "day_type": day_type,
                        "tier_order": index,
                        "hours_in_tier": item.hours_in_tier,
                        "rate_per_hour": item.rate_per_hour,
                        "shift_type": item.shift_type,
                        "currency": currency,
                        "valid_from": data.valid_from,
                        "valid_to": data.valid_to,
                    },
                )
            )
        logger.info("Replaced %s tiers for company %s (%d tiers)", day_type, company_id, len(created))
        return [self.tier_to_response(t) for t in created]

    # ── 직원 요율 (Employee rates) ───────────────────────────

    async def list_employee_rates(
        self,
        db: AsyncSession,
        company_id: UUID,
        user_id: UUID | None = None,
    ) -> list[EmployeeRateResponse]:
        rates: Sequence[EmployeeRate]
        if user_id is not None:
            rates = [
                r for r in await employee_rate_repository.get_user_rates(db, user_id)
                if r.company_id == company_id
            ]
        else:
            rates = await employee_rate_repository.get_company_rates(db, company_id)
        return [self.rate_to_response(r) for r in rates]

    async def upsert_employee_rate(
        self,
        db: AsyncSession,
        company_id: UUID,
        user_id: UUID,
        data: EmployeeRateUpsert,
    ) -> EmployeeRateResponse:
        """직원 요율을 생성하거나 같은 시작일 레코드를 수정합니다.

        A record with the same ``valid_from`` is updated in place; any other
        record whose window overlaps the new one is a conflict.

        Raises:
            NotFoundError: 회사 직원이 아님 (Not a member of the company)
            DuplicateError: 기간이 겹치는 요율 존재 (Overlapping rate window)
        """
        check_date_range(data.valid_from, data.valid_to)
        if await user_repository.get_member(db, company_id, user_id) is None:
            raise NotFoundError("Employee not found")

        existing: Sequence[EmployeeRate] = [
            r for r in await employee_rate_repository.get_user_rates(db, user_id)
            if r.company_id == company_id
        ]
        same_start: EmployeeRate | None = next(
            (r for r in existing if r.valid_from == data.valid_from), None
        )
        for rate in existing:
            if rate is same_start:
                continue
            if _windows_overlap(rate.valid_from, rate.valid_to, data.valid_from, data.valid_to):
                raise DuplicateError("Employee already has a rate for an overlapping period")

        values: dict = data.model_dump(exclude={"currency"})
        values["currency"] = data.currency or await self._company_currency(db, company_id)

        record: EmployeeRate | None
        if same_start is not None:
            record = await employee_rate_repository.update(db, same_start.id, values, company_id)
        else:
            record = await employee_rate_repository.create(
                db, {**values, "user_id": user_id, "company_id": company_id}
            )
        if record is None:
            raise NotFoundError("Employee rate not found")
        return self.rate_to_response(record)

    async def delete_employee_rate(self, db: AsyncSession, company_id: UUID, rate_id: UUID) -> None:
        if not await employee_rate_repository.delete(db, rate_id, company_id):
            raise NotFoundError("Employee rate not found")

    async def get_my_rates(
        self,
        db: AsyncSession,
        user: User,
        on_date: date | None = None,
    ) -> MyRatesResponse:
        """직원 본인의 현재 적용 요율 (미설정이어도 오류 아님)."""
        rate: EmployeeRate | None = await employee_rate_repository.get_employee_rate(
            db, user.id, on_date or utcnow().date()
        )
        return MyRatesResponse(
            rates_configured=rate is not None,
            rates=self.rate_to_response(rate) if rate is not None else None,
            night_shift_start=settings.NIGHT_SHIFT_START,
        )


# 싱글턴 인스턴스 — Singleton instance
rate_service: RateService = RateService()
