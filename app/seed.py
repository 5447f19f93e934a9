"""초기 데이터 시드 스크립트 — 데모 회사, 대표 계정, 요율 구간, 공휴일 생성.

Seed script — Bootstraps a demo company with its business owner, billing
rate tiers and a handful of public holidays.

Usage:
    python -m app.seed

Creates:
    - 1개 회사: "Harbour Cleaning Co" (1 company)
    - 1개 대표 계정: owner@harbour.example / owner1234 (business owner)
    - 요율 구간: weekday 8h @ $25.00 후 $37.50, saturday $32.00, holiday $50.00
    - 공휴일 4건 (4 public holidays)
"""

import asyncio
from datetime import date
from decimal import Decimal

from sqlalchemy import select

from app.database import async_session, engine, Base
from app.models import Company, PublicHoliday, RateTier, User
from app.utils.password import hash_password

# (day_type, tier_order, hours_in_tier, rate_per_hour cents)
_TIERS: list[tuple[str, int, Decimal | None, int]] = [
    ("weekday", 1, Decimal("8"), 2500),
    ("weekday", 2, None, 3750),
    ("saturday", 1, None, 3200),
    ("holiday", 1, None, 5000),
]

_HOLIDAYS: list[tuple[date, str]] = [
    (date(2026, 12, 25), "Christmas Day"),
    (date(2026, 12, 26), "Boxing Day"),
    (date(2027, 1, 1), "New Year's Day"),
    (date(2027, 1, 26), "Australia Day"),
]


async def seed() -> None:
    """데이터베이스를 데모 데이터로 시드합니다.

    Idempotent: 회사가 하나라도 있으면 건너뜁니다 (Skips if any company exists).
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as db:
        result = await db.execute(select(Company).limit(1))
        if result.scalar_one_or_none():
            print("Already seeded. Skipping.")
            return

        company: Company = Company(
            name="Harbour Cleaning Co",
            email="owner@harbour.example",
            owner_name="Demo Owner",
            currency="AUD",
        )
        db.add(company)
        await db.flush()  # flush로 company.id 생성

        owner: User = User(
            email="owner@harbour.example",
            name="Demo Owner",
            password_hash=hash_password("owner1234"),
            user_type="business_owner",
            company_id=company.id,
            role="manager",
        )
        db.add(owner)

        for day_type, order, hours, rate in _TIERS:
            db.add(
                RateTier(
                    company_id=company.id,
                    day_type=day_type,
                    tier_order=order,
                    hours_in_tier=hours,
                    rate_per_hour=rate,
                    shift_type="holiday" if day_type == "holiday" else "day",
                    currency="AUD",
                )
            )

        existing: set[date] = set((await db.execute(select(PublicHoliday.holiday_date))).scalars().all())
        for holiday_date, description in _HOLIDAYS:
            if holiday_date not in existing:
                db.add(PublicHoliday(holiday_date=holiday_date, description=description))

        await db.commit()
        print(f"Seeded: company={company.id}, owner=owner@harbour.example/owner1234")


if __name__ == "__main__":
    asyncio.run(seed())
