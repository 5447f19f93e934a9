"""테스트 인프라 — 인메모리 SQLite DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure. Each test gets a fresh in-memory SQLite database
(``sqlite+aiosqlite``) shared across connections through ``StaticPool``;
the FastAPI ``get_db`` dependency is overridden to yield the test session.
"""

from collections.abc import AsyncGenerator
from datetime import date, timedelta

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.main import app
from app.models import *  # noqa: F401,F403 — register all models with metadata
from app.models.company import Company
from app.models.user import User
from app.utils.jwt import create_access_token
from app.utils.password import hash_password

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

PASSWORD = "password123"


# ---------------------------------------------------------------------------
# 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트마다 새 인메모리 DB를 만들고 스키마를 생성합니다."""
    eng = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
async def _add_user(db: AsyncSession, **fields) -> User:
    user = User(password_hash=hash_password(PASSWORD), **fields)
    db.add(user)
    await db.flush()
    await db.refresh(user)
    return user


@pytest_asyncio.fixture
async def company(db: AsyncSession) -> Company:
    c = Company(name="Test Cleaning", email="owner@test.com", owner_name="Test Owner", currency="AUD")
    db.add(c)
    await db.flush()
    await db.refresh(c)
    return c


@pytest_asyncio.fixture
async def owner(db: AsyncSession, company) -> User:
    """회사 대표 (business owner)."""
    return await _add_user(
        db,
        email="owner@test.com",
        name="Test Owner",
        user_type="business_owner",
        company_id=company.id,
        role="manager",
    )


@pytest_asyncio.fixture
async def manager(db: AsyncSession, company) -> User:
    return await _add_user(
        db,
        email="manager@test.com",
        name="Test Manager",
        user_type="employee",
        company_id=company.id,
        role="manager",
    )


@pytest_asyncio.fixture
async def employee(db: AsyncSession, company) -> User:
    return await _add_user(
        db,
        email="employee@test.com",
        name="Test Employee",
        user_type="employee",
        company_id=company.id,
        role="employee",
    )


@pytest_asyncio.fixture
async def individual(db: AsyncSession) -> User:
    """회사에 속하지 않은 개인 사용자."""
    return await _add_user(db, email="solo@test.com", name="Solo Worker", user_type="individual")


def make_token(user: User) -> str:
    """테스트용 JWT 액세스 토큰을 생성합니다."""
    payload = {"sub": str(user.id), "user_type": user.user_type}
    if user.company_id is not None:
        payload["company_id"] = str(user.company_id)
    return create_access_token(payload)


@pytest.fixture
def owner_token(owner) -> str:
    return make_token(owner)


@pytest.fixture
def manager_token(manager) -> str:
    return make_token(manager)


@pytest.fixture
def employee_token(employee) -> str:
    return make_token(employee)


@pytest.fixture
def individual_token(individual) -> str:
    return make_token(individual)


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def next_weekday(weekday: int, after: date | None = None) -> date:
    """다음 특정 요일 날짜 (0=월요일). 오늘 이후의 날짜를 반환합니다."""
    start = (after or date.today()) + timedelta(days=1)
    return start + timedelta(days=(weekday - start.weekday()) % 7)
