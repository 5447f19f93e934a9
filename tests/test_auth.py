"""인증 API 테스트 — 회원가입, 로그인, 토큰 회전, 재사용 감지, 로그아웃, /me."""

from datetime import timedelta

from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.database import as_utc, utcnow
from app.maintenance import purge_refresh_tokens
from app.models.token import RefreshToken
from app.services.auth_service import auth_service
from app.utils.jwt import create_access_token
from tests.conftest import PASSWORD, auth_header

AUTH = "/api/v1/app/auth"


async def _login(client: AsyncClient, email: str, remember_me: bool = False) -> dict:
    res = await client.post(f"{AUTH}/login", json={"email": email, "password": PASSWORD, "remember_me": remember_me})
    assert res.status_code == 200, res.text
    return res.json()


class TestSignup:
    async def test_signup_creates_individual(self, client: AsyncClient):
        """개인 회원가입 성공 — 바로 토큰 발급."""
        res = await client.post(f"{AUTH}/signup", json={
            "email": "New.User@Test.com",
            "password": "longenough1",
            "name": "New User",
        })
        assert res.status_code == 201
        tokens = res.json()
        assert tokens["token_type"] == "bearer"
        assert tokens["expires_in"] == 15 * 60

        me = await client.get(f"{AUTH}/me", headers=auth_header(tokens["access_token"]))
        assert me.status_code == 200
        assert me.json()["email"] == "new.user@test.com"
        assert me.json()["user_type"] == "individual"
        assert me.json()["company_id"] is None

    async def test_signup_duplicate_email(self, client: AsyncClient, individual):
        res = await client.post(f"{AUTH}/signup", json={
            "email": "solo@test.com",
            "password": "longenough1",
            "name": "Again",
        })
        assert res.status_code == 409

    async def test_signup_short_password(self, client: AsyncClient):
        res = await client.post(f"{AUTH}/signup", json={"email": "a@b.com", "password": "short", "name": "A"})
        assert res.status_code == 422


class TestLogin:
    async def test_login_success(self, client: AsyncClient, individual):
        tokens = await _login(client, "solo@test.com")
        assert tokens["access_token"]
        assert tokens["refresh_token"].count(".") == 1

    async def test_login_is_case_insensitive(self, client: AsyncClient, individual):
        await _login(client, "SOLO@test.com")

    async def test_wrong_password(self, client: AsyncClient, individual):
        res = await client.post(f"{AUTH}/login", json={"email": "solo@test.com", "password": "nope-nope"})
        assert res.status_code == 401

    async def test_unknown_email(self, client: AsyncClient):
        res = await client.post(f"{AUTH}/login", json={"email": "ghost@test.com", "password": PASSWORD})
        assert res.status_code == 401

    async def test_inactive_user(self, client: AsyncClient, db, employee):
        """비활성 계정 로그인 실패."""
        employee.is_active = False
        await db.flush()
        res = await client.post(f"{AUTH}/login", json={"email": "employee@test.com", "password": PASSWORD})
        assert res.status_code == 401

    async def test_remember_me_lifetime(self, client: AsyncClient, db, individual):
        """로그인 유지 = 30일, 기본 = 24시간."""
        await _login(client, "solo@test.com", remember_me=True)
        await _login(client, "solo@test.com", remember_me=False)
        rows = (await db.execute(
            select(RefreshToken).where(RefreshToken.user_id == individual.id)
        )).scalars().all()
        lifetimes = sorted(as_utc(r.expires_at) - utcnow() for r in rows)
        assert timedelta(hours=23) < lifetimes[0] <= timedelta(hours=24)
        assert timedelta(days=29) < lifetimes[1] <= timedelta(days=30)


class TestRefresh:
    async def test_rotation(self, client: AsyncClient, individual):
        """갱신 시 새 쌍 발급, 이전 자격 증명 폐기."""
        first = await _login(client, "solo@test.com")
        res = await client.post(f"{AUTH}/refresh", json={"refresh_token": first["refresh_token"]})
        assert res.status_code == 200
        second = res.json()
        assert second["refresh_token"] != first["refresh_token"]

        me = await client.get(f"{AUTH}/me", headers=auth_header(second["access_token"]))
        assert me.status_code == 200

    async def test_rotation_keeps_remember_me(self, client: AsyncClient, db, individual):
        first = await _login(client, "solo@test.com", remember_me=True)
        res = await client.post(f"{AUTH}/refresh", json={"refresh_token": first["refresh_token"]})
        selector = res.json()["refresh_token"].split(".")[0]
        stored = (await db.execute(
            select(RefreshToken).where(RefreshToken.selector == selector)
        )).scalar_one()
        assert stored.remember_me is True

    async def test_reuse_revokes_every_token(self, client: AsyncClient, individual):
        """폐기된 자격 증명 재사용 → 401 + 사용자 토큰 전부 폐기."""
        first = await _login(client, "solo@test.com")
        rotated = (await client.post(f"{AUTH}/refresh", json={"refresh_token": first["refresh_token"]})).json()

        replay = await client.post(f"{AUTH}/refresh", json={"refresh_token": first["refresh_token"]})
        assert replay.status_code == 401

        after = await client.post(f"{AUTH}/refresh", json={"refresh_token": rotated["refresh_token"]})
        assert after.status_code == 401

    async def test_tampered_verifier(self, client: AsyncClient, individual):
        tokens = await _login(client, "solo@test.com")
        selector = tokens["refresh_token"].split(".")[0]
        res = await client.post(f"{AUTH}/refresh", json={"refresh_token": f"{selector}.forged"})
        assert res.status_code == 401

    async def test_malformed_token(self, client: AsyncClient):
        res = await client.post(f"{AUTH}/refresh", json={"refresh_token": "garbage"})
        assert res.status_code == 401

    async def test_expired_refresh(self, client: AsyncClient, db, individual):
        tokens = await _login(client, "solo@test.com")
        selector = tokens["refresh_token"].split(".")[0]
        stored = (await db.execute(
            select(RefreshToken).where(RefreshToken.selector == selector)
        )).scalar_one()
        stored.expires_at = utcnow() - timedelta(minutes=1)
        await db.flush()
        res = await client.post(f"{AUTH}/refresh", json={"refresh_token": tokens["refresh_token"]})
        assert res.status_code == 401


class TestLogout:
    async def test_logout_revokes(self, client: AsyncClient, individual):
        tokens = await _login(client, "solo@test.com")
        res = await client.post(f"{AUTH}/logout", json={"refresh_token": tokens["refresh_token"]})
        assert res.status_code == 204
        res = await client.post(f"{AUTH}/refresh", json={"refresh_token": tokens["refresh_token"]})
        assert res.status_code == 401

    async def test_logout_is_idempotent(self, client: AsyncClient):
        res = await client.post(f"{AUTH}/logout", json={"refresh_token": "unknown.token"})
        assert res.status_code == 204

    async def test_purge_removes_revoked(self, client: AsyncClient, db, individual):
        """폐기된 토큰만 정리되고 유효한 토큰은 계속 사용 가능."""
        revoked = await _login(client, "solo@test.com")
        live = await _login(client, "solo@test.com")
        await client.post(f"{AUTH}/logout", json={"refresh_token": revoked["refresh_token"]})

        assert await auth_service.purge_expired_tokens(db) == 1
        remaining = (await db.execute(select(RefreshToken))).scalars().all()
        assert len(remaining) == 1

        res = await client.post(f"{AUTH}/refresh", json={"refresh_token": live["refresh_token"]})
        assert res.status_code == 200


    async def test_maintenance_purge(self, client: AsyncClient, engine, individual):
        """유지보수 스크립트가 만료/폐기 토큰을 삭제."""
        stale = await _login(client, "solo@test.com")
        live = await _login(client, "solo@test.com")
        await client.post(f"{AUTH}/logout", json={"refresh_token": stale["refresh_token"]})

        factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
        assert await purge_refresh_tokens(factory) == 1
        assert await purge_refresh_tokens(factory) == 0

        res = await client.post(f"{AUTH}/refresh", json={"refresh_token": live["refresh_token"]})
        assert res.status_code == 200


class TestAccessToken:
    async def test_missing_token(self, client: AsyncClient):
        res = await client.get(f"{AUTH}/me")
        assert res.status_code == 401

    async def test_expired_access_token(self, client: AsyncClient, individual):
        token = create_access_token({"sub": str(individual.id)}, expires_delta=timedelta(seconds=-5))
        res = await client.get(f"{AUTH}/me", headers=auth_header(token))
        assert res.status_code == 401

    async def test_refresh_credential_is_not_a_bearer(self, client: AsyncClient, individual):
        tokens = await _login(client, "solo@test.com")
        res = await client.get(f"{AUTH}/me", headers=auth_header(tokens["refresh_token"]))
        assert res.status_code == 401

    async def test_me_for_company_owner(self, client: AsyncClient, owner_token, company):
        res = await client.get(f"{AUTH}/me", headers=auth_header(owner_token))
        assert res.status_code == 200
        data = res.json()
        assert data["company_name"] == "Test Cleaning"
        assert data["is_privileged"] is True
