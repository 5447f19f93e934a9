"""직원 초대 API 테스트 — 생성, 링크 조회, 수락(신규/기존 계정), 만료."""

from datetime import timedelta
from uuid import UUID

from httpx import AsyncClient
from sqlalchemy import select

from app.database import utcnow
from app.models.invitation import EmployeeInvitation
from tests.conftest import PASSWORD, auth_header

ADMIN_INVITATIONS = "/api/v1/admin/invitations"
INVITATIONS = "/api/v1/app/invitations"


async def _invite(client: AsyncClient, token: str, **fields) -> dict:
    body = {"email": "new.hire@test.com", "name": "New Hire", **fields}
    res = await client.post(ADMIN_INVITATIONS, json=body, headers=auth_header(token))
    assert res.status_code == 201, res.text
    return res.json()


async def _stored(db, invitation_id: str) -> EmployeeInvitation:
    result = await db.execute(select(EmployeeInvitation).where(EmployeeInvitation.id == UUID(invitation_id)))
    return result.scalar_one()


class TestCreate:
    async def test_create_sends_email(self, client: AsyncClient, owner_token, company):
        """SMTP 미설정(개발 모드)에서도 email_sent=True."""
        data = await _invite(client, owner_token, email="New.Hire@Test.com")
        assert data["email"] == "new.hire@test.com"
        assert data["role"] == "employee"
        assert data["email_sent"] is True
        assert data["company_id"] == str(company.id)

    async def test_duplicate_pending(self, client: AsyncClient, owner_token):
        await _invite(client, owner_token)
        res = await client.post(ADMIN_INVITATIONS, json={"email": "new.hire@test.com"},
                                headers=auth_header(owner_token))
        assert res.status_code == 409

    async def test_expired_invitation_can_be_reissued(self, client: AsyncClient, db, owner_token):
        invitation = await _stored(db, (await _invite(client, owner_token))["id"])
        invitation.expires_at = utcnow() - timedelta(days=1)
        await db.flush()
        await _invite(client, owner_token)

    async def test_existing_member(self, client: AsyncClient, owner_token, employee):
        res = await client.post(ADMIN_INVITATIONS, json={"email": employee.email},
                                headers=auth_header(owner_token))
        assert res.status_code == 409

    async def test_list_and_delete(self, client: AsyncClient, owner_token):
        invitation = await _invite(client, owner_token)
        res = await client.get(ADMIN_INVITATIONS, headers=auth_header(owner_token))
        assert [i["id"] for i in res.json()] == [invitation["id"]]
        assert res.json()[0]["email_sent"] is None

        res = await client.delete(f"{ADMIN_INVITATIONS}/{invitation['id']}", headers=auth_header(owner_token))
        assert res.status_code == 204
        res = await client.get(ADMIN_INVITATIONS, headers=auth_header(owner_token))
        assert res.json() == []

    async def test_employee_cannot_invite(self, client: AsyncClient, employee_token):
        res = await client.post(ADMIN_INVITATIONS, json={"email": "x@test.com"}, headers=auth_header(employee_token))
        assert res.status_code == 403


class TestAccept:
    async def test_view_without_login(self, client: AsyncClient, db, owner_token):
        invitation = await _stored(db, (await _invite(client, owner_token, role="supervisor"))["id"])
        res = await client.get(f"{INVITATIONS}/{invitation.token}")
        assert res.status_code == 200
        assert res.json()["company_name"] == "Test Cleaning"
        assert res.json()["role"] == "supervisor"
        assert res.json()["is_expired"] is False
        assert res.json()["is_accepted"] is False

    async def test_unknown_token(self, client: AsyncClient):
        res = await client.get(f"{INVITATIONS}/not-a-token")
        assert res.status_code == 404

    async def test_accept_creates_account(self, client: AsyncClient, db, owner_token, company):
        invitation = await _stored(db, (await _invite(client, owner_token))["id"])
        res = await client.post(f"{INVITATIONS}/{invitation.token}/accept", json={"password": "newpass123"})
        assert res.status_code == 200, res.text

        me = await client.get("/api/v1/app/auth/me", headers=auth_header(res.json()["access_token"]))
        assert me.json()["email"] == "new.hire@test.com"
        assert me.json()["name"] == "New Hire"
        assert me.json()["user_type"] == "employee"
        assert me.json()["company_id"] == str(company.id)

        login = await client.post("/api/v1/app/auth/login", json={
            "email": "new.hire@test.com", "password": "newpass123",
        })
        assert login.status_code == 200

    async def test_accept_twice(self, client: AsyncClient, db, owner_token):
        invitation = await _stored(db, (await _invite(client, owner_token))["id"])
        await client.post(f"{INVITATIONS}/{invitation.token}/accept", json={"password": "newpass123"})
        res = await client.post(f"{INVITATIONS}/{invitation.token}/accept", json={"password": "newpass123"})
        assert res.status_code == 400

    async def test_accept_expired(self, client: AsyncClient, db, owner_token):
        invitation = await _stored(db, (await _invite(client, owner_token))["id"])
        invitation.expires_at = utcnow() - timedelta(minutes=1)
        await db.flush()

        view = await client.get(f"{INVITATIONS}/{invitation.token}")
        assert view.json()["is_expired"] is True
        res = await client.post(f"{INVITATIONS}/{invitation.token}/accept", json={"password": "newpass123"})
        assert res.status_code == 400

    async def test_existing_individual_joins(self, client: AsyncClient, db, owner_token, individual, company):
        """기존 개인 계정은 비밀번호 확인 후 회사에 연결."""
        invitation = await _stored(db, (await _invite(client, owner_token, email=individual.email))["id"])

        wrong = await client.post(f"{INVITATIONS}/{invitation.token}/accept", json={"password": "wrongpass1"})
        assert wrong.status_code == 401

        res = await client.post(f"{INVITATIONS}/{invitation.token}/accept", json={"password": PASSWORD})
        assert res.status_code == 200, res.text
        me = await client.get("/api/v1/app/auth/me", headers=auth_header(res.json()["access_token"]))
        assert me.json()["id"] == str(individual.id)
        assert me.json()["user_type"] == "employee"
        assert me.json()["company_id"] == str(company.id)

    async def test_member_of_other_company(self, client: AsyncClient, db, owner_token, employee):
        """다른 회사 소속 계정은 수락 불가."""
        other = await client.post("/api/v1/admin/companies/register", json={
            "name": "Other Co",
            "owner_name": "Other Owner",
            "email": "other@test.com",
            "password": "otherpass1",
        })
        assert other.status_code == 201, other.text
        other_token = other.json()["tokens"]["access_token"]

        invitation = await _stored(db, (await _invite(client, other_token, email=employee.email))["id"])
        res = await client.post(f"{INVITATIONS}/{invitation.token}/accept", json={"password": PASSWORD})
        assert res.status_code == 400
