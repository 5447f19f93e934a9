"""알림 API 테스트 — 목록, 생성, 읽음 처리, 누락 기록 점검."""

from datetime import time, timedelta

from httpx import AsyncClient

from app.database import utcnow
from app.models.shift import Shift
from tests.conftest import auth_header

NOTIFICATIONS = "/api/v1/app/notifications"


async def _create(client: AsyncClient, token: str, message: str = "Remember to log Friday") -> dict:
    res = await client.post(NOTIFICATIONS, json={"type": "missing_entries", "message": message},
                            headers=auth_header(token))
    assert res.status_code == 201, res.text
    return res.json()


class TestNotifications:
    async def test_create_and_list(self, client: AsyncClient, individual_token):
        created = await _create(client, individual_token)
        assert created["is_read"] is False

        res = await client.get(NOTIFICATIONS, headers=auth_header(individual_token))
        data = res.json()
        assert data["total"] == 1
        assert data["unread_count"] == 1
        assert data["items"][0]["id"] == created["id"]

    async def test_unknown_type(self, client: AsyncClient, individual_token):
        res = await client.post(NOTIFICATIONS, json={"type": "party", "message": "hi"},
                                headers=auth_header(individual_token))
        assert res.status_code == 422

    async def test_pagination(self, client: AsyncClient, individual_token):
        for i in range(3):
            await _create(client, individual_token, f"note {i}")
        res = await client.get(NOTIFICATIONS, params={"page": 2, "per_page": 2},
                               headers=auth_header(individual_token))
        assert res.json()["total"] == 3
        assert len(res.json()["items"]) == 1

    async def test_mark_read(self, client: AsyncClient, individual_token):
        created = await _create(client, individual_token)
        res = await client.patch(f"{NOTIFICATIONS}/{created['id']}/read", headers=auth_header(individual_token))
        assert res.status_code == 200
        res = await client.get(f"{NOTIFICATIONS}/unread-count", headers=auth_header(individual_token))
        assert res.json() == {"unread_count": 0}

    async def test_cannot_read_others(self, client: AsyncClient, individual_token, employee_token):
        created = await _create(client, individual_token)
        res = await client.patch(f"{NOTIFICATIONS}/{created['id']}/read", headers=auth_header(employee_token))
        assert res.status_code == 404

    async def test_mark_all_read(self, client: AsyncClient, individual_token, employee_token):
        await _create(client, individual_token, "one")
        await _create(client, individual_token, "two")
        await _create(client, employee_token, "other user")

        res = await client.patch(f"{NOTIFICATIONS}/read-all", headers=auth_header(individual_token))
        assert res.json()["message"] == "2 notifications marked as read"
        res = await client.get(f"{NOTIFICATIONS}/unread-count", headers=auth_header(employee_token))
        assert res.json()["unread_count"] == 1


class TestScan:
    async def test_scan_creates_one_reminder(self, client: AsyncClient, individual_token):
        res = await client.post(f"{NOTIFICATIONS}/scan", headers=auth_header(individual_token))
        assert res.status_code == 201
        assert res.json()["type"] == "missing_entries"
        assert res.json()["message"].startswith("You have 7 days without a logged shift:")

        again = await client.post(f"{NOTIFICATIONS}/scan", headers=auth_header(individual_token))
        assert again.status_code == 200
        assert again.json() is None

    async def test_scan_after_reading(self, client: AsyncClient, individual_token):
        await client.post(f"{NOTIFICATIONS}/scan", headers=auth_header(individual_token))
        await client.patch(f"{NOTIFICATIONS}/read-all", headers=auth_header(individual_token))
        res = await client.post(f"{NOTIFICATIONS}/scan", headers=auth_header(individual_token))
        assert res.status_code == 201

    async def test_scan_single_day(self, client: AsyncClient, db, individual, individual_token):
        today = utcnow().date()
        for offset in range(2, 8):
            db.add(Shift(user_id=individual.id, work_date=today - timedelta(days=offset),
                         start_time=time(9, 0), end_time=time(12, 0)))
        await db.flush()

        res = await client.post(f"{NOTIFICATIONS}/scan", headers=auth_header(individual_token))
        yesterday = today - timedelta(days=1)
        assert res.json()["message"] == f"You have 1 day without a logged shift: {yesterday:%a %d %b}."

    async def test_scan_nothing_missing(self, client: AsyncClient, db, individual, individual_token):
        today = utcnow().date()
        for offset in range(1, 8):
            db.add(Shift(user_id=individual.id, work_date=today - timedelta(days=offset),
                         start_time=time(9, 0), end_time=time(12, 0)))
        await db.flush()

        res = await client.post(f"{NOTIFICATIONS}/scan", headers=auth_header(individual_token))
        assert res.status_code == 200
        assert res.json() is None
