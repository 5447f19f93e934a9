"""휴가 신청 API 테스트 — 신청과 근무 충돌, 기간 중복, 취소, 관리자 검토."""

from datetime import date, time

from httpx import AsyncClient

from app.models.shift import Shift
from tests.conftest import auth_header

TIME_OFF = "/api/v1/app/time-off"
ADMIN_TIME_OFF = "/api/v1/admin/time-off"


async def _request(client: AsyncClient, token: str, **fields):
    body = {"start_date": "2026-11-02", "end_date": "2026-11-04", "reason": "Family visit", **fields}
    return await client.post(TIME_OFF, json=body, headers=auth_header(token))


class TestRequest:
    async def test_create_reports_conflicts(self, client: AsyncClient, db, employee, employee_token):
        db.add(Shift(user_id=employee.id, company_id=employee.company_id, work_date=date(2026, 11, 3),
                     start_time=time(9, 0), end_time=time(17, 0), status="scheduled"))
        db.add(Shift(user_id=employee.id, company_id=employee.company_id, work_date=date(2026, 11, 4),
                     start_time=time(9, 0), end_time=time(17, 0), status="rejected"))
        await db.flush()

        res = await _request(client, employee_token)
        assert res.status_code == 201, res.text
        data = res.json()
        assert data["request"]["status"] == "pending"
        assert data["request"]["user_name"] == "Test Employee"
        assert [c["work_date"] for c in data["conflicting_shifts"]] == ["2026-11-03"]

    async def test_partial_day(self, client: AsyncClient, employee_token):
        res = await _request(client, employee_token, end_date="2026-11-02", is_full_day=False,
                             start_time="13:00", end_time="17:00")
        assert res.status_code == 201, res.text
        assert res.json()["request"]["start_time"] == "13:00"

    async def test_partial_day_needs_times(self, client: AsyncClient, employee_token):
        res = await _request(client, employee_token, is_full_day=False)
        assert res.status_code == 422

    async def test_partial_day_inverted_times(self, client: AsyncClient, employee_token):
        res = await _request(client, employee_token, end_date="2026-11-02", is_full_day=False,
                             start_time="17:00", end_time="13:00")
        assert res.status_code == 400

    async def test_inverted_dates(self, client: AsyncClient, employee_token):
        res = await _request(client, employee_token, start_date="2026-11-05")
        assert res.status_code == 400

    async def test_overlap_conflict(self, client: AsyncClient, employee_token):
        await _request(client, employee_token)
        res = await _request(client, employee_token, start_date="2026-11-04", end_date="2026-11-06")
        assert res.status_code == 409

    async def test_individual_cannot_request(self, client: AsyncClient, individual_token):
        res = await _request(client, individual_token)
        assert res.status_code == 400

    async def test_cancel_pending(self, client: AsyncClient, employee_token):
        created = (await _request(client, employee_token)).json()["request"]
        res = await client.delete(f"{TIME_OFF}/{created['id']}", headers=auth_header(employee_token))
        assert res.status_code == 204
        res = await client.get(TIME_OFF, headers=auth_header(employee_token))
        assert res.json() == []

    async def test_cannot_cancel_others(self, client: AsyncClient, employee_token, manager_token):
        created = (await _request(client, employee_token)).json()["request"]
        res = await client.delete(f"{TIME_OFF}/{created['id']}", headers=auth_header(manager_token))
        assert res.status_code == 404


class TestReview:
    async def test_approve_notifies(self, client: AsyncClient, employee_token, owner_token):
        created = (await _request(client, employee_token)).json()["request"]

        pending = await client.get(ADMIN_TIME_OFF, params={"status": "pending"}, headers=auth_header(owner_token))
        assert [r["id"] for r in pending.json()] == [created["id"]]

        res = await client.post(f"{ADMIN_TIME_OFF}/{created['id']}/approve", headers=auth_header(owner_token))
        assert res.status_code == 200, res.text
        assert res.json()["status"] == "approved"

        notes = await client.get("/api/v1/app/notifications", headers=auth_header(employee_token))
        item = notes.json()["items"][0]
        assert item["type"] == "time_off_reviewed"
        assert item["message"] == "Your time off for 02 Nov 2026 to 04 Nov 2026 was approved."

    async def test_reject_requires_reason(self, client: AsyncClient, employee_token, owner_token):
        created = (await _request(client, employee_token)).json()["request"]
        res = await client.post(f"{ADMIN_TIME_OFF}/{created['id']}/reject", json={},
                                headers=auth_header(owner_token))
        assert res.status_code == 422

        res = await client.post(f"{ADMIN_TIME_OFF}/{created['id']}/reject", json={"reason": "Short staffed"},
                                headers=auth_header(owner_token))
        assert res.json()["status"] == "rejected"
        assert res.json()["rejection_reason"] == "Short staffed"

    async def test_review_only_once(self, client: AsyncClient, employee_token, owner_token):
        created = (await _request(client, employee_token)).json()["request"]
        await client.post(f"{ADMIN_TIME_OFF}/{created['id']}/approve", headers=auth_header(owner_token))
        res = await client.post(f"{ADMIN_TIME_OFF}/{created['id']}/approve", headers=auth_header(owner_token))
        assert res.status_code == 400

    async def test_cancel_after_review(self, client: AsyncClient, employee_token, owner_token):
        created = (await _request(client, employee_token)).json()["request"]
        await client.post(f"{ADMIN_TIME_OFF}/{created['id']}/approve", headers=auth_header(owner_token))
        res = await client.delete(f"{TIME_OFF}/{created['id']}", headers=auth_header(employee_token))
        assert res.status_code == 400

    async def test_employee_cannot_review(self, client: AsyncClient, employee_token):
        created = (await _request(client, employee_token)).json()["request"]
        res = await client.post(f"{ADMIN_TIME_OFF}/{created['id']}/approve", headers=auth_header(employee_token))
        assert res.status_code == 403
