"""근무 API 테스트 — 본인 근무 CRUD, 상태 규칙, 근무표 배정 근무 보호, 관리자 승인."""

from datetime import date, time
from decimal import Decimal

from httpx import AsyncClient

from app.models.shift import Shift
from tests.conftest import auth_header

SHIFTS = "/api/v1/app/shifts"
ADMIN_SHIFTS = "/api/v1/admin/shifts"


async def _create(client: AsyncClient, token: str, **overrides) -> dict:
    body = {"work_date": "2026-10-14", "start_time": "09:00", "end_time": "17:00", **overrides}
    res = await client.post(SHIFTS, json=body, headers=auth_header(token))
    assert res.status_code == 201, res.text
    return res.json()


async def _rostered_shift(db, employee, manager) -> Shift:
    shift = Shift(
        user_id=employee.id,
        company_id=employee.company_id,
        work_date=date(2026, 10, 20),
        start_time=time(9, 0),
        end_time=time(17, 0),
        status="scheduled",
        created_by=manager.id,
    )
    db.add(shift)
    await db.flush()
    await db.refresh(shift)
    return shift


class TestOwnShifts:
    async def test_individual_shift_is_completed(self, client: AsyncClient, individual_token):
        """개인 사용자 근무는 바로 completed."""
        data = await _create(client, individual_token)
        assert data["status"] == "completed"
        assert Decimal(data["duration_hours"]) == Decimal("8.00")
        assert data["is_overnight"] is False
        assert data["company_id"] is None

    async def test_employee_shift_is_pending(self, client: AsyncClient, employee_token, company):
        data = await _create(client, employee_token)
        assert data["status"] == "pending"
        assert data["company_id"] == str(company.id)

    async def test_manager_shift_is_approved(self, client: AsyncClient, manager_token):
        data = await _create(client, manager_token)
        assert data["status"] == "approved"

    async def test_overnight_shift(self, client: AsyncClient, individual_token):
        """22:00 → 02:00 = 4시간, 익일 종료."""
        data = await _create(client, individual_token, start_time="22:00", end_time="02:00")
        assert data["is_overnight"] is True
        assert Decimal(data["duration_hours"]) == Decimal("4.00")

    async def test_zero_length_rejected(self, client: AsyncClient, individual_token):
        res = await client.post(SHIFTS, json={
            "work_date": "2026-10-14", "start_time": "08:00", "end_time": "08:00",
        }, headers=auth_header(individual_token))
        assert res.status_code == 400

    async def test_bad_time_format(self, client: AsyncClient, individual_token):
        res = await client.post(SHIFTS, json={
            "work_date": "2026-10-14", "start_time": "25:00", "end_time": "08:00",
        }, headers=auth_header(individual_token))
        assert res.status_code == 422

    async def test_long_shift_notification(self, client: AsyncClient, individual_token):
        """12시간 초과 근무는 long_shift 알림 생성."""
        await _create(client, individual_token, start_time="06:00", end_time="20:00")
        res = await client.get("/api/v1/app/notifications", headers=auth_header(individual_token))
        assert [n["type"] for n in res.json()["items"]] == ["long_shift"]

    async def test_list_by_range(self, client: AsyncClient, individual_token):
        await _create(client, individual_token, work_date="2026-10-12")
        await _create(client, individual_token, work_date="2026-10-14")
        await _create(client, individual_token, work_date="2026-10-20")
        res = await client.get(
            SHIFTS,
            params={"start_date": "2026-10-12", "end_date": "2026-10-18"},
            headers=auth_header(individual_token),
        )
        assert res.status_code == 200
        assert [s["work_date"] for s in res.json()] == ["2026-10-12", "2026-10-14"]

    async def test_list_inverted_range(self, client: AsyncClient, individual_token):
        res = await client.get(
            SHIFTS,
            params={"start_date": "2026-10-18", "end_date": "2026-10-12"},
            headers=auth_header(individual_token),
        )
        assert res.status_code == 400

    async def test_update_and_delete(self, client: AsyncClient, individual_token):
        created = await _create(client, individual_token)
        res = await client.put(
            f"{SHIFTS}/{created['id']}", json={"end_time": "18:30"}, headers=auth_header(individual_token)
        )
        assert res.status_code == 200
        assert Decimal(res.json()["duration_hours"]) == Decimal("9.50")

        res = await client.delete(f"{SHIFTS}/{created['id']}", headers=auth_header(individual_token))
        assert res.status_code == 204
        res = await client.get(f"{SHIFTS}/{created['id']}", headers=auth_header(individual_token))
        assert res.status_code == 404

    async def test_other_users_shift_is_not_found(self, client: AsyncClient, individual_token, employee_token):
        created = await _create(client, individual_token)
        res = await client.get(f"{SHIFTS}/{created['id']}", headers=auth_header(employee_token))
        assert res.status_code == 404

    async def test_edit_after_review_returns_to_pending(
        self, client: AsyncClient, employee_token, manager_token
    ):
        created = await _create(client, employee_token)
        await client.post(f"{ADMIN_SHIFTS}/{created['id']}/approve", headers=auth_header(manager_token))
        res = await client.put(
            f"{SHIFTS}/{created['id']}", json={"notes": "forgot my break"}, headers=auth_header(employee_token)
        )
        assert res.json()["status"] == "pending"
        assert res.json()["approved_by"] is None


class TestRosteredShifts:
    async def test_employee_cannot_edit_rostered_shift(
        self, client: AsyncClient, db, employee, manager, employee_token
    ):
        """근무표 배정 근무 수정/삭제는 403."""
        shift = await _rostered_shift(db, employee, manager)
        res = await client.put(
            f"{SHIFTS}/{shift.id}", json={"end_time": "18:00"}, headers=auth_header(employee_token)
        )
        assert res.status_code == 403
        res = await client.delete(f"{SHIFTS}/{shift.id}", headers=auth_header(employee_token))
        assert res.status_code == 403

    async def test_rostered_shift_is_visible(self, client: AsyncClient, db, employee, manager, employee_token):
        shift = await _rostered_shift(db, employee, manager)
        res = await client.get(f"{SHIFTS}/{shift.id}", headers=auth_header(employee_token))
        assert res.status_code == 200
        assert res.json()["is_roster_assigned"] is True


class TestShiftReview:
    async def test_pending_queue_and_approve(
        self, client: AsyncClient, employee_token, manager_token, manager
    ):
        created = await _create(client, employee_token)
        pending = await client.get(f"{ADMIN_SHIFTS}/pending", headers=auth_header(manager_token))
        assert [s["id"] for s in pending.json()] == [created["id"]]
        assert pending.json()[0]["user_name"] == "Test Employee"

        res = await client.post(f"{ADMIN_SHIFTS}/{created['id']}/approve", headers=auth_header(manager_token))
        assert res.status_code == 200
        assert res.json()["status"] == "approved"
        assert res.json()["approved_by"] == str(manager.id)

        again = await client.post(f"{ADMIN_SHIFTS}/{created['id']}/approve", headers=auth_header(manager_token))
        assert again.status_code == 400

    async def test_reject_notifies_employee(self, client: AsyncClient, employee_token, manager_token):
        created = await _create(client, employee_token)
        res = await client.post(
            f"{ADMIN_SHIFTS}/{created['id']}/reject",
            json={"reason": "Wrong site"},
            headers=auth_header(manager_token),
        )
        assert res.json()["status"] == "rejected"
        notes = await client.get("/api/v1/app/notifications", headers=auth_header(employee_token))
        item = notes.json()["items"][0]
        assert item["type"] == "shift_reviewed"
        assert "Wrong site" in item["message"]

    async def test_employee_cannot_review(self, client: AsyncClient, employee_token):
        res = await client.get(f"{ADMIN_SHIFTS}/pending", headers=auth_header(employee_token))
        assert res.status_code == 403

    async def test_company_list_is_paginated(self, client: AsyncClient, employee_token, owner_token):
        for day in ("2026-10-12", "2026-10-13", "2026-10-14"):
            await _create(client, employee_token, work_date=day)
        res = await client.get(
            ADMIN_SHIFTS, params={"per_page": 2, "status": "pending"}, headers=auth_header(owner_token)
        )
        assert res.status_code == 200
        data = res.json()
        assert data["total"] == 3
        assert len(data["items"]) == 2
