"""근무표 API 테스트 — 일괄 배정, 휴가 충돌, 주간 조회, 삭제 제한, 근무표 메일."""

from datetime import timedelta
from uuid import UUID, uuid4

from httpx import AsyncClient
from sqlalchemy import func, select

from app.database import utcnow
from app.models.shift import Shift
from tests.conftest import auth_header

ROSTER = "/api/v1/admin/roster"
ADMIN_SHIFTS = "/api/v1/admin/shifts"
MY_SHIFTS = "/api/v1/app/shifts"


def _item(user, work_date: str = "2026-10-20", **fields) -> dict:
    return {"user_id": str(user.id), "work_date": work_date, "start_time": "09:00", "end_time": "17:00", **fields}


async def _assign(client: AsyncClient, token: str, items: list[dict], **fields):
    return await client.post(ROSTER, json={"shifts": items, **fields}, headers=auth_header(token))


class TestAssign:
    async def test_assign_creates_scheduled_shifts(self, client: AsyncClient, owner_token, owner, employee, employee_token):
        res = await _assign(client, owner_token, [
            _item(employee), _item(employee, "2026-10-21", start_time="22:00", end_time="06:00"),
        ])
        assert res.status_code == 201, res.text
        created = res.json()["created"]
        assert [s["status"] for s in created] == ["scheduled", "scheduled"]
        assert all(s["is_roster_assigned"] for s in created)
        assert created[0]["created_by"] == str(owner.id)
        assert created[1]["is_overnight"] is True
        assert res.json()["conflicts"] == []

        notes = await client.get("/api/v1/app/notifications", headers=auth_header(employee_token))
        assert notes.json()["items"][0]["message"] == "Test Owner assigned you 2 new shifts."

    async def test_without_notify(self, client: AsyncClient, owner_token, employee, employee_token):
        await _assign(client, owner_token, [_item(employee)], notify=False)
        notes = await client.get("/api/v1/app/notifications", headers=auth_header(employee_token))
        assert notes.json()["total"] == 0

    async def test_time_off_conflict_reported(self, client: AsyncClient, owner_token, employee, employee_token):
        time_off = await client.post("/api/v1/app/time-off", json={
            "start_date": "2026-10-20", "end_date": "2026-10-22",
        }, headers=auth_header(employee_token))
        res = await _assign(client, owner_token, [_item(employee)])
        assert res.status_code == 201
        conflict = res.json()["conflicts"][0]
        assert conflict["time_off_id"] == time_off.json()["request"]["id"]
        assert conflict["time_off_status"] == "pending"

    async def test_bad_item_rejects_batch(self, client: AsyncClient, db, owner_token, employee, individual):
        res = await _assign(client, owner_token, [_item(employee), _item(individual)])
        assert res.status_code == 404
        res = await _assign(client, owner_token, [_item(employee), _item(employee, start_time="09:00", end_time="09:00")])
        assert res.status_code == 400

        count = await db.scalar(select(func.count()).select_from(Shift))
        assert count == 0

    async def test_inactive_employee(self, client: AsyncClient, db, owner_token, employee):
        employee.is_active = False
        await db.flush()
        res = await _assign(client, owner_token, [_item(employee)])
        assert res.status_code == 400

    async def test_employee_cannot_assign(self, client: AsyncClient, employee_token, employee):
        res = await _assign(client, employee_token, [_item(employee)])
        assert res.status_code == 403


class TestWeek:
    async def test_week_and_my_roster(self, client: AsyncClient, owner_token, manager, employee, employee_token):
        await _assign(client, owner_token, [
            _item(employee, "2026-10-19"),
            _item(manager, "2026-10-25"),
            _item(employee, "2026-10-26"),
        ])
        await client.post("/api/v1/app/shifts", json={
            "work_date": "2026-10-22", "start_time": "10:00", "end_time": "12:00",
        }, headers=auth_header(employee_token))

        res = await client.get(f"{ROSTER}/week", params={"week_of": "2026-10-22"}, headers=auth_header(owner_token))
        assert [(s["work_date"], s["user_name"]) for s in res.json()] == [
            ("2026-10-19", "Test Employee"),
            ("2026-10-22", "Test Employee"),
            ("2026-10-25", "Test Manager"),
        ]

        mine = await client.get("/api/v1/app/my-roster", params={"week_of": "2026-10-21"},
                                headers=auth_header(employee_token))
        assert [s["work_date"] for s in mine.json()] == ["2026-10-19"]


class TestDelete:
    async def test_delete_scheduled(self, client: AsyncClient, owner_token, employee):
        shift = (await _assign(client, owner_token, [_item(employee)])).json()["created"][0]
        res = await client.delete(f"{ROSTER}/{shift['id']}", headers=auth_header(owner_token))
        assert res.status_code == 204

    async def test_worked_shift_is_kept(self, client: AsyncClient, db, owner_token, employee):
        shift = (await _assign(client, owner_token, [_item(employee)])).json()["created"][0]
        stored = await db.get(Shift, UUID(shift["id"]))
        stored.status = "approved"
        await db.flush()

        res = await client.delete(f"{ROSTER}/{shift['id']}", headers=auth_header(owner_token))
        assert res.status_code == 403

    async def test_self_logged_shift_not_roster(self, client: AsyncClient, owner_token, employee_token):
        shift = (await client.post("/api/v1/app/shifts", json={
            "work_date": "2026-10-22", "start_time": "10:00", "end_time": "12:00",
        }, headers=auth_header(employee_token))).json()
        res = await client.delete(f"{ROSTER}/{shift['id']}", headers=auth_header(owner_token))
        assert res.status_code == 404


class TestEmail:
    async def test_email_everyone_rostered(self, client: AsyncClient, owner_token, manager, employee):
        await _assign(client, owner_token, [_item(employee), _item(employee, "2026-10-21"), _item(manager)])
        res = await client.post(f"{ROSTER}/email", json={"week_start": "2026-10-22"},
                                headers=auth_header(owner_token))
        assert res.status_code == 200, res.text
        data = res.json()
        assert data["week_start"] == "2026-10-19"
        assert data["week_end"] == "2026-10-25"
        assert {(r["email"], r["shift_count"], r["email_sent"]) for r in data["results"]} == {
            ("employee@test.com", 2, True),
            ("manager@test.com", 1, True),
        }

    async def test_email_selected_user(self, client: AsyncClient, owner_token, employee):
        res = await client.post(f"{ROSTER}/email", json={
            "week_start": "2026-10-19", "user_ids": [str(employee.id)],
        }, headers=auth_header(owner_token))
        assert [(r["email"], r["shift_count"]) for r in res.json()["results"]] == [("employee@test.com", 0)]

    async def test_email_unknown_user(self, client: AsyncClient, owner_token):
        res = await client.post(f"{ROSTER}/email", json={
            "week_start": "2026-10-19", "user_ids": [str(uuid4())],
        }, headers=auth_header(owner_token))
        assert res.status_code == 404


class TestLifecycle:
    """배정 근무 → 완료 보고/승인 → 청구."""

    async def _tiers(self, client: AsyncClient, token: str) -> None:
        res = await client.put("/api/v1/admin/rate-tiers/groups/weekday", json={"tiers": [
            {"hours_in_tier": "8", "rate_per_hour": 2500}, {"rate_per_hour": 3750},
        ]}, headers=auth_header(token))
        assert res.status_code == 200, res.text

    async def _report(self, client: AsyncClient, token: str) -> dict:
        res = await client.get("/api/v1/admin/billing/report", params={
            "start_date": "2026-10-12", "end_date": "2026-10-18",
        }, headers=auth_header(token))
        assert res.status_code == 200, res.text
        return res.json()

    async def test_approved_roster_shift_is_billed(self, client: AsyncClient, owner_token, employee):
        await self._tiers(client, owner_token)
        shift = (await _assign(client, owner_token, [_item(employee, "2026-10-12")])).json()["created"][0]
        assert (await self._report(client, owner_token))["shifts"] == []

        res = await client.post(f"{ADMIN_SHIFTS}/{shift['id']}/approve", headers=auth_header(owner_token))
        assert res.status_code == 200, res.text
        assert res.json()["status"] == "approved"

        report = await self._report(client, owner_token)
        assert report["total_amount"] == 20000
        assert [s["shift_id"] for s in report["shifts"]] == [shift["id"]]

    async def test_rejected_roster_shift_is_not_billed(self, client: AsyncClient, owner_token, employee):
        await self._tiers(client, owner_token)
        shift = (await _assign(client, owner_token, [_item(employee, "2026-10-12")])).json()["created"][0]
        res = await client.post(f"{ADMIN_SHIFTS}/{shift['id']}/reject", json={"reason": "No show"},
                                headers=auth_header(owner_token))
        assert res.json()["status"] == "rejected"
        assert (await self._report(client, owner_token))["total_amount"] == 0

    async def test_employee_reports_worked_shift(self, client: AsyncClient, owner_token, employee, employee_token):
        shift = (await _assign(client, owner_token, [_item(employee, "2026-10-12")])).json()["created"][0]
        res = await client.post(f"{MY_SHIFTS}/{shift['id']}/complete", headers=auth_header(employee_token))
        assert res.status_code == 200, res.text
        assert res.json()["status"] == "pending"

        pending = await client.get(f"{ADMIN_SHIFTS}/pending", headers=auth_header(owner_token))
        assert [s["id"] for s in pending.json()] == [shift["id"]]

        again = await client.post(f"{MY_SHIFTS}/{shift['id']}/complete", headers=auth_header(employee_token))
        assert again.status_code == 400

    async def test_future_shift_cannot_be_reported(self, client: AsyncClient, owner_token, employee, employee_token):
        upcoming = (utcnow().date() + timedelta(days=7)).isoformat()
        shift = (await _assign(client, owner_token, [_item(employee, upcoming)])).json()["created"][0]
        res = await client.post(f"{MY_SHIFTS}/{shift['id']}/complete", headers=auth_header(employee_token))
        assert res.status_code == 400

    async def test_self_logged_shift_cannot_be_reported(self, client: AsyncClient, employee_token):
        shift = (await client.post(MY_SHIFTS, json={
            "work_date": "2026-10-12", "start_time": "10:00", "end_time": "12:00",
        }, headers=auth_header(employee_token))).json()
        res = await client.post(f"{MY_SHIFTS}/{shift['id']}/complete", headers=auth_header(employee_token))
        assert res.status_code == 400

    async def test_others_cannot_report(self, client: AsyncClient, owner_token, employee, manager_token):
        shift = (await _assign(client, owner_token, [_item(employee, "2026-10-12")])).json()["created"][0]
        res = await client.post(f"{MY_SHIFTS}/{shift['id']}/complete", headers=auth_header(manager_token))
        assert res.status_code == 404
