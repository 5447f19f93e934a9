"""요율 API 테스트 — 구간 그룹 규칙, 그룹 교체, 직원 요율 upsert."""

from decimal import Decimal

from httpx import AsyncClient

from tests.conftest import auth_header

TIERS = "/api/v1/admin/rate-tiers"
EMPLOYEE_RATES = "/api/v1/admin/employee-rates"


async def _add_tier(client: AsyncClient, token: str, **fields):
    body = {"day_type": "weekday", "tier_order": 1, "rate_per_hour": 2500, **fields}
    return await client.post(TIERS, json=body, headers=auth_header(token))


class TestRateTiers:
    async def test_append_tiers(self, client: AsyncClient, owner_token):
        first = await _add_tier(client, owner_token, hours_in_tier="8")
        assert first.status_code == 201, first.text
        assert first.json()["currency"] == "AUD"
        second = await _add_tier(client, owner_token, tier_order=2, rate_per_hour=3750)
        assert second.status_code == 201, second.text
        assert second.json()["hours_in_tier"] is None

        res = await client.get(TIERS, params={"day_type": "weekday"}, headers=auth_header(owner_token))
        assert [t["tier_order"] for t in res.json()] == [1, 2]
        assert Decimal(res.json()[0]["hours_in_tier"]) == Decimal("8")

    async def test_gap_in_order_rejected(self, client: AsyncClient, owner_token):
        await _add_tier(client, owner_token, hours_in_tier="8")
        res = await _add_tier(client, owner_token, tier_order=3)
        assert res.status_code == 400

    async def test_duplicate_order_rejected(self, client: AsyncClient, owner_token):
        await _add_tier(client, owner_token, hours_in_tier="8")
        res = await _add_tier(client, owner_token, tier_order=1, hours_in_tier="4")
        assert res.status_code == 400

    async def test_nothing_after_unbounded_tier(self, client: AsyncClient, owner_token):
        """무제한 구간 뒤에는 구간을 추가할 수 없음."""
        await _add_tier(client, owner_token)
        res = await _add_tier(client, owner_token, tier_order=2, hours_in_tier="4")
        assert res.status_code == 400

    async def test_groups_are_independent(self, client: AsyncClient, owner_token):
        await _add_tier(client, owner_token)
        res = await _add_tier(client, owner_token, day_type="saturday", rate_per_hour=3200)
        assert res.status_code == 201

    async def test_bad_day_type(self, client: AsyncClient, owner_token):
        res = await _add_tier(client, owner_token, day_type="funday")
        assert res.status_code == 422

    async def test_delete_only_last_tier(self, client: AsyncClient, owner_token):
        first = (await _add_tier(client, owner_token, hours_in_tier="8")).json()
        second = (await _add_tier(client, owner_token, tier_order=2, rate_per_hour=3750)).json()

        res = await client.delete(f"{TIERS}/{first['id']}", headers=auth_header(owner_token))
        assert res.status_code == 400
        res = await client.delete(f"{TIERS}/{second['id']}", headers=auth_header(owner_token))
        assert res.status_code == 204
        res = await client.delete(f"{TIERS}/{first['id']}", headers=auth_header(owner_token))
        assert res.status_code == 204

    async def test_update_makes_tier_unbounded(self, client: AsyncClient, owner_token):
        tier = (await _add_tier(client, owner_token, hours_in_tier="8")).json()
        res = await client.put(
            f"{TIERS}/{tier['id']}", json={"hours_in_tier": None, "rate_per_hour": 2600},
            headers=auth_header(owner_token),
        )
        assert res.status_code == 200, res.text
        assert res.json()["hours_in_tier"] is None
        assert res.json()["rate_per_hour"] == 2600

    async def test_replace_group(self, client: AsyncClient, owner_token):
        await _add_tier(client, owner_token)
        res = await client.put(f"{TIERS}/groups/weekday", json={"tiers": [
            {"hours_in_tier": "4", "rate_per_hour": 2000},
            {"hours_in_tier": "4", "rate_per_hour": 2500},
            {"rate_per_hour": 4000},
        ]}, headers=auth_header(owner_token))
        assert res.status_code == 200, res.text
        assert [(t["tier_order"], t["rate_per_hour"]) for t in res.json()] == [(1, 2000), (2, 2500), (3, 4000)]

        listed = await client.get(TIERS, params={"day_type": "weekday"}, headers=auth_header(owner_token))
        assert len(listed.json()) == 3

    async def test_replace_group_validates_first(self, client: AsyncClient, owner_token):
        """규칙 위반 시 기존 그룹은 그대로 유지."""
        await _add_tier(client, owner_token)
        res = await client.put(f"{TIERS}/groups/weekday", json={"tiers": [
            {"rate_per_hour": 2000},
            {"hours_in_tier": "4", "rate_per_hour": 2500},
        ]}, headers=auth_header(owner_token))
        assert res.status_code == 400

        listed = await client.get(TIERS, params={"day_type": "weekday"}, headers=auth_header(owner_token))
        assert [t["rate_per_hour"] for t in listed.json()] == [2500]

    async def test_tiers_share_one_window(self, client: AsyncClient, owner_token):
        """한 그룹의 구간은 같은 적용 기간을 가져야 함."""
        first = await _add_tier(client, owner_token, hours_in_tier="8", valid_to="2025-12-31")
        assert first.status_code == 201
        res = await _add_tier(client, owner_token, tier_order=2, rate_per_hour=3750)
        assert res.status_code == 400
        res = await _add_tier(client, owner_token, tier_order=2, rate_per_hour=3750, valid_to="2025-12-31")
        assert res.status_code == 201, res.text

    async def test_update_cannot_split_window(self, client: AsyncClient, owner_token):
        first = (await _add_tier(client, owner_token, hours_in_tier="8")).json()
        await _add_tier(client, owner_token, tier_order=2, rate_per_hour=3750)
        res = await client.put(f"{TIERS}/{first['id']}", json={"valid_from": "2027-01-01"},
                               headers=auth_header(owner_token))
        assert res.status_code == 400

    async def test_single_tier_window_can_change(self, client: AsyncClient, owner_token):
        tier = (await _add_tier(client, owner_token)).json()
        res = await client.put(f"{TIERS}/{tier['id']}", json={"valid_from": "2027-01-01"},
                               headers=auth_header(owner_token))
        assert res.status_code == 200, res.text
        assert res.json()["valid_from"] == "2027-01-01"

    async def test_employee_cannot_manage_tiers(self, client: AsyncClient, employee_token):
        res = await _add_tier(client, employee_token)
        assert res.status_code == 403

    async def test_individual_cannot_manage_tiers(self, client: AsyncClient, individual_token):
        res = await client.get(TIERS, headers=auth_header(individual_token))
        assert res.status_code == 403


RATE_BODY = {
    "weekday_rate": 2000,
    "weeknight_rate": 2500,
    "saturday_rate": 3000,
    "sunday_rate": 3500,
    "public_holiday_rate": 5000,
    "valid_from": "2026-01-01",
}


class TestEmployeeRates:
    async def test_upsert_same_start_updates(self, client: AsyncClient, owner_token, employee):
        url = f"{EMPLOYEE_RATES}/{employee.id}"
        created = await client.put(url, json=RATE_BODY, headers=auth_header(owner_token))
        assert created.status_code == 200, created.text
        updated = await client.put(url, json={**RATE_BODY, "weekday_rate": 2200}, headers=auth_header(owner_token))
        assert updated.status_code == 200
        assert updated.json()["id"] == created.json()["id"]
        assert updated.json()["weekday_rate"] == 2200

        listed = await client.get(EMPLOYEE_RATES, params={"user_id": str(employee.id)}, headers=auth_header(owner_token))
        assert len(listed.json()) == 1

    async def test_overlapping_window_conflict(self, client: AsyncClient, owner_token, employee):
        url = f"{EMPLOYEE_RATES}/{employee.id}"
        await client.put(url, json=RATE_BODY, headers=auth_header(owner_token))
        res = await client.put(url, json={**RATE_BODY, "valid_from": "2026-06-01"}, headers=auth_header(owner_token))
        assert res.status_code == 409

    async def test_consecutive_windows(self, client: AsyncClient, owner_token, employee):
        url = f"{EMPLOYEE_RATES}/{employee.id}"
        first = await client.put(
            url, json={**RATE_BODY, "valid_to": "2026-06-30"}, headers=auth_header(owner_token)
        )
        assert first.status_code == 200
        second = await client.put(
            url, json={**RATE_BODY, "valid_from": "2026-07-01", "weekday_rate": 2100},
            headers=auth_header(owner_token),
        )
        assert second.status_code == 200, second.text

    async def test_inverted_window(self, client: AsyncClient, owner_token, employee):
        res = await client.put(
            f"{EMPLOYEE_RATES}/{employee.id}",
            json={**RATE_BODY, "valid_to": "2025-12-31"},
            headers=auth_header(owner_token),
        )
        assert res.status_code == 400

    async def test_non_member(self, client: AsyncClient, owner_token, individual):
        res = await client.put(f"{EMPLOYEE_RATES}/{individual.id}", json=RATE_BODY, headers=auth_header(owner_token))
        assert res.status_code == 404

    async def test_my_rates(self, client: AsyncClient, owner_token, employee, employee_token):
        res = await client.get("/api/v1/app/my-rates", headers=auth_header(employee_token))
        assert res.json()["rates_configured"] is False
        assert res.json()["rates"] is None

        await client.put(f"{EMPLOYEE_RATES}/{employee.id}", json=RATE_BODY, headers=auth_header(owner_token))
        res = await client.get("/api/v1/app/my-rates", headers=auth_header(employee_token))
        assert res.json()["rates_configured"] is True
        assert res.json()["rates"]["saturday_rate"] == 3000
        assert res.json()["night_shift_start"] == "18:00"

    async def test_delete_rate(self, client: AsyncClient, owner_token, employee):
        rate = (await client.put(
            f"{EMPLOYEE_RATES}/{employee.id}", json=RATE_BODY, headers=auth_header(owner_token)
        )).json()
        res = await client.delete(f"{EMPLOYEE_RATES}/{rate['id']}", headers=auth_header(owner_token))
        assert res.status_code == 204
        res = await client.delete(f"{EMPLOYEE_RATES}/{rate['id']}", headers=auth_header(owner_token))
        assert res.status_code == 404
