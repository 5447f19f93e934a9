"""직원 정액 요율 수입 집계 테스트."""

from datetime import date, time
from decimal import Decimal
from types import SimpleNamespace

from app.utils.earnings import aggregate_earnings, categorize_shift

RATES = SimpleNamespace(
    weekday_rate=2000,
    weeknight_rate=2500,
    saturday_rate=3000,
    sunday_rate=3500,
    public_holiday_rate=5000,
    currency="AUD",
)

PERIOD = (date(2026, 10, 12), date(2026, 10, 18))


def _shift(day: date, start: str, end: str, status: str = "completed") -> SimpleNamespace:
    h1, m1 = map(int, start.split(":"))
    h2, m2 = map(int, end.split(":"))
    return SimpleNamespace(work_date=day, start_time=time(h1, m1), end_time=time(h2, m2), status=status)


class TestCategorize:
    def test_weeknight_split_only_on_weekdays(self):
        assert categorize_shift(_shift(date(2026, 10, 14), "18:00", "23:00"), set(), "18:00") == "weeknight"
        assert categorize_shift(_shift(date(2026, 10, 14), "17:59", "23:00"), set(), "18:00") == "weekday"
        assert categorize_shift(_shift(date(2026, 10, 17), "19:00", "23:00"), set(), "18:00") == "saturday"

    def test_holiday_wins(self):
        day = date(2026, 10, 14)
        assert categorize_shift(_shift(day, "20:00", "23:00"), {day}, "18:00") == "public_holiday"


class TestAggregate:
    def test_single_weekday_shift(self):
        """6시간 평일 근무 × $20.00 = $120.00."""
        summary = aggregate_earnings(
            [_shift(date(2026, 10, 13), "09:00", "15:00")], RATES, set(), "18:00", *PERIOD, "AUD"
        )
        assert summary.total_earnings == 12000
        assert summary.total_hours == Decimal("6.00")
        assert [(c.category, c.hours, c.rate, c.earnings) for c in summary.breakdown] == [
            ("weekday", Decimal("6.00"), 2000, 12000)
        ]

    def test_mixed_categories_and_statuses(self):
        shifts = [
            _shift(date(2026, 10, 13), "22:00", "02:00"),  # weeknight overnight 4h
            _shift(date(2026, 10, 17), "08:00", "12:00"),  # saturday 4h
            _shift(date(2026, 10, 18), "08:00", "10:00", status="rejected"),
            _shift(date(2026, 10, 18), "08:00", "10:00", status="scheduled"),
        ]
        summary = aggregate_earnings(shifts, RATES, set(), "18:00", *PERIOD, "AUD")
        assert [c.category for c in summary.breakdown] == ["weeknight", "saturday"]
        assert summary.total_hours == Decimal("8.00")
        assert summary.total_earnings == 4 * 2500 + 4 * 3000

    def test_without_rates(self):
        """요율 미설정이어도 시간은 보고, 금액은 0."""
        summary = aggregate_earnings(
            [_shift(date(2026, 10, 13), "09:00", "15:00")], None, set(), "18:00", *PERIOD, "NZD"
        )
        assert summary.rates_configured is False
        assert summary.currency == "NZD"
        assert summary.total_hours == Decimal("6.00")
        assert summary.total_earnings == 0
