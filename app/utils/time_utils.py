"""근무 시간 계산 유틸리티 — HH:MM 파싱과 야간 근무 처리.

Shift time arithmetic. Every place that needs a shift duration goes through
this module so that parsing, overnight wraparound and rounding behave the
same way everywhere.

Contract:
    - Times are local wall-clock ``HH:MM`` strings (or ``datetime.time``).
    - If the end time is earlier than the start time the shift ends on the
      following day and 24 hours are added.
    - Equal start and end times mean a zero-length shift, never 24 hours.
    - Fractional hours are ``Decimal`` values rounded half-up to 0.01h.
"""

import re
from datetime import date, time, timedelta
from decimal import ROUND_HALF_UP, Decimal

_HHMM = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)(?::[0-5]\d)?$")

MINUTES_PER_DAY: int = 24 * 60
HOUR_QUANTUM: Decimal = Decimal("0.01")


def parse_hhmm(value: str | time) -> time:
    """``HH:MM`` 문자열을 time 객체로 변환합니다.

    Parse an ``HH:MM`` (or ``HH:MM:SS``) string into a ``time``.
    Seconds are accepted but ignored.

    Raises:
        ValueError: 형식이 잘못된 경우 (Malformed time string)
    """
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)
    match = _HHMM.match(value.strip())
    if match is None:
        raise ValueError(f"Invalid time '{value}', expected HH:MM")
    return time(int(match.group(1)), int(match.group(2)))


def format_hhmm(value: time) -> str:
    """time 객체를 ``HH:MM`` 문자열로 변환합니다."""
    return value.strftime("%H:%M")


def _minutes(value: time) -> int:
    return value.hour * 60 + value.minute


def is_overnight(start: str | time, end: str | time) -> bool:
    """종료 시각이 시작 시각보다 이르면 익일 종료 근무입니다."""
    return _minutes(parse_hhmm(end)) < _minutes(parse_hhmm(start))


def shift_duration_minutes(start: str | time, end: str | time) -> int:
    """근무 시간(분)을 계산합니다.

    Return the worked minutes between ``start`` and ``end``, adding a day
    when the shift crosses midnight.
    """
    diff: int = _minutes(parse_hhmm(end)) - _minutes(parse_hhmm(start))
    if diff < 0:
        diff += MINUTES_PER_DAY
    return diff


def shift_duration_hours(start: str | time, end: str | time) -> Decimal:
    """근무 시간(시간 단위)을 0.01h 반올림하여 반환합니다.

    Example:
        >>> shift_duration_hours("22:00", "02:00")
        Decimal('4.00')
    """
    minutes: int = shift_duration_minutes(start, end)
    return (Decimal(minutes) / Decimal(60)).quantize(HOUR_QUANTUM, rounding=ROUND_HALF_UP)


def starts_at_or_after(start: str | time, cutoff: str | time) -> bool:
    """시작 시각이 기준 시각 이후인지 확인합니다 (Start is at or after cutoff)."""
    return _minutes(parse_hhmm(start)) >= _minutes(parse_hhmm(cutoff))


def week_start(day: date) -> date:
    """해당 날짜가 속한 주의 월요일 (Monday of the ISO week containing ``day``)."""
    return day - timedelta(days=day.weekday())


def iter_dates(start: date, end: date):
    """시작일부터 종료일까지 (양끝 포함) 날짜를 순회합니다."""
    current: date = start
    while current <= end:
        yield current
        current += timedelta(days=1)
