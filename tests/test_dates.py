from datetime import date, datetime

import pytest

from fincore.dates import PRESET_LABELS, Preset, month_bounds, resolve_date_range, shift_month
from fincore.domain import UNBOUNDED, DateRange


def test_this_month_leap_february():
    r = resolve_date_range("thisMonth", datetime(2024, 2, 15))

    assert r == DateRange(date(2024, 2, 1), date(2024, 2, 29))


def test_this_month_non_leap_february():
    r = resolve_date_range(Preset.THIS_MONTH, datetime(2023, 2, 10))

    assert r.end == date(2023, 2, 28)


def test_last_month_year_rollover():
    r = resolve_date_range("lastMonth", datetime(2024, 1, 10))

    assert r.start == date(2023, 12, 1)
    assert r.end == date(2023, 12, 31)


def test_last_month_from_month_end():
    r = resolve_date_range(Preset.LAST_MONTH, datetime(2024, 3, 31, 23, 59))

    assert r == DateRange(date(2024, 2, 1), date(2024, 2, 29))


def test_last_3_months():
    r = resolve_date_range("last3Months", datetime(2024, 3, 20))

    assert r.start == date(2024, 1, 1)
    assert r.end == date(2024, 3, 31)


def test_last_3_months_crosses_year():
    r = resolve_date_range(Preset.LAST_3_MONTHS, datetime(2024, 1, 15))

    assert r == DateRange(date(2023, 11, 1), date(2024, 1, 31))


def test_last_6_months():
    r = resolve_date_range(Preset.LAST_6_MONTHS, datetime(2024, 3, 20))

    assert r == DateRange(date(2023, 10, 1), date(2024, 3, 31))


def test_this_year():
    r = resolve_date_range(Preset.THIS_YEAR, datetime(2024, 7, 4))

    assert r == DateRange(date(2024, 1, 1), date(2024, 12, 31))


def test_all_is_unbounded():
    r = resolve_date_range("all", datetime(2024, 3, 20))

    assert r is UNBOUNDED
    assert r.contains(date(1970, 1, 1))
    assert r.contains(datetime(2999, 12, 31, 23, 59))


def test_date_anchor_is_accepted():
    assert resolve_date_range(Preset.THIS_MONTH, date(2024, 4, 30)) == month_bounds(2024, 4)


def test_default_anchor_is_now():
    r = resolve_date_range(Preset.THIS_MONTH)
    today = date.today()

    assert r.start == date(today.year, today.month, 1)


def test_unknown_preset_raises():
    with pytest.raises(ValueError):
        resolve_date_range("nextMonth", datetime(2024, 3, 20))


def test_resolution_is_idempotent():
    now = datetime(2024, 12, 31, 23, 59)
    for preset in Preset:
        assert resolve_date_range(preset, now) == resolve_date_range(preset, now)


def test_range_contains_is_inclusive():
    r = month_bounds(2024, 2)

    assert r.contains(date(2024, 2, 1))
    assert r.contains(datetime(2024, 2, 29, 23, 59, 59))
    assert not r.contains(date(2024, 3, 1))
    assert not r.contains(datetime(2024, 1, 31, 23, 59))


def test_shift_month():
    assert shift_month(2024, 1, -1) == (2023, 12)
    assert shift_month(2024, 12, 1) == (2025, 1)
    assert shift_month(2024, 3, -14) == (2023, 1)
    assert shift_month(2024, 5, 0) == (2024, 5)


def test_every_preset_has_a_label():
    assert set(PRESET_LABELS) == set(Preset)
    assert PRESET_LABELS[Preset.LAST_3_MONTHS] == "Last 3M"
