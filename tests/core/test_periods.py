from datetime import date

import pytest

from core.periods import days_in_month, month_bounds, parse_period, period_key, shift_month


def test_days_in_month_handles_leap_years():
    assert days_in_month(2024, 2) == 29
    assert days_in_month(2023, 2) == 28
    assert days_in_month(2024, 12) == 31


def test_month_bounds():
    assert month_bounds(2024, 4) == (date(2024, 4, 1), date(2024, 4, 30))


def test_shift_month_caps_day_to_target_month():
    assert shift_month(date(2024, 3, 31), -1) == date(2024, 2, 29)
    assert shift_month(date(2023, 3, 31), -1) == date(2023, 2, 28)
    assert shift_month(date(2024, 1, 15), -1) == date(2023, 12, 15)
    assert shift_month(date(2024, 12, 31), 1) == date(2025, 1, 31)


def test_period_key_round_trips_through_parse_period():
    assert period_key(date(2024, 3, 5)) == "2024-03"
    assert parse_period("2024-03") == (2024, 3)


@pytest.mark.parametrize("value", ["2024-13", "2024", "abcd-ef"])
def test_parse_period_rejects_malformed_values(value):
    with pytest.raises(ValueError):
        parse_period(value)
