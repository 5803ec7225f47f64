import time
from datetime import date, datetime

import pytest

from planner.dates import (
    add_days, at_local_noon, date_range, day_of_week, days_diff, format_date, parse_date
)
from planner.exceptions import InvalidDateFormat


def test_format_date_from_date_and_datetime():
    assert format_date(date(2024, 1, 5)) == "2024-01-05"
    assert format_date(datetime(2024, 1, 5, 23, 59)) == "2024-01-05"
    assert format_date("2024-01-05") == "2024-01-05"


@pytest.mark.parametrize("value", ["2024/01/05", "05-01-2024", "2024-13-01", "2024-02-30", "2024-1-5", "", "tomorrow"])
def test_parse_date_rejects_malformed_strings(value):
    with pytest.raises(InvalidDateFormat):
        parse_date(value)


def test_add_days_is_plain_calendar_arithmetic():
    assert add_days("2024-01-01", 7) == date(2024, 1, 8)
    assert add_days("2024-01-01", 0) == date(2024, 1, 1)
    assert add_days(date(2024, 1, 1), -1) == date(2023, 12, 31)
    assert add_days("2024-02-28", 1) == date(2024, 2, 29)
    assert add_days("2023-02-28", 1) == date(2023, 3, 1)


def test_add_days_across_daylight_saving_changes():
    # US and EU clock changes
    assert add_days("2024-03-09", 1) == date(2024, 3, 10)
    assert add_days("2024-03-10", 1) == date(2024, 3, 11)
    assert add_days("2024-10-26", 2) == date(2024, 10, 28)


def test_add_days_rejects_bad_input():
    with pytest.raises(InvalidDateFormat):
        add_days("not-a-date", 1)


def test_day_of_week_sunday_is_zero():
    assert day_of_week("2024-01-07") == 0
    assert day_of_week("2024-01-08") == 1
    assert day_of_week("2024-01-13") == 6
    assert day_of_week(date(2024, 1, 10)) == 3


@pytest.mark.skipif(not hasattr(time, "tzset"), reason="tzset not available")
@pytest.mark.parametrize("tz", ["Pacific/Kiritimati", "Pacific/Pago_Pago", "America/Sao_Paulo"])
def test_day_of_week_does_not_depend_on_timezone(monkeypatch, tz):
    monkeypatch.setenv("TZ", tz)
    time.tzset()
    try:
        assert day_of_week("2024-01-07") == 0
        assert at_local_noon("2024-01-07").hour == 12
        assert add_days("2024-01-07", 1) == date(2024, 1, 8)
    finally:
        monkeypatch.undo()
        time.tzset()


def test_days_diff_can_be_negative():
    assert days_diff("2024-01-10", "2024-01-15") == 5
    assert days_diff("2024-01-15", "2024-01-10") == -5
    assert days_diff("2024-01-10", "2024-01-10") == 0
    assert days_diff("2024-02-28", "2024-03-01") == 2


def test_date_range_is_inclusive():
    assert list(date_range("2024-01-30", "2024-02-01")) == [
        date(2024, 1, 30), date(2024, 1, 31), date(2024, 2, 1)
    ]
    assert list(date_range("2024-01-02", "2024-01-01")) == []
