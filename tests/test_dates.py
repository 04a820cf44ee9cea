from datetime import date, datetime, timedelta, timezone

import pytest

from implantwarranty.dates import (
    add_days,
    add_months,
    add_years,
    format_date,
    parse_date,
    today,
    tomorrow,
    yesterday,
)


@pytest.mark.parametrize(
    "text",
    [
        "2024-03-05",
        "2024/03/05",
        "2024-3-5",
        "2024/3/5",
        "2024-03-05T10:20:30Z",
        "2024-03-05 10:20:30",
        "  2024-03-05  ",
    ],
)
def test_parse_date_layouts(text):
    assert parse_date(text) == date(2024, 3, 5)


def test_parse_date_empty():
    with pytest.raises(ValueError, match="empty date string"):
        parse_date("   ")


@pytest.mark.parametrize(
    "text", ["2024-02-30", "not a date", "2024-01/02", "2024-03-05T25:00:00Z"]
)
def test_parse_date_invalid(text):
    with pytest.raises(ValueError, match="unable to parse date"):
        parse_date(text)


def test_format_round_trip():
    value = date(1999, 12, 31)
    assert parse_date(format_date(value)) == value
    assert format_date(date(2024, 3, 5)) == "2024-03-05"


def test_add_months_overflows_into_next_month():
    assert add_months(date(2024, 1, 31), 1) == date(2024, 3, 2)


def test_add_years_from_leap_day():
    assert add_years(date(2024, 2, 29), 1) == date(2025, 3, 1)


@pytest.mark.parametrize("days", [-400, -1, 0, 1, 45, 366])
def test_add_days_difference(days):
    start = date(2023, 6, 15)
    assert add_days(start, days) - start == timedelta(days=days)


def test_add_months_twelve_equals_one_year():
    start = date(2022, 7, 10)
    assert add_months(start, 12) == add_years(start, 1)


def test_add_months_inverse_for_mid_month():
    start = date(2024, 5, 15)
    assert add_months(add_months(start, 3), -3) == start
    assert add_months(start, -17).day == 15


def test_relative_days():
    now = today()
    assert now == datetime.now(timezone.utc).date() or now == add_days(
        datetime.now(timezone.utc).date(), -1
    )
    assert tomorrow() - yesterday() == timedelta(days=2)