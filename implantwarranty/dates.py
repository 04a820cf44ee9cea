"""Calendar dates without a time of day, parsed from several common layouts."""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta, timezone

_DATE_ONLY = re.compile(r"(\d{4})([-/])(\d{1,2})\2(\d{1,2})")
_ISO_UTC = re.compile(r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(?:\.\d+)?Z")
_SPACED = re.compile(r"(\d{4})-(\d{2})-(\d{2}) (\d{2}):(\d{2}):(\d{2})(?:\.\d+)?")


def _try_parse(text: str) -> date | None:
    match = _DATE_ONLY.fullmatch(text)
    if match:
        year, _, month, day = match.groups()
        try:
            return date(int(year), int(month), int(day))
        except ValueError:
            return None
    for pattern in (_ISO_UTC, _SPACED):
        match = pattern.fullmatch(text)
        if match:
            try:
                return datetime(*(int(part) for part in match.groups())).date()
            except ValueError:
                return None
    return None


def parse_date(text: str) -> date:
    """Parse a date string in any supported layout, keeping only the day."""
    text = text.strip()
    if not text:
        raise ValueError("empty date string")
    parsed = _try_parse(text)
    if parsed is None:
        raise ValueError(f"unable to parse date: {text}")
    return parsed


def format_date(value: date) -> str:
    """Render a date as YYYY-MM-DD."""
    return value.strftime("%Y-%m-%d")


def _add_date(value: date, years: int, months: int, days: int) -> date:
    # Out-of-range days roll over into the following month, e.g. Jan 31 + 1 month.
    total = value.month - 1 + months
    year = value.year + years + total // 12
    month = total % 12 + 1
    return date(year, month, 1) + timedelta(days=value.day - 1 + days)


def add_days(value: date, days: int) -> date:
    """Return the date a number of days later (or earlier when negative)."""
    return _add_date(value, 0, 0, days)


def add_months(value: date, months: int) -> date:
    """Return the date a number of months later, normalising overflowing days."""
    return _add_date(value, 0, months, 0)


def add_years(value: date, years: int) -> date:
    """Return the date a number of years later, normalising overflowing days."""
    return _add_date(value, years, 0, 0)


def today() -> date:
    """Today's date in UTC."""
    return datetime.now(timezone.utc).date()


def yesterday() -> date:
    """Yesterday's date in UTC."""
    return add_days(today(), -1)


def tomorrow() -> date:
    """Tomorrow's date in UTC."""
    return add_days(today(), 1)