"""Conversion of Taiwan local time strings to UTC."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone, tzinfo

_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")
_DATETIME = re.compile(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}")


def _taipei() -> tzinfo:
    try:
        from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
    except ImportError:  # pragma: no cover
        return timezone(timedelta(hours=8))
    try:
        return ZoneInfo("Asia/Taipei")
    except (ZoneInfoNotFoundError, ValueError):
        return timezone(timedelta(hours=8))


def parse_taiwan_date_to_utc(text: str) -> datetime:
    """Read "YYYY-MM-DD" or "YYYY-MM-DD HH:MM:SS" as Asia/Taipei time; return it in UTC."""
    if len(text) == 10:
        pattern, layout = _DATE, "%Y-%m-%d"
    else:
        pattern, layout = _DATETIME, "%Y-%m-%d %H:%M:%S"
    if not pattern.fullmatch(text):
        raise ValueError(f"parse time error: cannot parse {text!r}")
    try:
        local = datetime.strptime(text, layout)
    except ValueError as exc:
        raise ValueError(f"parse time error: {exc}") from exc
    return local.replace(tzinfo=_taipei()).astimezone(timezone.utc)