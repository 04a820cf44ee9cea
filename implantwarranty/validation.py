"""Request body decoding with flexible date fields and uniform error reports."""

from __future__ import annotations

import json
import re
from dataclasses import asdict, dataclass, field
from datetime import date, datetime, timedelta, timezone
from typing import Any

DATE_FIELDS = ("patient_birth_date", "surgery_date")

_MESSAGES = {
    "required": "{field} is required",
    "email": "{field} must be a valid email address",
    "min": "{field} must be at least {param} characters long",
    "max": "{field} must be at most {param} characters long",
    "len": "{field} must be exactly {param} characters long",
    "oneof": "{field} must be one of: {param}",
    "gt": "{field} must be greater than {param}",
    "gte": "{field} must be greater than or equal to {param}",
    "lt": "{field} must be less than {param}",
    "lte": "{field} must be less than or equal to {param}",
    "numeric": "{field} must be numeric",
    "alpha": "{field} must contain only letters",
    "alphanum": "{field} must contain only letters and numbers",
    "url": "{field} must be a valid URL",
    "uuid": "{field} must be a valid UUID",
    "datetime": "{field} must be a valid datetime",
}

_DATE_ONLY = re.compile(r"(\d{4})([-/])(\d{1,2})\2(\d{1,2})")
_SPACED = re.compile(r"(\d{4})-(\d{2})-(\d{2}) (\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?")
_RFC3339 = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?(Z|[+-]\d{2}:\d{2})"
)


@dataclass(frozen=True)
class FieldError:
    """One problem found in a request."""

    field: str
    tag: str
    message: str
    value: str = ""


@dataclass(frozen=True)
class ValidationErrorResponse:
    """The body returned to a client whose request was rejected."""

    error: str
    details: list[FieldError] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.error,
            "details": [
                {"field": d.field, "tag": d.tag, "value": d.value, "message": d.message}
                for d in self.details
            ],
        }


class RequestError(Exception):
    """A request that cannot be accepted; carries the response to send."""

    def __init__(self, response: ValidationErrorResponse, status: int = 400) -> None:
        super().__init__(response.error)
        self.response = response
        self.status = status


def validation_message(field: str, tag: str, param: str) -> str:
    """Human readable message for a failed validation rule."""
    template = _MESSAGES.get(tag, "{field} failed validation for tag '{tag}'")
    return template.format(field=field, tag=tag, param=param)


def _micro(fraction: str | None) -> int:
    return int((fraction or "0")[:6].ljust(6, "0"))


def _zone(designator: str) -> timezone:
    if designator == "Z":
        return timezone.utc
    sign = -1 if designator[0] == "-" else 1
    hours, minutes = int(designator[1:3]), int(designator[4:6])
    return timezone(sign * timedelta(hours=hours, minutes=minutes))


def _try_parse(text: str) -> datetime | None:
    try:
        match = _DATE_ONLY.fullmatch(text)
        if match:
            year, _, month, day = match.groups()
            return datetime.combine(
                date(int(year), int(month), int(day)), datetime.min.time(), timezone.utc
            )
        match = _SPACED.fullmatch(text)
        if match:
            *parts, fraction = match.groups()
            return datetime(*(int(p) for p in parts), _micro(fraction), timezone.utc)
        match = _RFC3339.fullmatch(text)
        if match:
            *parts, fraction, zone = match.groups()
            return datetime(*(int(p) for p in parts), _micro(fraction), _zone(zone))
    except ValueError:
        return None
    return None


def parse_flexible_date(text: str) -> datetime:
    """Parse a date or timestamp; date-only values become midnight UTC."""
    text = text.strip()
    if not text:
        raise ValueError("empty date string")
    parsed = _try_parse(text)
    if parsed is None:
        raise ValueError(f"unable to parse date: {text}")
    return parsed


def _format_rfc3339(moment: datetime) -> str:
    offset = moment.utcoffset() or timedelta(0)
    stamp = moment.strftime("%Y-%m-%dT%H:%M:%S")
    if offset == timedelta(0):
        return stamp + "Z"
    sign = "-" if offset < timedelta(0) else "+"
    minutes = abs(int(offset.total_seconds())) // 60
    return f"{stamp}{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def process_date_fields(data: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of data with known date fields rewritten as RFC 3339 strings."""
    result = dict(data)
    for name in DATE_FIELDS:
        value = result.get(name)
        if not isinstance(value, str):
            continue
        try:
            parsed = parse_flexible_date(value)
        except ValueError as exc:
            raise ValueError(f"invalid date format for {name}: {value}") from exc
        result[name] = _format_rfc3339(parsed)
    return result


def _kind(value: Any) -> str:
    if isinstance(value, list):
        return "array"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float)):
        return "number"
    return "string"


def _binding_failed(message: str) -> RequestError:
    return RequestError(
        ValidationErrorResponse(
            "Request binding failed", [FieldError("request", "bind", message)]
        )
    )


def decode_request(body: bytes | str) -> dict[str, Any]:
    """Decode a JSON object request body and normalise its date fields."""
    text = body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body
    start = len(text) - len(text.lstrip())
    if start == len(text):
        raise _binding_failed("EOF")
    try:
        value, _ = json.JSONDecoder().raw_decode(text, start)
    except json.JSONDecodeError as exc:
        raise RequestError(
            ValidationErrorResponse(
                "Invalid JSON format",
                [
                    FieldError(
                        "json", "syntax", f"JSON syntax error at position {exc.pos}"
                    )
                ],
            )
        ) from exc
    if value is None:
        return {}
    if not isinstance(value, dict):
        kind = _kind(value)
        raise RequestError(
            ValidationErrorResponse(
                "Invalid field type",
                [FieldError("", "type", f"Expected object but got {kind}", kind)],
            )
        )
    try:
        return process_date_fields(value)
    except ValueError as exc:
        raise _binding_failed(str(exc)) from exc