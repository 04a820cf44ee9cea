"""Warranty term rules: combining product terms, end dates, audit payloads and batch limits."""

from __future__ import annotations

import dataclasses
import json
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any

from implantwarranty.dates import add_years

WARRANTY_YEARS_LIFETIME = -1
WARRANTY_YEARS_NO_WARRANTY = 0
LIFETIME_END = datetime(9999, 12, 31, 23, 59, 59, tzinfo=timezone.utc)
MIN_BATCH_COUNT = 1
MAX_BATCH_COUNT = 100
EMPTY_AUDIT_VALUES = "{}"


class WarrantyError(ValueError):
    """Raised when a warranty cannot be computed or a request is out of range."""


@dataclass
class WarrantyProduct:
    """A product as far as its warranty term is concerned (-1 lifetime, 0 none)."""

    warranty_years: int
    is_active: bool = True
    id: str = ""
    brand: str = ""
    model_number: str = ""


def _checked(product: WarrantyProduct | None) -> WarrantyProduct:
    if product is None:
        raise WarrantyError("product not found")
    if not product.is_active:
        raise WarrantyError("product is not active")
    return product


def combine_warranty_years(
    first: WarrantyProduct | None, second: WarrantyProduct | None = None
) -> int:
    """Warranty term of one or two implanted products; the shorter term wins.

    A product without warranty makes the whole registration warranty-free, and a
    lifetime term gives way to any finite term. ``second`` is None when only one
    serial number was registered.
    """
    first = _checked(first)
    if first.warranty_years == WARRANTY_YEARS_NO_WARRANTY:
        return WARRANTY_YEARS_NO_WARRANTY
    if second is None:
        return first.warranty_years
    second = _checked(second)
    years, other = first.warranty_years, second.warranty_years
    if other == WARRANTY_YEARS_NO_WARRANTY:
        return WARRANTY_YEARS_NO_WARRANTY
    if years == WARRANTY_YEARS_LIFETIME and other != WARRANTY_YEARS_LIFETIME:
        return other
    if years != WARRANTY_YEARS_LIFETIME and other != WARRANTY_YEARS_LIFETIME:
        return min(years, other)
    return years


def representative_product(first: WarrantyProduct, second: WarrantyProduct) -> WarrantyProduct:
    """Pick the product whose term governs the registration, for use in e-mails."""
    if first.warranty_years == WARRANTY_YEARS_LIFETIME:
        return second
    if second.warranty_years == WARRANTY_YEARS_LIFETIME:
        return first
    if first.warranty_years == WARRANTY_YEARS_NO_WARRANTY:
        return first
    if second.warranty_years == WARRANTY_YEARS_NO_WARRANTY:
        return second
    if first.warranty_years > second.warranty_years:
        return second
    return first


def warranty_end_date(surgery_date: datetime | date, years: int) -> datetime | date:
    """End of the warranty for a surgery date and a term in years."""
    if years == WARRANTY_YEARS_LIFETIME:
        return LIFETIME_END
    if years == WARRANTY_YEARS_NO_WARRANTY:
        return surgery_date
    if isinstance(surgery_date, datetime):
        shifted = add_years(surgery_date.date(), years)
        return datetime.combine(shifted, surgery_date.timetz())
    return add_years(surgery_date, years)


def _encode(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (set, frozenset, tuple)):
        return list(value)
    raise TypeError(f"cannot encode {type(value).__name__}")


def audit_values(data: Any) -> str:
    """JSON text recorded in the audit log; "{}" when there is nothing or it cannot be encoded."""
    if data is None:
        return EMPTY_AUDIT_VALUES
    try:
        return json.dumps(data, default=_encode, ensure_ascii=False, separators=(",", ":"))
    except (TypeError, ValueError):
        return EMPTY_AUDIT_VALUES


def check_batch_count(count: int) -> int:
    """Return the count of blank warranties to create if it lies between 1 and 100."""
    if count < MIN_BATCH_COUNT or count > MAX_BATCH_COUNT:
        raise WarrantyError("count must be between 1 and 100")
    return count