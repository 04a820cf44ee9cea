"""Implant product records: request validation, construction, updates and paging."""

from __future__ import annotations

import dataclasses
import enum
from dataclasses import dataclass, field
from datetime import datetime, timezone

from implantwarranty.textcheck import sanitize_string

MIN_WARRANTY_YEARS = -1
MAX_WARRANTY_YEARS = 50


class ProductError(ValueError):
    """Raised when a product request is invalid."""


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Product:
    """An implant product and its warranty term (-1 lifetime, 0 none)."""

    model_number: str
    brand: str
    type: str
    warranty_years: int
    size: str | None = None
    description: str | None = None
    is_active: bool = True
    id: str = ""
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)


@dataclass
class ProductCreateRequest:
    """Fields supplied when creating a product."""

    model_number: str
    brand: str
    type: str
    warranty_years: int = 0
    size: str | None = None
    description: str | None = None


@dataclass
class ProductUpdateRequest:
    """Fields to change on a product; None leaves a field as it is."""

    model_number: str | None = None
    brand: str | None = None
    type: str | None = None
    size: str | None = None
    warranty_years: int | None = None
    description: str | None = None
    is_active: bool | None = None


class MetadataKind(enum.Enum):
    """Product attributes offered as drop-down lists."""

    BRANDS = "brands"
    TYPES = "types"
    MODEL_NUMBERS = "model_numbers"
    SIZES = "sizes"


def _byte_length(text: str) -> int:
    return len(text.encode("utf-8"))


def validate_warranty_years(years: int) -> int:
    """Return the term if it lies between -1 and 50; raise ProductError otherwise."""
    if years < MIN_WARRANTY_YEARS or years > MAX_WARRANTY_YEARS:
        raise ProductError("warranty years must be between -1 and 50")
    return years


def validate_create_request(request: ProductCreateRequest) -> None:
    """Check required fields and length limits of a create request."""
    checks = (
        (request.model_number, 100, "model number is required", "model number too long"),
        (request.brand, 100, "brand is required", "brand name too long"),
        (request.type, 50, "type is required", "type name too long"),
    )
    for value, limit, missing, too_long in checks:
        if value == "":
            raise ProductError(missing)
        if _byte_length(value) > limit:
            raise ProductError(too_long)
    validate_warranty_years(request.warranty_years)


def _clean_optional(value: str | None) -> str | None:
    return None if value is None else sanitize_string(value)


def build_product(request: ProductCreateRequest) -> Product:
    """Validate a create request and return a new active product with sanitised text."""
    validate_create_request(request)
    now = _now()
    return Product(
        model_number=sanitize_string(request.model_number),
        brand=sanitize_string(request.brand),
        type=sanitize_string(request.type),
        warranty_years=request.warranty_years,
        size=_clean_optional(request.size),
        description=_clean_optional(request.description),
        is_active=True,
        created_at=now,
        updated_at=now,
    )


def apply_update(product: Product, request: ProductUpdateRequest) -> Product:
    """Return a copy of the product with the requested changes applied."""
    changes: dict[str, object] = {}
    for name in ("model_number", "brand", "type", "size", "description"):
        value = getattr(request, name)
        if value is not None:
            changes[name] = sanitize_string(value)
    if request.warranty_years is not None:
        changes["warranty_years"] = validate_warranty_years(request.warranty_years)
    if request.is_active is not None:
        changes["is_active"] = request.is_active
    changes["updated_at"] = _now()
    return dataclasses.replace(product, **changes)


def metadata_kind(name: str) -> MetadataKind:
    """Look up a metadata list by its name."""
    try:
        return MetadataKind(name)
    except ValueError:
        raise ProductError(f"unknown metadata: {name}") from None


def page_summary(total_count: int, returned: int, page_size: int) -> tuple[int, int]:
    """Return (total, total_pages) for a search page; an empty page reports (0, 1)."""
    if returned <= 0:
        return 0, 1
    return total_count, -(-total_count // page_size)