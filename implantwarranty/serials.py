"""Implant serial numbers: request checks, paging, format checks and bulk-import sorting."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Collection, Iterable

MAX_SERIAL_NUMBER_BYTES = 20
MAX_FULL_SERIAL_NUMBER_BYTES = 100
DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100
PRODUCT_MISSING_MESSAGE = "產品不存在。"

_SERIAL_FORMAT = re.compile(r"[0-9]{7}-[0-9]{3}")
_FNV_OFFSET_BASIS = 0x811C9DC5
_FNV_PRIME = 0x01000193
_KEY_MODULUS = 10_000


class SerialError(ValueError):
    """Raised when a serial number or a serial request is invalid."""


@dataclass
class SerialCreateRequest:
    """Fields supplied when creating a serial number."""

    serial_number: str
    full_serial_number: str
    product_id: str


@dataclass
class SerialUpdateRequest:
    """Fields to change on a serial number; None leaves a field as it is."""

    serial_number: str | None = None
    full_serial_number: str | None = None
    product_id: str | None = None


@dataclass
class SerialImportItem:
    """One row of a bulk serial import."""

    index: int
    product_id: str
    serial_number: str
    full_serial_number: str


@dataclass
class SerialImportFailure:
    """A bulk import row that was rejected, with the reason."""

    index: int
    product_id: str
    serial_number: str
    full_serial_number: str
    error: str

    @classmethod
    def from_item(cls, item: SerialImportItem, error: str) -> "SerialImportFailure":
        return cls(
            index=item.index,
            product_id=item.product_id,
            serial_number=item.serial_number,
            full_serial_number=item.full_serial_number,
            error=error,
        )


def _byte_length(text: str) -> int:
    return len(text.encode("utf-8"))


def _check_lengths(serial_number: str | None, full_serial_number: str | None) -> None:
    if serial_number is not None and _byte_length(serial_number) > MAX_SERIAL_NUMBER_BYTES:
        raise SerialError("序號長度不能超過20個字元")
    if (
        full_serial_number is not None
        and _byte_length(full_serial_number) > MAX_FULL_SERIAL_NUMBER_BYTES
    ):
        raise SerialError("完整序號長度不能超過100個字元")


def validate_create_request(request: SerialCreateRequest) -> None:
    """Check that a create request has all fields and respects length limits."""
    if request.serial_number == "":
        raise SerialError("序號不能為空")
    if request.full_serial_number == "":
        raise SerialError("完整序號不能為空")
    _check_lengths(request.serial_number, request.full_serial_number)
    if request.product_id == "":
        raise SerialError("產品ID不能為空")


def validate_update_request(request: SerialUpdateRequest) -> None:
    """Check that fields being changed are not blank and respect length limits."""
    if request.serial_number is not None and request.serial_number == "":
        raise SerialError("序號不能為空字串")
    if request.full_serial_number is not None and request.full_serial_number == "":
        raise SerialError("完整序號不能為空字串")
    _check_lengths(request.serial_number, request.full_serial_number)


def validate_import_item(item: SerialImportItem) -> None:
    """Check one bulk import row."""
    if item.serial_number == "":
        raise SerialError("序號不能為空字串")
    if item.full_serial_number == "":
        raise SerialError("完整序號不能為空字串")
    _check_lengths(item.serial_number, item.full_serial_number)
    if item.product_id == "":
        raise SerialError("產品ID不能為空字串")


def normalize_pagination(page: int | None, page_size: int | None) -> tuple[int, int, int]:
    """Return (page, page_size, offset) with out-of-range values replaced by defaults."""
    if page is None or page < 1:
        page = DEFAULT_PAGE
    if page_size is None or page_size < 1 or page_size > MAX_PAGE_SIZE:
        page_size = DEFAULT_PAGE_SIZE
    return page, page_size, (page - 1) * page_size


def total_pages(total: int, page_size: int) -> int:
    """Number of pages needed to show total rows, page_size at a time."""
    return -(-total // page_size)


def check_serial_format(serial_number: str) -> str:
    """Return the serial number if it has the form 1234567-123; raise SerialError otherwise."""
    if serial_number == "":
        raise SerialError("序號或驗證碼不正確-ERR_SERIAL_001")
    if _SERIAL_FORMAT.fullmatch(serial_number) is None:
        raise SerialError("序號或驗證碼不正確-ERR_SERIAL_002")
    return serial_number


def _fnv1a_32(data: bytes) -> int:
    value = _FNV_OFFSET_BASIS
    for byte in data:
        value = ((value ^ byte) * _FNV_PRIME) & 0xFFFFFFFF
    return value


def generate_serial_key(encryption_key: str, serial_number: str) -> str:
    """Four-digit check code derived from the key and serial number."""
    digest = _fnv1a_32((encryption_key + serial_number).encode("utf-8"))
    return f"{digest % _KEY_MODULUS:04d}"


def partition_import_items(
    items: Iterable[SerialImportItem], missing_product_ids: Collection[str]
) -> tuple[list[SerialImportItem], list[SerialImportFailure]]:
    """Split import rows into those to create and those rejected.

    Rows failing validation are reported first, then valid rows whose product
    is listed among the missing product ids.
    """
    failures: list[SerialImportFailure] = []
    valid: list[SerialImportItem] = []
    for item in items:
        try:
            validate_import_item(item)
        except SerialError as exc:
            failures.append(SerialImportFailure.from_item(item, str(exc)))
        else:
            valid.append(item)

    missing = set(missing_product_ids)
    accepted: list[SerialImportItem] = []
    for item in valid:
        if item.product_id in missing:
            failures.append(SerialImportFailure.from_item(item, PRODUCT_MISSING_MESSAGE))
        else:
            accepted.append(item)
    return accepted, failures