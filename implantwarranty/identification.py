"""Checksum validation of Taiwan national IDs and machine-readable passport numbers."""

from __future__ import annotations

from typing import Any, Iterator

_PASSPORT_CODES = {
    **{str(digit): digit for digit in range(10)},
    **{chr(ord("A") + offset): 10 + offset for offset in range(26)},
    "<": 0,
}
_PASSPORT_WEIGHTS = (7, 3, 1, 7, 3, 1, 7, 3, 1)

_TAIWAN_LOCATIONS = {
    "A": 1, "B": 0, "C": 9, "D": 8, "E": 7, "F": 6, "G": 5, "H": 4, "I": 9,
    "J": 3, "K": 2, "L": 2, "M": 1, "N": 0, "O": 8, "P": 9, "Q": 8, "R": 7,
    "S": 6, "T": 5, "U": 4, "V": 3, "W": 1, "X": 3, "Y": 2, "Z": 0,
}
_FOREIGN_OLD_CODES = {"A": 0, "B": 1, "C": 2, "D": 3}
_TAIWAN_WEIGHTS = (8, 7, 6, 5, 4, 3, 2, 1, 1)
_LENGTH = 10


class IdentityError(ValueError):
    """Raised when an identity document number is malformed."""


def _upper_with_offsets(text: str) -> Iterator[tuple[int, str]]:
    """Upper-case each character on its own and yield it with its byte offset."""
    offset = 0
    for char in text:
        upper = char.upper()
        if len(upper) != 1:
            upper = char
        yield offset, upper
        offset += len(upper.encode("utf-8"))


def is_valid_passport_number(value: Any) -> str:
    """Return the passport number if its check digit is right; raise IdentityError otherwise."""
    if not isinstance(value, str):
        raise IdentityError("passport number must be a string")
    raw = value.encode("utf-8")
    if len(raw) != _LENGTH:
        raise IdentityError("passport number must be 10 characters long")
    total = 0
    for offset, char in _upper_with_offsets(value):
        if offset >= len(_PASSPORT_WEIGHTS):
            break
        total += _PASSPORT_CODES.get(char, 0) * _PASSPORT_WEIGHTS[offset]
    if (raw[9] - ord("0")) & 0xFF == total % 10:
        return value
    raise IdentityError("invalid passport number: check digit does not match")


def is_valid_taiwan_id(value: Any) -> str:
    """Return the ID if it is a valid Taiwan national or resident ID; raise IdentityError otherwise."""
    if not isinstance(value, str):
        raise IdentityError("the Taiwan ID must be a string")
    if len(value.encode("utf-8")) != _LENGTH:
        raise IdentityError("the Taiwan ID must be 10 characters long")
    total = 0
    for offset, char in _upper_with_offsets(value):
        if offset == 0:
            if char not in _TAIWAN_LOCATIONS:
                raise IdentityError("invalid first character in Taiwan ID")
            total += _TAIWAN_LOCATIONS[char]
            continue
        weight = _TAIWAN_WEIGHTS[offset - 1]
        if offset == 1:
            # The old resident format puts a sex code letter A-D here.
            if "A" <= char <= "D":
                total += _FOREIGN_OLD_CODES[char] * weight
                continue
        elif not "0" <= char <= "9":
            raise IdentityError("invalid character in Taiwan ID")
        total += (ord(char) - ord("0")) * weight
    if total % 10 == 0:
        return value
    raise IdentityError("invalid Taiwan ID: check digit does not match")


def is_valid_identity(value: Any) -> str:
    """Accept a valid Taiwan ID, otherwise require a valid passport number."""
    if not isinstance(value, str):
        raise IdentityError("identity must be a string")
    try:
        return is_valid_taiwan_id(value)
    except IdentityError:
        return is_valid_passport_number(value)