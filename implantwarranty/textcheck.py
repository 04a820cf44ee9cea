"""Checks and clean-up for free text entered by users."""

from __future__ import annotations

import re
import unicodedata

_EMAIL = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
_TAIWAN_MOBILE = re.compile(r"09[0-9]{8}")
_HTML_TAG = re.compile(r"<[^>]*>")
_SQL_CHARS = re.compile(r"[';\"\\]")
_MIN_PASSWORD_BYTES = 8


def validate_email(email: str) -> bool:
    """Return True when the text looks like an e-mail address."""
    return _EMAIL.fullmatch(email) is not None


def validate_taiwan_phone(phone: str) -> bool:
    """Return True for a Taiwan mobile number (09 and eight digits), ignoring spaces and hyphens."""
    compact = phone.replace(" ", "").replace("-", "")
    return _TAIWAN_MOBILE.fullmatch(compact) is not None


def _character_class(char: str) -> str | None:
    category = unicodedata.category(char)
    if category == "Lu":
        return "upper"
    if category == "Ll":
        return "lower"
    if category == "Nd":
        return "digit"
    if category[0] in ("P", "S"):
        return "special"
    return None


def validate_password(password: str) -> bool:
    """Require at least 8 bytes and three of: upper case, lower case, digits, symbols."""
    if len(password.encode("utf-8")) < _MIN_PASSWORD_BYTES:
        return False
    classes = {_character_class(char) for char in password}
    classes.discard(None)
    return len(classes) >= 3


def sanitize_string(text: str) -> str:
    """Strip HTML tags and quote-like characters, then surrounding whitespace."""
    text = _HTML_TAG.sub("", text)
    text = _SQL_CHARS.sub("", text)
    return text.strip()